"""HTTP client for a remote remotecli server.

Implements ``CommandExecutor`` by posting the command to a server's
execution endpoint, so a remote console can be driven exactly like a
local one.
"""

from __future__ import annotations

import logging

import httpx

from remotecli.console.base import CommandExecutor
from remotecli.domain.models import ExecutionOutcome

logger = logging.getLogger(__name__)


class HttpRemoteExecutor(CommandExecutor):
    """Sends commands to a remotecli server over HTTP."""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        alias: str = "",
        token: str = "",
        timeout: float = 30.0,
        execute_path: str = "/api/execute",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = httpx.BasicAuth(alias, token) if alias else None
        self._timeout = timeout
        self._execute_path = execute_path
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the HTTP client and verify server connectivity."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            auth=self._auth,
        )
        try:
            resp = await self._client.get("/health")
            resp.raise_for_status()
            logger.info("Connected to server at %s", self._base_url)
        except Exception as e:
            await self._client.aclose()
            self._client = None
            raise RemoteExecutionError(f"Failed to connect to server: {e}") from e

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from server")

    async def execute(self, command: str) -> ExecutionOutcome:
        """Run a command remotely.

        Raises:
            RemoteExecutionError: If the request is rejected (400/401) or
                the server cannot be reached.
        """
        if self._client is None:
            raise RemoteExecutionError("Not connected to server")
        try:
            resp = await self._client.post(
                self._execute_path,
                content=command.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
            )
        except httpx.HTTPError as e:
            raise RemoteExecutionError(f"HTTP request to {self._execute_path} failed: {e}") from e

        if resp.status_code != 200:
            raise RemoteExecutionError(_error_message(resp), status_code=resp.status_code)

        data = resp.json()
        logger.debug("Executed %r (success=%s)", command[:50], data.get("success"))
        if data.get("success"):
            return ExecutionOutcome.ok(data.get("data", ""))
        return ExecutionOutcome.err(data.get("error", ""))

    async def __aenter__(self) -> HttpRemoteExecutor:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


def _error_message(resp: httpx.Response) -> str:
    try:
        return str(resp.json()["message"])
    except (ValueError, KeyError, TypeError):
        return f"Server returned HTTP {resp.status_code}"


class RemoteExecutionError(Exception):
    """Raised when a remote execution request is rejected or fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
