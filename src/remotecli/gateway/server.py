"""FastAPI HTTP server for remote command execution.

Endpoints:

    GET  /health        -> {"status": "ok"}
    POST /api/execute   <- raw command text, Basic auth
                        -> 200 {"success": true, "data": "..."}
                           200 {"success": false, "error": "..."}
                           400/401 {"status": <code>, "message": "..."}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from remotecli.auth.base import Authenticator
from remotecli.console.base import CommandExecutor
from remotecli.console.console import create_console
from remotecli.console.stats import StatsService
from remotecli.domain.models import ErrorResponse, RemoteExecutionResponse
from remotecli.gateway.endpoint import (
    DEFAULT_MAX_COMMAND_LENGTH,
    InboundRequest,
    RemoteExecutionGateway,
    RequestContextFactory,
)

if TYPE_CHECKING:
    from remotecli.config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_EXECUTE_PATH = "/api/execute"


class HealthResponse(BaseModel):
    status: str = "ok"


class StarletteInboundRequest(InboundRequest):
    """Adapts a Starlette/FastAPI request to the gateway's request view."""

    def __init__(self, request: Request) -> None:
        self._request = request

    @property
    def headers(self) -> Mapping[str, str]:
        return self._request.headers

    @property
    def remote_address(self) -> str:
        client = self._request.client
        return client.host if client else "unknown"

    @property
    def path(self) -> str:
        return self._request.url.path

    async def read_body(self) -> str | None:
        raw = await self._request.body()
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    authenticator: Authenticator,
    executor: CommandExecutor | None = None,
    stats: StatsService | None = None,
    max_command_length: int = DEFAULT_MAX_COMMAND_LENGTH,
    execute_path: str = DEFAULT_EXECUTE_PATH,
    forwarded_ip_header: str | None = None,
) -> FastAPI:
    """Create the remote execution application.

    Args:
        authenticator: Resolves request credentials into a session.
        executor: Command executor. Defaults to the built-in console.
        stats: Counter of requests served by the routes below. A new
               one is created if not given.
        max_command_length: Longest accepted command, in characters.
        execute_path: Route of the execution endpoint.
        forwarded_ip_header: Header carrying the real client address
                             when running behind a proxy.
    """
    stats = stats if stats is not None else StatsService()
    if executor is None:
        executor = create_console(stats)

    gateway = RemoteExecutionGateway(
        authenticator=authenticator,
        executor=executor,
        max_command_length=max_command_length,
        context_factory=RequestContextFactory(forwarded_ip_header),
    )

    app = FastAPI(
        title="remotecli",
        description="Remote execution of administrative console commands",
        version="0.1.0",
    )
    app.state.gateway = gateway
    app.state.stats = stats

    @app.get("/health")
    async def health_check(request: Request) -> HealthResponse:
        app.state.stats.record(request.url.path)
        return HealthResponse(status="ok")

    @app.post(
        execute_path,
        summary="Remote command execution",
        description=(
            "Execute a console command sent as the raw request body. "
            "Available commands can be listed with the 'help' command."
        ),
        tags=["Cli"],
        responses={
            200: {"model": RemoteExecutionResponse, "description": "Status of the executed command"},
            400: {
                "model": ErrorResponse,
                "description": f"Invalid command (0 < command length <= {max_command_length})",
            },
            401: {"model": ErrorResponse, "description": "Missing credentials or not a manager"},
        },
    )
    async def remote_execution(request: Request) -> JSONResponse:
        app.state.stats.record(request.url.path)
        gw: RemoteExecutionGateway = app.state.gateway
        response = await gw.handle(StarletteInboundRequest(request))
        return JSONResponse(status_code=response.status_code, content=response.to_json())

    return app


# ---------------------------------------------------------------------------
# Standalone entry point
# ---------------------------------------------------------------------------

def serve(settings: Settings) -> None:
    """Build the application from settings and run it with uvicorn."""
    from remotecli.config.settings import build_authenticator

    srv = settings.server
    app = create_app(
        authenticator=build_authenticator(settings.auth),
        max_command_length=srv.max_command_length,
        execute_path=srv.execute_path,
        forwarded_ip_header=srv.forwarded_ip_header,
    )
    uvicorn.run(app, host=srv.host, port=srv.port)


def main() -> None:
    """Entry point for running the server standalone."""
    from remotecli.config.settings import load_settings
    from remotecli.utils.logging import setup_logging

    settings = load_settings()
    setup_logging(settings.logging)
    serve(settings)


if __name__ == "__main__":
    main()
