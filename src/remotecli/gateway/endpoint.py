"""Remote execution gateway.

Mediates one inbound request into one console command execution::

    context -> intent log -> authenticate -> authorize
            -> read + validate command -> audit log -> execute -> respond

Every check is a terminal short-circuit. Pipeline failures become 400/401
error responses. A command that runs and fails is still answered with 200,
carrying the console's own failure message.

The command body is only read once the caller is known to be a manager,
so nothing from an unauthorized request ever reaches the log or the
console.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Mapping

from pydantic import BaseModel, ConfigDict

from remotecli.auth.base import Authenticator
from remotecli.console.base import CommandExecutor
from remotecli.domain.models import (
    ErrorResponse,
    GatewayErrorKind,
    RemoteExecutionResponse,
    RequestContext,
)

AUDIT_LOGGER_NAME = "remotecli.audit"

audit_log = logging.getLogger(AUDIT_LOGGER_NAME)

DEFAULT_MAX_COMMAND_LENGTH = 1024

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401


class InboundRequest(ABC):
    """Transport-neutral view of an inbound request.

    The body is exposed through ``read_body()`` so the gateway decides
    when (and whether) it is read.
    """

    @property
    @abstractmethod
    def headers(self) -> Mapping[str, str]:
        ...

    @property
    @abstractmethod
    def remote_address(self) -> str:
        ...

    @property
    @abstractmethod
    def path(self) -> str:
        ...

    @abstractmethod
    async def read_body(self) -> str | None:
        """Return the request body as text, or None if there is none."""
        ...


class RequestContextFactory:
    """Derives a RequestContext from an inbound request.

    If ``forwarded_ip_header`` is set (e.g. ``X-Forwarded-For`` behind a
    reverse proxy), the first address it lists is used as the caller's
    origin instead of the peer address.
    """

    def __init__(self, forwarded_ip_header: str | None = None) -> None:
        self._forwarded_ip_header = forwarded_ip_header

    def create(self, request: InboundRequest) -> RequestContext:
        headers = dict(request.headers)
        return RequestContext(
            address=self._address(request, headers),
            uri=request.path,
            headers=headers,
        )

    def _address(self, request: InboundRequest, headers: Mapping[str, str]) -> str:
        if self._forwarded_ip_header:
            wanted = self._forwarded_ip_header.lower()
            for name, value in headers.items():
                if name.lower() == wanted and value.strip():
                    return value.split(",")[0].strip()
        return request.remote_address


class GatewayResponse(BaseModel):
    """Status code and body produced for one request."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: RemoteExecutionResponse | ErrorResponse
    error_kind: GatewayErrorKind | None = None

    @classmethod
    def error(cls, status_code: int, kind: GatewayErrorKind, message: str) -> GatewayResponse:
        return cls(
            status_code=status_code,
            body=ErrorResponse(status=status_code, message=message),
            error_kind=kind,
        )

    @property
    def is_error(self) -> bool:
        return self.error_kind is not None

    def to_json(self) -> dict[str, object]:
        if isinstance(self.body, RemoteExecutionResponse):
            return self.body.to_json()
        return self.body.model_dump()


class RemoteExecutionGateway:
    """Gatekeeper between a network request and the console.

    Holds no per-request state, so one instance serves concurrent
    requests. Concurrency of the executor itself is the executor's
    business.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        executor: CommandExecutor,
        max_command_length: int = DEFAULT_MAX_COMMAND_LENGTH,
        context_factory: RequestContextFactory | None = None,
        audit_logger: logging.Logger | None = None,
    ) -> None:
        if max_command_length <= 0:
            raise ValueError(f"max_command_length must be positive, got {max_command_length}")
        self._authenticator = authenticator
        self._executor = executor
        self._max_command_length = max_command_length
        self._context_factory = context_factory or RequestContextFactory()
        self._audit = audit_logger or audit_log

    @property
    def max_command_length(self) -> int:
        return self._max_command_length

    async def handle(self, request: InboundRequest) -> GatewayResponse:
        context = self._context_factory.create(request)
        self._audit.info("REMOTE EXECUTION %s from %s", context.uri, context.address)

        auth_result = await self._authenticator.authenticate_by_header(context.headers)
        if not auth_result.is_ok:
            return GatewayResponse.error(
                HTTP_UNAUTHORIZED,
                GatewayErrorKind.UNAUTHENTICATED,
                auth_result.error or "Unauthenticated",
            )

        session = auth_result.session
        if not session.is_manager():
            return GatewayResponse.error(
                HTTP_UNAUTHORIZED,
                GatewayErrorKind.UNAUTHORIZED,
                "Authenticated user is not a manager",
            )

        command = await request.read_body()
        if not command:
            return GatewayResponse.error(
                HTTP_BAD_REQUEST, GatewayErrorKind.INVALID_INPUT, "Missing command"
            )

        if len(command) > self._max_command_length:
            return GatewayResponse.error(
                HTTP_BAD_REQUEST,
                GatewayErrorKind.INVALID_INPUT,
                f"The given command exceeds allowed length "
                f"({len(command)} > {self._max_command_length})",
            )

        self._audit.info("%s (%s) requested command: %s", session.alias, context.address, command)

        outcome = await self._executor.execute(command)
        return GatewayResponse(
            status_code=HTTP_OK,
            body=RemoteExecutionResponse.from_outcome(outcome),
        )
