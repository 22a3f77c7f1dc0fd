"""Core domain models for the remotecli system.

These models represent the data flowing through one remote execution:
the context derived from the inbound request, the session produced by
authentication, the outcome of running a console command, and the
bodies written back to the caller.
"""

from __future__ import annotations

import enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class GatewayErrorKind(str, enum.Enum):
    """Pipeline failures surfaced by the remote execution gateway."""

    UNAUTHENTICATED = "unauthenticated"  # Bad or missing credentials
    UNAUTHORIZED = "unauthorized"  # Authenticated, but not a manager
    INVALID_INPUT = "invalid_input"  # Empty or oversized command


# ---------------------------------------------------------------------------
# Request / identity models
# ---------------------------------------------------------------------------


class RequestContext(BaseModel):
    """What the gateway knows about the caller before reading the body."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(description="Network origin of the caller")
    uri: str = Field(description="Target path of the request")
    headers: Mapping[str, str] = Field(
        default_factory=dict, description="Raw request headers, including credentials"
    )


class Session(BaseModel):
    """An authenticated principal.

    Built per request by the authenticator and dropped with it.
    """

    model_config = ConfigDict(frozen=True)

    alias: str = Field(description="Alias of the access token used to authenticate")
    manager: bool = Field(default=False, description="Whether the token grants manager access")

    def is_manager(self) -> bool:
        return self.manager


class AuthResult(BaseModel):
    """Either an authenticated session or the reason authentication failed."""

    model_config = ConfigDict(frozen=True)

    session: Session | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> AuthResult:
        if (self.session is None) == (self.error is None):
            raise ValueError("AuthResult needs exactly one of session and error")
        return self

    @classmethod
    def ok(cls, session: Session) -> AuthResult:
        return cls(session=session)

    @classmethod
    def err(cls, message: str) -> AuthResult:
        return cls(error=message)

    @property
    def is_ok(self) -> bool:
        return self.session is not None


class ExecutionOutcome(BaseModel):
    """Result of running one console command.

    Exactly one of ``payload`` and ``error`` is set. A failed command is
    still a normal outcome; it is reported to the caller with HTTP 200.
    """

    model_config = ConfigDict(frozen=True)

    payload: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> ExecutionOutcome:
        if (self.payload is None) == (self.error is None):
            raise ValueError("ExecutionOutcome needs exactly one of payload and error")
        return self

    @classmethod
    def ok(cls, payload: str) -> ExecutionOutcome:
        return cls(payload=payload)

    @classmethod
    def err(cls, message: str) -> ExecutionOutcome:
        return cls(error=message)

    @property
    def is_ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Response bodies
# ---------------------------------------------------------------------------


class RemoteExecutionResponse(BaseModel):
    """Body of a 200 response. Only the populated field is serialized."""

    success: bool = Field(description="Whether the command itself succeeded")
    data: str | None = Field(default=None, description="Command output on success")
    error: str | None = Field(default=None, description="Failure message on failure")

    @classmethod
    def from_outcome(cls, outcome: ExecutionOutcome) -> RemoteExecutionResponse:
        if outcome.is_ok:
            return cls(success=True, data=outcome.payload)
        return cls(success=False, error=outcome.error)

    def to_json(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


class ErrorResponse(BaseModel):
    """Body of a 400/401 response."""

    status: int = Field(description="HTTP status code")
    message: str = Field(description="Human readable reason")
