"""Domain models for remotecli.

This package contains the data structures exchanged between the gateway,
the authenticator and the console. All models use Pydantic v2 for
validation and serialization.
"""

from remotecli.domain.models import (
    AuthResult,
    ErrorResponse,
    ExecutionOutcome,
    GatewayErrorKind,
    RemoteExecutionResponse,
    RequestContext,
    Session,
)

__all__ = [
    "AuthResult",
    "ErrorResponse",
    "ExecutionOutcome",
    "GatewayErrorKind",
    "RemoteExecutionResponse",
    "RequestContext",
    "Session",
]
