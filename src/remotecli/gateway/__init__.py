"""Remote execution gateway for remotecli.

Bridges an authenticated HTTP request into one console command. The
pipeline itself (``RemoteExecutionGateway``) is transport-neutral; the
FastAPI application in ``remotecli.gateway.server`` adapts it to HTTP.
"""

from remotecli.gateway.endpoint import (
    DEFAULT_MAX_COMMAND_LENGTH,
    GatewayResponse,
    InboundRequest,
    RemoteExecutionGateway,
    RequestContextFactory,
)

__all__ = [
    "DEFAULT_MAX_COMMAND_LENGTH",
    "GatewayResponse",
    "InboundRequest",
    "RemoteExecutionGateway",
    "RequestContextFactory",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy import for the FastAPI application factory."""
    if name == "create_app":
        from remotecli.gateway.server import create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
