"""Client module for remotecli.

Public API:
    HttpRemoteExecutor -- CommandExecutor backed by a remote server
    RemoteExecutionError -- Raised for rejected or failed requests
"""

__all__ = ["HttpRemoteExecutor", "RemoteExecutionError"]


def __getattr__(name: str) -> type:
    """Lazy import for the httpx-based client."""
    if name == "HttpRemoteExecutor":
        from remotecli.client.http_client import HttpRemoteExecutor
        return HttpRemoteExecutor
    if name == "RemoteExecutionError":
        from remotecli.client.http_client import RemoteExecutionError
        return RemoteExecutionError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
