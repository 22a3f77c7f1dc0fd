"""Authentication module for remotecli.

Public API:
    Authenticator -- Abstract base class
    AuthenticationError -- Raised for an unusable credential store
    TokenAuthenticator -- Basic-auth authenticator over Argon2-hashed tokens
"""

from remotecli.auth.base import AuthenticationError, Authenticator

__all__ = ["Authenticator", "AuthenticationError", "TokenAuthenticator", "AccessToken"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "TokenAuthenticator":
        from remotecli.auth.token import TokenAuthenticator
        return TokenAuthenticator
    if name == "AccessToken":
        from remotecli.auth.token import AccessToken
        return AccessToken
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
