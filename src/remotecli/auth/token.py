"""Access token authenticator.

Callers send ``Authorization: Basic base64(alias:token)``. Tokens are
stored only as Argon2 hashes, keyed by alias.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import secrets
from typing import Iterable, Mapping

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from remotecli.auth.base import AuthenticationError, Authenticator
from remotecli.domain.models import AuthResult, Session

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BASIC_SCHEME = "basic"

MISSING_CREDENTIALS = "Authorization credentials are not specified"
UNSUPPORTED_METHOD = "Unsupported auth method"
INVALID_CREDENTIALS = "Invalid authorization credentials"

TOKEN_BYTES = 36

_hasher = PasswordHasher()

# Verified against for unknown aliases, so they cost as much as a wrong token.
_UNKNOWN_ALIAS_HASH = _hasher.hash(secrets.token_urlsafe(TOKEN_BYTES))


class AccessToken:
    """A stored token: alias, Argon2 hash of the secret, and permissions."""

    __slots__ = ("alias", "token_hash", "manager")

    def __init__(self, alias: str, token_hash: str, manager: bool = False) -> None:
        if not alias:
            raise AuthenticationError("Token alias must not be empty")
        if ":" in alias:
            raise AuthenticationError(f"Token alias must not contain ':' ({alias})", alias=alias)
        self.alias = alias
        self.token_hash = token_hash
        self.manager = manager

    def __repr__(self) -> str:
        return f"AccessToken(alias={self.alias!r}, manager={self.manager})"


def hash_token(token: str) -> str:
    """Hash a raw token for storage in the configuration file."""
    return _hasher.hash(token)


def generate_token() -> tuple[str, str]:
    """Create a new random token.

    Returns:
        (token, token_hash). Only the hash should be stored; the token is
        shown to its owner once.
    """
    token = secrets.token_urlsafe(TOKEN_BYTES)
    return token, hash_token(token)


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


class TokenAuthenticator(Authenticator):
    """Authenticates Basic credentials against a set of access tokens."""

    def __init__(self, tokens: Iterable[AccessToken] = ()) -> None:
        self._tokens: dict[str, AccessToken] = {}
        for token in tokens:
            if token.alias in self._tokens:
                raise AuthenticationError(f"Duplicated token alias: {token.alias}", alias=token.alias)
            self._tokens[token.alias] = token
        logger.info("Loaded %d access token(s)", len(self._tokens))

    @property
    def aliases(self) -> list[str]:
        return sorted(self._tokens)

    async def authenticate_by_header(self, headers: Mapping[str, str]) -> AuthResult:
        authorization = _header(headers, AUTHORIZATION_HEADER)
        if not authorization:
            return AuthResult.err(MISSING_CREDENTIALS)

        scheme, _, credentials = authorization.strip().partition(" ")
        if scheme.lower() != BASIC_SCHEME:
            return AuthResult.err(UNSUPPORTED_METHOD)

        credentials = credentials.strip()
        try:
            decoded = base64.b64decode(credentials, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return AuthResult.err(INVALID_CREDENTIALS)

        alias, separator, secret = decoded.partition(":")
        if not separator or not alias or not secret:
            return AuthResult.err(INVALID_CREDENTIALS)

        return await self.authenticate(alias, secret)

    async def authenticate(self, alias: str, secret: str) -> AuthResult:
        """Check an alias/secret pair. Hash verification runs off the event loop."""
        token = self._tokens.get(alias)
        loop = asyncio.get_running_loop()

        if token is None:
            logger.debug("Unknown token alias: %s", alias)
            await loop.run_in_executor(None, self._verify, alias, _UNKNOWN_ALIAS_HASH, secret)
            return AuthResult.err(INVALID_CREDENTIALS)

        verified = await loop.run_in_executor(None, self._verify, token.alias, token.token_hash, secret)
        if not verified:
            return AuthResult.err(INVALID_CREDENTIALS)

        return AuthResult.ok(Session(alias=token.alias, manager=token.manager))

    @staticmethod
    def _verify(alias: str, token_hash: str, secret: str) -> bool:
        try:
            return _hasher.verify(token_hash, secret)
        except VerifyMismatchError:
            return False
        except InvalidHashError:
            logger.error("Stored hash for token %s is not a valid Argon2 hash", alias)
            return False
        except VerificationError as e:
            logger.warning("Token verification failed for %s: %s", alias, e)
            return False
