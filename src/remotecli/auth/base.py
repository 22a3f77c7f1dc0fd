"""Abstract base class for request authentication.

The gateway only knows this interface. Any transport can hand it a
header mapping, and any credential store can sit behind it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Mapping

from remotecli.domain.models import AuthResult

logger = logging.getLogger(__name__)


class Authenticator(ABC):
    """Turns credential material from request headers into a session.

    Example usage::

        result = await authenticator.authenticate_by_header(headers)
        if result.is_ok:
            print(result.session.alias, result.session.is_manager())
        else:
            print(result.error)
    """

    @abstractmethod
    async def authenticate_by_header(self, headers: Mapping[str, str]) -> AuthResult:
        """Authenticate the caller from its request headers.

        Expected failures (missing, malformed or wrong credentials) are
        returned as ``AuthResult.err(...)``, never raised.

        Args:
            headers: Request headers. Lookups must not depend on the
                     case of the header name.

        Returns:
            AuthResult holding either the Session or an error message.
        """
        ...


class AuthenticationError(Exception):
    """Raised when the credential store itself is unusable."""

    def __init__(self, message: str, alias: str = "") -> None:
        super().__init__(message)
        self.alias = alias
