"""Shared test fixtures for the remotecli test suite.

Provides sessions, access tokens (hashing is slow, so tokens are
generated once per session), and mock collaborators for the gateway.
"""

from __future__ import annotations

import base64
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from remotecli.auth.base import Authenticator
from remotecli.auth.token import AccessToken, TokenAuthenticator, generate_token
from remotecli.console.base import CommandExecutor
from remotecli.domain.models import AuthResult, ExecutionOutcome, Session


def basic_auth(alias: str, token: str) -> str:
    """Build an Authorization header value for Basic credentials."""
    raw = f"{alias}:{token}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


# ---------------------------------------------------------------------------
# Session Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def manager_session() -> Session:
    """A session with manager access."""
    return Session(alias="admin", manager=True)


@pytest.fixture
def user_session() -> Session:
    """A session without manager access."""
    return Session(alias="reader", manager=False)


# ---------------------------------------------------------------------------
# Token Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def manager_token() -> tuple[str, str]:
    """(token, hash) for the 'admin' manager token."""
    return generate_token()


@pytest.fixture(scope="session")
def user_token() -> tuple[str, str]:
    """(token, hash) for the 'reader' non-manager token."""
    return generate_token()


@pytest.fixture
def token_authenticator(
    manager_token: tuple[str, str], user_token: tuple[str, str]
) -> TokenAuthenticator:
    """A TokenAuthenticator knowing 'admin' (manager) and 'reader'."""
    return TokenAuthenticator([
        AccessToken(alias="admin", token_hash=manager_token[1], manager=True),
        AccessToken(alias="reader", token_hash=user_token[1], manager=False),
    ])


@pytest.fixture
def auth_header() -> Callable[[str, str], str]:
    """The Basic Authorization header builder."""
    return basic_auth


@pytest.fixture
def manager_headers(manager_token: tuple[str, str]) -> dict[str, str]:
    return {"Authorization": basic_auth("admin", manager_token[0])}


@pytest.fixture
def user_headers(user_token: tuple[str, str]) -> dict[str, str]:
    return {"Authorization": basic_auth("reader", user_token[0])}


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_authenticator(manager_session: Session) -> AsyncMock:
    """An Authenticator that accepts everyone as a manager by default."""
    mock = AsyncMock(spec=Authenticator)
    mock.authenticate_by_header.return_value = AuthResult.ok(manager_session)
    return mock


@pytest.fixture
def mock_executor() -> AsyncMock:
    """A CommandExecutor that succeeds with a fixed payload by default."""
    mock = AsyncMock(spec=CommandExecutor)
    mock.execute.return_value = ExecutionOutcome.ok("Available commands: ...")
    return mock
