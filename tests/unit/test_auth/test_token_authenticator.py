"""Tests for the Basic-auth TokenAuthenticator."""

from __future__ import annotations

import base64
from unittest.mock import patch

import pytest
from argon2.exceptions import VerifyMismatchError

from remotecli.auth.base import AuthenticationError, Authenticator
import remotecli.auth.token as token_module
from remotecli.auth.token import (
    INVALID_CREDENTIALS,
    MISSING_CREDENTIALS,
    UNSUPPORTED_METHOD,
    AccessToken,
    TokenAuthenticator,
    generate_token,
    hash_token,
)


class TestAuthenticatorInterface:
    def test_cannot_instantiate_abstract_class(self) -> None:
        with pytest.raises(TypeError):
            Authenticator()  # type: ignore[abstract]

    def test_authentication_error(self) -> None:
        error = AuthenticationError("broken store", alias="admin")
        assert str(error) == "broken store"
        assert error.alias == "admin"


class TestAccessToken:
    def test_empty_alias_rejected(self) -> None:
        with pytest.raises(AuthenticationError):
            AccessToken(alias="", token_hash="x")

    def test_colon_in_alias_rejected(self) -> None:
        with pytest.raises(AuthenticationError, match="':'"):
            AccessToken(alias="a:b", token_hash="x")

    def test_repr_hides_hash(self) -> None:
        token = AccessToken(alias="admin", token_hash="$argon2id$secret", manager=True)
        assert "argon2" not in repr(token)

    def test_duplicated_alias_rejected(self) -> None:
        with pytest.raises(AuthenticationError, match="Duplicated"):
            TokenAuthenticator([
                AccessToken(alias="admin", token_hash="x"),
                AccessToken(alias="admin", token_hash="y"),
            ])


class TestHeaderParsing:
    @pytest.mark.asyncio
    async def test_missing_header(self, token_authenticator: TokenAuthenticator) -> None:
        result = await token_authenticator.authenticate_by_header({})
        assert not result.is_ok
        assert result.error == MISSING_CREDENTIALS

    @pytest.mark.asyncio
    async def test_empty_header(self, token_authenticator: TokenAuthenticator) -> None:
        result = await token_authenticator.authenticate_by_header({"Authorization": ""})
        assert result.error == MISSING_CREDENTIALS

    @pytest.mark.asyncio
    async def test_bearer_is_unsupported(self, token_authenticator: TokenAuthenticator) -> None:
        result = await token_authenticator.authenticate_by_header({"Authorization": "Bearer abc"})
        assert result.error == UNSUPPORTED_METHOD

    @pytest.mark.asyncio
    async def test_invalid_base64(self, token_authenticator: TokenAuthenticator) -> None:
        result = await token_authenticator.authenticate_by_header({"Authorization": "Basic !!!"})
        assert result.error == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_missing_separator(self, token_authenticator: TokenAuthenticator) -> None:
        encoded = base64.b64encode(b"admin").decode()
        result = await token_authenticator.authenticate_by_header({"Authorization": f"Basic {encoded}"})
        assert result.error == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_lowercase_scheme(
        self, token_authenticator: TokenAuthenticator, manager_headers: dict[str, str],
    ) -> None:
        credentials = manager_headers["Authorization"].split(" ", 1)[1]
        result = await token_authenticator.authenticate_by_header({"Authorization": f"basic {credentials}"})
        assert result.is_ok
        assert result.session.alias == "admin"

    @pytest.mark.asyncio
    async def test_lowercase_header_name(
        self, token_authenticator: TokenAuthenticator, manager_headers: dict[str, str],
    ) -> None:
        headers = {"authorization": manager_headers["Authorization"]}
        result = await token_authenticator.authenticate_by_header(headers)
        assert result.is_ok


class TestVerification:
    @pytest.mark.asyncio
    async def test_manager_token(
        self, token_authenticator: TokenAuthenticator, manager_headers: dict[str, str],
    ) -> None:
        result = await token_authenticator.authenticate_by_header(manager_headers)
        assert result.is_ok
        assert result.session.alias == "admin"
        assert result.session.is_manager()

    @pytest.mark.asyncio
    async def test_regular_token(
        self, token_authenticator: TokenAuthenticator, user_headers: dict[str, str],
    ) -> None:
        result = await token_authenticator.authenticate_by_header(user_headers)
        assert result.is_ok
        assert not result.session.is_manager()

    @pytest.mark.asyncio
    async def test_wrong_secret(self, token_authenticator: TokenAuthenticator, auth_header) -> None:
        result = await token_authenticator.authenticate_by_header(
            {"Authorization": auth_header("admin", "wrong")}
        )
        assert result.error == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_unknown_alias_same_message(
        self, token_authenticator: TokenAuthenticator, manager_token: tuple[str, str], auth_header,
    ) -> None:
        result = await token_authenticator.authenticate_by_header(
            {"Authorization": auth_header("ghost", manager_token[0])}
        )
        assert result.error == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_unknown_alias_still_verifies_a_hash(
        self, token_authenticator: TokenAuthenticator,
    ) -> None:
        with patch.object(
            type(token_module._hasher), "verify", side_effect=VerifyMismatchError
        ) as verify:
            result = await token_authenticator.authenticate("ghost", "whatever")
        assert result.error == INVALID_CREDENTIALS
        verify.assert_called_once_with(token_module._UNKNOWN_ALIAS_HASH, "whatever")

    @pytest.mark.asyncio
    async def test_corrupt_stored_hash(self) -> None:
        authenticator = TokenAuthenticator([AccessToken(alias="admin", token_hash="not-a-hash")])
        result = await authenticator.authenticate("admin", "secret")
        assert result.error == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_secret_containing_colon(self) -> None:
        authenticator = TokenAuthenticator([
            AccessToken(alias="admin", token_hash=hash_token("pa:ss"), manager=True)
        ])
        encoded = base64.b64encode(b"admin:pa:ss").decode()
        result = await authenticator.authenticate_by_header({"Authorization": f"Basic {encoded}"})
        assert result.is_ok


class TestGenerateToken:
    def test_generated_tokens_are_unique(self) -> None:
        first, _ = generate_token()
        second, _ = generate_token()
        assert first != second
        assert len(first) >= 40

    @pytest.mark.asyncio
    async def test_generated_hash_verifies(self) -> None:
        token, token_hash = generate_token()
        authenticator = TokenAuthenticator([AccessToken(alias="ci", token_hash=token_hash)])
        assert (await authenticator.authenticate("ci", token)).is_ok
        assert authenticator.aliases == ["ci"]
