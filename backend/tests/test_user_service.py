"""
Bars API Backend - User Service Unit Tests
===========================================

What:  Tests for password hashing, token generation and the account
       workflows, with a mocked AsyncSession.
"""

import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

from bars_api.exceptions import BadCredentialsError, BadParamsError
from bars_api.schemas.user import Credentials, PasswordChange
from bars_api.services.user_service import (
    UserService,
    generate_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_roundtrip(self):
        hashed = hash_password("hunter2")
        assert hashed != "hunter2"
        assert verify_password("hunter2", hashed)
        assert not verify_password("hunter3", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("hunter2", "not-a-bcrypt-hash") is False


class TestTokens:

    def test_token_is_hex_of_configured_length(self):
        token = generate_token()
        assert len(token) == 32  # 16 bytes, hex-encoded
        int(token, 16)

    def test_tokens_are_unique(self):
        assert generate_token() != generate_token()


class TestUserServiceSignUp:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_sign_up_hashes_password_and_normalizes_email(self, mock_db_session):
        creds = Credentials(
            email="  Ann@Example.com ", password="pw123", password_confirmation="pw123"
        )

        user = await self.service.sign_up(mock_db_session, creds)

        assert user.email == "ann@example.com"
        assert user.token is None
        assert verify_password("pw123", user.hashed_password)
        mock_db_session.add.assert_called_once_with(user)

    @pytest.mark.asyncio
    async def test_sign_up_confirmation_mismatch(self, mock_db_session):
        creds = Credentials(email="a@b.co", password="pw123", password_confirmation="pw124")

        with pytest.raises(BadParamsError):
            await self.service.sign_up(mock_db_session, creds)

        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_sign_up_empty_password(self, mock_db_session):
        creds = Credentials(email="a@b.co", password="", password_confirmation="")

        with pytest.raises(BadParamsError):
            await self.service.sign_up(mock_db_session, creds)


class TestUserServiceSignIn:

    def setup_method(self):
        self.service = UserService()

    @staticmethod
    def _returning(session, user):
        result = MagicMock()
        result.scalar_one_or_none.return_value = user
        session.execute.return_value = result

    @pytest.mark.asyncio
    async def test_sign_in_issues_token(self, mock_db_session):
        user = SimpleNamespace(id="u1", hashed_password=hash_password("pw123"), token=None)
        self._returning(mock_db_session, user)

        result = await self.service.sign_in(
            mock_db_session, Credentials(email="a@b.co", password="pw123")
        )

        assert result.token is not None
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sign_in_wrong_password(self, mock_db_session):
        user = SimpleNamespace(id="u1", hashed_password=hash_password("pw123"), token=None)
        self._returning(mock_db_session, user)

        with pytest.raises(BadCredentialsError):
            await self.service.sign_in(
                mock_db_session, Credentials(email="a@b.co", password="nope")
            )

        assert user.token is None

    @pytest.mark.asyncio
    async def test_sign_in_unknown_email(self, mock_db_session):
        self._returning(mock_db_session, None)

        with pytest.raises(BadCredentialsError):
            await self.service.sign_in(
                mock_db_session, Credentials(email="x@y.co", password="pw123")
            )


class TestUserServicePasswordAndSignOut:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_change_password(self, mock_db_session):
        user = SimpleNamespace(id="u1", hashed_password=hash_password("old-pw"), token="t")

        await self.service.change_password(
            mock_db_session, user, PasswordChange(old="old-pw", new="new-pw")
        )

        assert verify_password("new-pw", user.hashed_password)

    @pytest.mark.asyncio
    async def test_change_password_wrong_old(self, mock_db_session):
        original = hash_password("old-pw")
        user = SimpleNamespace(id="u1", hashed_password=original, token="t")

        with pytest.raises(BadCredentialsError):
            await self.service.change_password(
                mock_db_session, user, PasswordChange(old="guess", new="new-pw")
            )

        assert user.hashed_password == original

    @pytest.mark.asyncio
    async def test_change_password_empty_new(self, mock_db_session):
        user = SimpleNamespace(id="u1", hashed_password=hash_password("old-pw"), token="t")

        with pytest.raises(BadParamsError):
            await self.service.change_password(
                mock_db_session, user, PasswordChange(old="old-pw", new="")
            )

    @pytest.mark.asyncio
    async def test_sign_out_clears_token(self, mock_db_session):
        user = SimpleNamespace(id="u1", hashed_password="x", token="abc")

        await self.service.sign_out(mock_db_session, user)

        assert user.token is None
        mock_db_session.flush.assert_awaited_once()
