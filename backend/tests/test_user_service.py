"""
MemoPad Backend — User Service Unit Tests
===========================================

What:  Tests for UserService (signup, authenticate, edit_profile, delete_account).
How:   Mock DB session and a mocked PasswordService, so no database or bcrypt
       work is done. Query results are fed through `execute.return_value`.

What we test:
    ✅ Signup hashes the password and rejects a taken email
    ✅ Unique-constraint races surface as ConflictError
    ✅ Login distinguishes unknown email (404) from wrong password (401)
    ✅ Profile edit keeps omitted fields and always re-hashes
    ✅ Account deletion removes memos, then the user
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError

from app.exceptions import ConflictError, NotFoundError, UnauthorizedError
from app.models.user import User
from app.services.user_service import UserService


def _result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def _rowcount(count):
    result = MagicMock()
    result.rowcount = count
    return result


def _user(**overrides):
    fields = {"id": 1, "name": "A", "email": "a@x.com", "password": "hashed:pw"}
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def passwords():
    mock = MagicMock()
    mock.hash = AsyncMock(side_effect=lambda plaintext: f"hashed:{plaintext}")
    mock.verify = AsyncMock(side_effect=lambda plaintext, digest: digest == f"hashed:{plaintext}")
    return mock


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_stores_hash_not_plaintext(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(None)

        user = await service.signup(mock_db_session, name="A", email="a@x.com", password="pw")

        assert user.password == "hashed:pw"
        assert user.email == "a@x.com"
        mock_db_session.add.assert_called_once_with(user)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(_user())

        with pytest.raises(ConflictError) as exc_info:
            await service.signup(mock_db_session, name="B", email="a@x.com", password="pw")

        assert exc_info.value.message == "This email address is already in use."
        passwords.hash.assert_not_awaited()
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_signup_unique_race_is_conflict(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(None)
        mock_db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))

        with pytest.raises(ConflictError):
            await service.signup(mock_db_session, name="A", email="a@x.com", password="pw")


class TestAuthenticate:

    @pytest.mark.asyncio
    async def test_valid_credentials(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(_user())

        user = await service.authenticate(mock_db_session, email="a@x.com", password="pw")

        assert user.id == 1

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(None)

        with pytest.raises(NotFoundError) as exc_info:
            await service.authenticate(mock_db_session, email="nobody@x.com", password="pw")

        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(_user())

        with pytest.raises(UnauthorizedError) as exc_info:
            await service.authenticate(mock_db_session, email="a@x.com", password="nope")

        assert exc_info.value.message == "Invalid username or password."


class TestEditProfile:

    @pytest.mark.asyncio
    async def test_only_name_changes(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(_user())

        user = await service.edit_profile(
            mock_db_session, user_id=1, current_password="pw", new_name="B"
        )

        assert user.name == "B"
        assert user.email == "a@x.com"
        # Re-hashed with the current password when no new one is given
        passwords.hash.assert_awaited_once_with("pw")
        assert user.password == "hashed:pw"

    @pytest.mark.asyncio
    async def test_new_password_is_hashed(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(_user())

        user = await service.edit_profile(
            mock_db_session, user_id=1, current_password="pw", new_password="pw2"
        )

        assert user.password == "hashed:pw2"

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        stored = _user()
        mock_db_session.execute.return_value = _result(stored)

        with pytest.raises(UnauthorizedError) as exc_info:
            await service.edit_profile(
                mock_db_session, user_id=1, current_password="bad", new_name="B"
            )

        assert exc_info.value.message == "Invalid password"
        assert stored.name == "A"
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.return_value = _result(None)

        with pytest.raises(NotFoundError):
            await service.edit_profile(mock_db_session, user_id=99, current_password="pw")

    @pytest.mark.asyncio
    async def test_email_taken_by_another_user(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.side_effect = [
            _result(_user()),
            _result(_user(id=2, email="b@x.com")),
        ]

        with pytest.raises(ConflictError):
            await service.edit_profile(
                mock_db_session, user_id=1, current_password="pw", new_email="b@x.com"
            )


class TestDeleteAccount:

    @pytest.mark.asyncio
    async def test_deletes_memos_then_user(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.side_effect = [_rowcount(3), _rowcount(1)]

        removed = await service.delete_account(mock_db_session, user_id=1)

        assert removed == 3
        assert mock_db_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_db_session, passwords):
        service = UserService(passwords=passwords)
        mock_db_session.execute.side_effect = [_rowcount(0), _rowcount(0)]

        with pytest.raises(NotFoundError):
            await service.delete_account(mock_db_session, user_id=42)
