"""
NoteDrawer Backend — Account Service Tests
===========================================

What:  Registration and login for users and drawers against a real
       (SQLite) session, plus mock-session tests for store failures.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError

from notedrawer.exceptions import DatabaseError, DuplicateError, InvalidCredentialsError
from notedrawer.models.account import User
from notedrawer.services.account_service import AccountService


@pytest.fixture
def accounts(token_service, password_hasher) -> AccountService:
    return AccountService(tokens=token_service, hasher=password_hasher)


class TestUserAccounts:
    """Tests for register_user / login_user."""

    @pytest.mark.asyncio
    async def test_register_returns_token_for_new_user(self, accounts, db_session, token_service):
        token, user = await accounts.register_user(db_session, "a@x.com", "pw1", username="alice")

        assert user.id is not None
        assert user.username == "alice"
        principal = token_service.verify(token)
        assert principal.type == "user"
        assert principal.id == user.id

    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self, accounts, db_session, password_hasher):
        await accounts.register_user(db_session, "a@x.com", "pw1")

        result = await db_session.execute(select(User).where(User.email == "a@x.com"))
        stored = result.scalar_one()
        assert stored.password_hash != "pw1"
        assert password_hasher.verify(stored.password_hash, "pw1")

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, accounts, db_session):
        await accounts.register_user(db_session, "a@x.com", "pw1")

        with pytest.raises(DuplicateError) as exc_info:
            await accounts.register_user(db_session, "a@x.com", "pw2")
        assert exc_info.value.message == "Email already in use"

    @pytest.mark.asyncio
    async def test_login_token_matches_stored_account(self, accounts, db_session, token_service):
        _, registered = await accounts.register_user(db_session, "a@x.com", "pw1")

        token, user = await accounts.login_user(db_session, "a@x.com", "pw1")

        assert user.id == registered.id
        principal = token_service.verify(token)
        assert (principal.type, principal.id) == ("user", registered.id)

    @pytest.mark.asyncio
    async def test_wrong_password_is_invalid_credentials(self, accounts, db_session):
        await accounts.register_user(db_session, "a@x.com", "pw1")

        with pytest.raises(InvalidCredentialsError):
            await accounts.login_user(db_session, "a@x.com", "wrong")

    @pytest.mark.asyncio
    async def test_unknown_email_gives_same_error(self, accounts, db_session):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await accounts.login_user(db_session, "nobody@x.com", "pw1")
        assert exc_info.value.message == "Invalid credentials"


class TestDrawers:
    """Tests for create_drawer / login_drawer."""

    @pytest.mark.asyncio
    async def test_create_drawer_issues_drawer_token(self, accounts, db_session, token_service):
        token, drawer = await accounts.create_drawer(db_session, "team1", "pw")

        assert drawer.drawer_name == "team1"
        principal = token_service.verify(token)
        assert (principal.type, principal.id) == ("drawer", drawer.id)

    @pytest.mark.asyncio
    async def test_duplicate_drawer_name_rejected(self, accounts, db_session):
        await accounts.create_drawer(db_session, "team1", "pw")

        with pytest.raises(DuplicateError) as exc_info:
            await accounts.create_drawer(db_session, "team1", "other")
        assert exc_info.value.message == "Drawer name taken"

    @pytest.mark.asyncio
    async def test_drawer_name_may_equal_a_user_email(self, accounts, db_session):
        """Users and drawers are separate namespaces."""
        await accounts.register_user(db_session, "shared", "pw")
        _, drawer = await accounts.create_drawer(db_session, "shared", "pw")
        assert drawer.id is not None

    @pytest.mark.asyncio
    async def test_login_drawer(self, accounts, db_session, token_service):
        _, created = await accounts.create_drawer(db_session, "team1", "pw")

        token, drawer = await accounts.login_drawer(db_session, "team1", "pw")

        assert drawer.id == created.id
        assert token_service.verify(token).type == "drawer"

    @pytest.mark.asyncio
    async def test_login_drawer_wrong_password(self, accounts, db_session):
        await accounts.create_drawer(db_session, "team1", "pw")

        with pytest.raises(InvalidCredentialsError):
            await accounts.login_drawer(db_session, "team1", "nope")

    @pytest.mark.asyncio
    async def test_login_unknown_drawer(self, accounts, db_session):
        with pytest.raises(InvalidCredentialsError):
            await accounts.login_drawer(db_session, "missing", "pw")


class TestStoreFailures:
    """Store errors surface as DuplicateError or DatabaseError."""

    @pytest.mark.asyncio
    async def test_unique_violation_on_insert_is_duplicate(self, accounts, mock_db_session):
        """A concurrent registration that wins the unique constraint."""
        lookup = MagicMock()
        lookup.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = lookup
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed"))
        )

        with pytest.raises(DuplicateError):
            await accounts.register_user(mock_db_session, "a@x.com", "pw1")

    @pytest.mark.asyncio
    async def test_lookup_failure_is_database_error(self, accounts, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await accounts.login_user(mock_db_session, "a@x.com", "pw1")
