"""
NoteDrawer Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test that touches the store gets its own SQLite file (aiosqlite)
       with all tables created; HTTP tests talk to a fresh app through
       httpx's ASGITransport.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:     Settings pointing at a per-test SQLite file
    ├── database:          Database handle with tables created
    ├── db_session:        AsyncSession on that database
    ├── token_service:     TokenService with the test secret
    ├── password_hasher:   PasswordHasher at the lowest bcrypt cost
    ├── mock_db_session:   AsyncMock session for pure unit tests
    └── test_client:       HTTPX AsyncClient bound to a fresh app
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set before any application import reads the environment
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-not-real")
os.environ["LOG_LEVEL"] = "WARNING"

from notedrawer.config import Settings  # noqa: E402
from notedrawer.database import Database  # noqa: E402
from notedrawer.services.password_hasher import PasswordHasher  # noqa: E402
from notedrawer.services.token_service import TokenService  # noqa: E402

TEST_SECRET = "test-secret-not-real"


# ══════════════════════════════════════════════════════════════════════════
# Settings & Services
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notedrawer_test.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def token_service(test_settings) -> TokenService:
    return TokenService.from_settings(test_settings)


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(test_settings) -> AsyncGenerator[Database, None]:
    db = Database.from_settings(test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """A session on the test database; uncommitted work is discarded."""
    async with database.session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(test_settings, database) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to a fresh app wired to the test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from notedrawer.main import create_app

    app = create_app(settings=test_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def bearer():
    """Builds the Authorization header for a token."""

    def _bearer(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _bearer
