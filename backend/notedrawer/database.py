"""
NoteDrawer Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   A `Database` handle owns the engine and session factory. The
       application factory attaches one handle to `app.state.database`;
       the `get_db_session` dependency opens a session per request and
       rolls back on error. Services commit their own writes, so a failed
       commit surfaces as DatabaseError before the response is built.
When:  The handle is built once at startup; sessions are created per-request.

Connection Pooling:
    pool_size / max_overflow come from settings and apply to server
    databases (PostgreSQL). SQLite URLs, used by the test suite, keep
    SQLAlchemy's default pool for the dialect.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notedrawer.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register with this metadata, which Alembic reads for migrations
    and the test suite uses to create tables.
    """
    pass


class Database:
    """
    Owns the async engine and session factory for one store.

    Creating the handle does not open a connection; `check_connection`
    does, and is called once at startup so an unreachable store is fatal.
    """

    def __init__(self, url: str, settings: Settings):
        engine_kwargs = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            "echo": settings.log_level == "DEBUG",
        }
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False keeps attributes readable after
        # a service commits, while the response is being serialized
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, settings)

    async def check_connection(self) -> None:
        """Run a trivial query; raises whatever the driver raises."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        """Create every mapped table. Used by tests; production runs Alembic."""
        # Import models so they are registered on Base.metadata
        from notedrawer.models import account, note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the handle on `app.state.database`
        2. Yields it to the route handler
        3. On error: rolls back and re-raises for the global error handlers
        4. Always: closes the session (returns connection to pool)

    Nothing is committed here; write paths in the services commit
    explicitly so a failed commit is reported as a DatabaseError.
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
