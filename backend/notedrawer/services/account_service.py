"""
NoteDrawer Backend — Account Service
=====================================

What:  Registration and login for both principal kinds: users (by email)
       and drawers (by drawer name).
How:   Looks up the identity, hashes/verifies the password through
       PasswordHasher, persists new rows, and issues a token through
       TokenService so a session starts immediately.
Who:   Called by the /api/register, /api/login and /api/drawers routes.

Error Handling Strategy:
    - Identity already taken          → DuplicateError (400)
    - Unknown identity / bad password → InvalidCredentialsError (400), the
      same message either way
    - Unexpected store failure        → DatabaseError (500), including a
      failed commit (writes commit before returning)
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notedrawer.exceptions import (
    DatabaseError,
    DuplicateError,
    InvalidCredentialsError,
)
from notedrawer.models.account import Drawer, User
from notedrawer.services.password_hasher import PasswordHasher
from notedrawer.services.token_service import TokenService

logger = logging.getLogger(__name__)


class AccountService:
    """
    Business logic for creating and authenticating users and drawers.

    Holds only the (immutable) hasher and token service; the database
    session is passed per call.
    """

    def __init__(self, tokens: TokenService, hasher: PasswordHasher):
        self.tokens = tokens
        self.hasher = hasher

    # ── Users ─────────────────────────────────────────────────────────────

    async def register_user(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        username: Optional[str] = None,
    ) -> Tuple[str, User]:
        """
        Create a user account and return (token, user).

        Raises:
            DuplicateError: email already registered
            DatabaseError: store failure
        """
        try:
            existing = await self._find_user(db, email)
            if existing is not None:
                raise DuplicateError(message="Email already in use", field="email")

            user = User(
                email=email,
                username=username,
                password_hash=await self.hasher.hash_async(password),
            )
            db.add(user)
            await db.flush()
            await db.commit()
        except IntegrityError:
            # Concurrent registration won the unique constraint
            raise DuplicateError(message="Email already in use", field="email") from None
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

        logger.info("User registered: %s", user.id)
        return self.tokens.issue(user.id, "user"), user

    async def login_user(
        self,
        db: AsyncSession,
        email: str,
        password: str,
    ) -> Tuple[str, User]:
        """
        Authenticate a user and return (token, user).

        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        try:
            user = await self._find_user(db, email)
        except SQLAlchemyError as e:
            logger.error("Database error during user login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

        if user is None or not await self.hasher.verify_async(user.password_hash, password):
            logger.info("Failed user login")
            raise InvalidCredentialsError()

        return self.tokens.issue(user.id, "user"), user

    # ── Drawers ───────────────────────────────────────────────────────────

    async def create_drawer(
        self,
        db: AsyncSession,
        drawer_name: str,
        password: str,
    ) -> Tuple[str, Drawer]:
        """
        Create a shared drawer and return (token, drawer).

        Raises:
            DuplicateError: drawer name already taken
            DatabaseError: store failure
        """
        try:
            existing = await self._find_drawer(db, drawer_name)
            if existing is not None:
                raise DuplicateError(message="Drawer name taken", field="drawerName")

            drawer = Drawer(
                drawer_name=drawer_name,
                password_hash=await self.hasher.hash_async(password),
            )
            db.add(drawer)
            await db.flush()
            await db.commit()
        except IntegrityError:
            raise DuplicateError(message="Drawer name taken", field="drawerName") from None
        except SQLAlchemyError as e:
            logger.error("Database error creating drawer: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

        logger.info("Drawer created: %s", drawer.id)
        return self.tokens.issue(drawer.id, "drawer"), drawer

    async def login_drawer(
        self,
        db: AsyncSession,
        drawer_name: str,
        password: str,
    ) -> Tuple[str, Drawer]:
        """Authenticate a drawer; same failure rules as `login_user`."""
        try:
            drawer = await self._find_drawer(db, drawer_name)
        except SQLAlchemyError as e:
            logger.error("Database error during drawer login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

        if drawer is None or not await self.hasher.verify_async(drawer.password_hash, password):
            logger.info("Failed drawer login")
            raise InvalidCredentialsError()

        return self.tokens.issue(drawer.id, "drawer"), drawer

    # ── Lookups ───────────────────────────────────────────────────────────

    @staticmethod
    async def _find_user(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def _find_drawer(db: AsyncSession, drawer_name: str) -> Optional[Drawer]:
        result = await db.execute(select(Drawer).where(Drawer.drawer_name == drawer_name))
        return result.scalar_one_or_none()
