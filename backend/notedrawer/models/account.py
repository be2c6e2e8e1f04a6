"""
NoteDrawer Backend — Credential SQLAlchemy Models
==================================================

What:  ORM models for the two kinds of principal: `users` and `drawers`.
Who:   Used by AccountService for registration and login, and by Alembic.

Table Design:
    - UUID primary key: non-sequential, also used as the token `id` claim
    - password_hash: bcrypt output, never the plaintext password
    - email / drawer_name: UNIQUE, the login identity of each kind
    - Rows are never updated after creation
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notedrawer.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A personal account, identified by email."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        comment="Login identity; unique across users",
    )
    username: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the password",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class Drawer(Base):
    """
    A shared, password-gated note namespace.

    Anyone holding the drawer name and password can log in as the drawer
    and sees the same notes; there is no link to individual users.
    """

    __tablename__ = "drawers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    drawer_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login identity; unique across drawers",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<Drawer(id={self.id}, drawer_name='{self.drawer_name}')>"
