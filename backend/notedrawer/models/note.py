"""
NoteDrawer Backend — Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD operations and by Alembic.

Ownership:
    A note belongs to exactly one owner pair (owner_type, owner_id), where
    owner_type is 'user' or 'drawer' and owner_id is the id of the matching
    row. There is deliberately no foreign key: owner_id may point into
    either credential table. The pair is written once at creation and
    never updated.

Index on (owner_type, owner_id, created_at):
    Serves the only list query: "all notes for this owner, newest first".
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notedrawer.database import Base

OWNER_TYPES = ("user", "drawer")


class Note(Base):
    """
    A short text note owned by a user or a drawer.

    Lifecycle:
        create → zero-or-more updates (title/content, updated_at) → delete
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    owner_type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="Principal kind that owns the note: user or drawer",
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        comment="users.id or drawers.id depending on owner_type",
    )
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    # NULL until the first update
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        CheckConstraint(
            "owner_type IN (" + ", ".join(f"'{t}'" for t in OWNER_TYPES) + ")",
            name="ck_notes_owner_type",
        ),
        Index("idx_notes_owner_created_at", "owner_type", "owner_id", created_at.desc()),
    )

    def is_owned_by(self, owner_type: str, owner_id: uuid.UUID) -> bool:
        """True when the note belongs to the given owner pair."""
        return self.owner_type == owner_type and self.owner_id == owner_id

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, owner={self.owner_type}:{self.owner_id}, "
            f"created_at='{self.created_at}')>"
        )
