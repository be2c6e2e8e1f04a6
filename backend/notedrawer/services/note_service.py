"""
NoteDrawer Backend — Note Service
==================================

What:  CRUD on notes, scoped to the authenticated principal.
How:   Every query and every ownership check uses the principal's
       (type, id) pair; users and drawers go through the same code path.
Who:   Called by the /api/notes route handlers.

Ownership rules:
    list    → only notes whose owner pair equals the principal's
    create  → owner pair is taken from the principal, never from the body
    update  → NotFoundError if the id is unknown, ForbiddenError if the
              note belongs to another owner pair
    delete  → same checks as update; a missing note is a 404 (strict)

Each write commits before returning; a failed flush or commit becomes a
DatabaseError (500).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notedrawer.exceptions import DatabaseError, ForbiddenError, NotFoundError
from notedrawer.models.note import Note
from notedrawer.schemas.auth import Principal

logger = logging.getLogger(__name__)


def _parse_note_id(note_id: str) -> uuid.UUID:
    """A malformed id cannot name an existing note."""
    try:
        return uuid.UUID(str(note_id))
    except ValueError:
        raise NotFoundError(resource="note", resource_id=str(note_id)) from None


class NoteService:
    """
    Business logic layer for note operations.

    Stateless: the session and principal are passed to each call.
    """

    async def list_notes(self, db: AsyncSession, principal: Principal) -> List[Note]:
        """All notes owned by `principal`, newest first."""
        try:
            result = await db.execute(
                select(Note)
                .where(Note.owner_type == principal.type, Note.owner_id == principal.id)
                .order_by(desc(Note.created_at))
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def create_note(
        self,
        db: AsyncSession,
        principal: Principal,
        title: str = "",
        content: str = "",
    ) -> Note:
        try:
            note = Note(
                owner_type=principal.type,
                owner_id=principal.id,
                title=title or "",
                content=content or "",
                created_at=datetime.now(timezone.utc),
            )
            db.add(note)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created by %s %s", note.id, principal.type, principal.id)
        return note

    async def update_note(
        self,
        db: AsyncSession,
        principal: Principal,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Note:
        """
        Replace title and content of a note owned by `principal`.

        Missing values become "". Stamps updated_at.

        Raises:
            NotFoundError: no note with this id
            ForbiddenError: note belongs to another owner pair
        """
        note = await self._get_owned_note(db, principal, note_id)

        try:
            note.title = title or ""
            note.content = content or ""
            note.updated_at = datetime.now(timezone.utc)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(note.id)},
            ) from e

        logger.info("Note %s updated", note.id)
        return note

    async def delete_note(self, db: AsyncSession, principal: Principal, note_id: str) -> None:
        """
        Delete a note owned by `principal`.

        Raises:
            NotFoundError: no note with this id
            ForbiddenError: note belongs to another owner pair
        """
        note = await self._get_owned_note(db, principal, note_id)

        try:
            await db.delete(note)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note.id)},
            ) from e

        logger.info("Note %s deleted", note.id)

    async def _get_owned_note(
        self,
        db: AsyncSession,
        principal: Principal,
        note_id: str,
    ) -> Note:
        """Fetch a note by id and check it belongs to `principal`."""
        parsed_id = _parse_note_id(note_id)

        try:
            result = await db.execute(select(Note).where(Note.id == parsed_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", parsed_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": str(parsed_id)},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(parsed_id))

        if not note.is_owned_by(principal.type, principal.id):
            logger.warning(
                "Forbidden: %s %s attempted to modify note %s",
                principal.type,
                principal.id,
                note.id,
            )
            raise ForbiddenError()

        return note


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
