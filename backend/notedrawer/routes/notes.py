"""
NoteDrawer Backend — Notes Route Handlers
==========================================

What:  CRUD endpoints under /api/notes. Every route requires a bearer token.
How:   The auth gateway dependency resolves the principal; handlers pass
       it to NoteService, which applies the ownership rules.

Status codes:
    401  missing / invalid token (auth gateway)
    403  note belongs to another user or drawer
    404  note id unknown or malformed
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from notedrawer.database import get_db_session
from notedrawer.dependencies import get_current_principal
from notedrawer.schemas.auth import Principal
from notedrawer.schemas.note import (
    DeleteResponse,
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from notedrawer.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/notes",
    tags=["Notes"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List the caller's notes, newest first",
)
async def list_notes(
    response: Response,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    notes = await note_service.list_notes(db, principal)
    # Per-principal data must not be cached by shared caches
    response.headers["Cache-Control"] = "private, no-store"
    return [NoteResponse.model_validate(note) for note in notes]


@router.post(
    "",
    response_model=NoteResponse,
    summary="Create a note owned by the caller",
)
async def create_note(
    payload: Optional[NoteCreate] = None,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    payload = payload or NoteCreate()
    note = await note_service.create_note(
        db,
        principal,
        title=payload.title,
        content=payload.content,
    )
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        403: {"description": "Note owned by another principal", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: str,
    payload: Optional[NoteUpdate] = None,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    payload = payload or NoteUpdate()
    note = await note_service.update_note(
        db,
        principal,
        note_id,
        title=payload.title,
        content=payload.content,
    )
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    response_model=DeleteResponse,
    responses={
        403: {"description": "Note owned by another principal", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    await note_service.delete_note(db, principal, note_id)
    return DeleteResponse(success=True)
