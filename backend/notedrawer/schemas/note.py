"""
NoteDrawer Backend — Note Request/Response Schemas
===================================================

What:  Pydantic models defining the notes API contract.
How:   Field names are snake_case in Python and camelCase on the wire
       (ownerType, createdAt, ...). FastAPI serializes response models
       by alias.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from notedrawer.schemas.auth import CAMEL_CONFIG


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Both fields are optional and default to an empty string."""

    model_config = CAMEL_CONFIG

    title: str = Field(default="")
    content: str = Field(default="")


class NoteUpdate(BaseModel):
    """
    Replacement title/content for an existing note.

    An omitted or null field replaces the stored value with "".
    """

    model_config = CAMEL_CONFIG

    title: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    owner_type: str = Field(description="Owning principal kind: user or drawer")
    owner_id: uuid.UUID = Field(description="Id of the owning user or drawer")
    title: str
    content: str
    created_at: datetime = Field(description="When the note was created (UTC)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="When the note was last updated; null if never",
    )


class DeleteResponse(BaseModel):
    success: bool = True


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint.

    Example:
        {"error": "Invalid credentials", "code": "invalid_credentials",
         "request_id": "1f2e3d4c"}
    """

    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
