"""
QuickNotes Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Every response is an envelope with a `success` flag. Notes are serialized
with camelCase keys:
    {"id": "1718000000000", "title": "...", "body": "...",
     "createdAt": "2024-06-10T06:13:20Z", "updatedAt": "2024-06-10T06:13:20Z"}

Request bodies are deliberately loose (every field optional): deciding what
counts as "title required" or "nothing to update" is business policy and
belongs to NoteService, which answers with 400 rather than FastAPI's 422.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.note import Note


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /. A missing title is reported by the service."""

    title: Optional[str] = Field(default=None, description="Note title (required, non-blank)")
    body: Optional[str] = Field(default=None, description="Note text, defaults to empty")


class NoteUpdate(BaseModel):
    """
    Body of PUT /{id}.

    Which fields the client actually sent is read from `model_fields_set`,
    so {"body": ""} (clear the body) and {} (no change) stay distinguishable.
    """

    title: Optional[str] = Field(default=None, description="New title")
    body: Optional[str] = Field(default=None, description="New body; empty string clears it")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Public representation of a note."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Store-assigned identifier")
    title: str
    body: str
    created_at: datetime = Field(description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last modification time (UTC ISO 8601)")

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        """Snapshot a stored record so later mutations don't leak into a response."""
        return cls(
            id=note.id,
            title=note.title,
            body=note.body,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteEnvelope(BaseModel):
    """Returned by create, get and update."""

    success: bool = True
    note: NoteResponse


class NoteListEnvelope(BaseModel):
    """Returned by GET / in insertion order."""

    success: bool = True
    notes: List[NoteResponse]


class NoteDeletedEnvelope(BaseModel):
    """Returned by DELETE /{id} with the removed note."""

    success: bool = True
    message: str = "Note deleted"
    note: NoteResponse


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for every failed request.

    Example:
        {
            "success": false,
            "error": "nothing to update",
            "request_id": "3f2a9c1e"
        }
    """

    success: bool = False
    error: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring probes."""

    success: bool = True
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    notes: int = Field(description="Number of notes currently held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
