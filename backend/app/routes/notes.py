"""
QuickNotes Backend - Notes Route Handlers
==========================================

What:  The CRUD endpoints of the note resource, mounted at settings.notes_prefix.
How:   Extracts the path id and body, delegates to NoteService, unwraps the
       ServiceResult, and wraps the value in a `success` envelope.
Who:   Called by the notes page of the frontend.

Endpoints:
    POST   /       create   → 201 {success, note}   (trailing slash also accepted)
    GET    /       list     → 200 {success, notes}
    GET    /{id}   get      → 200 {success, note}
    PUT    /{id}   update   → 200 {success, note}
    DELETE /{id}   delete   → 200 {success, message, note}

Failures are raised by ServiceResult.unwrap() and rendered by the exception
handlers registered in main.py (400 / 404 / 500).
"""

import logging
import re
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Request

from app.config import settings
from app.exceptions import ValidationError
from app.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteDeletedEnvelope,
    NoteEnvelope,
    NoteListEnvelope,
    NoteUpdate,
)
from app.services.note_service import UNSET, NoteService

logger = logging.getLogger(__name__)

# Ids issued by NoteStore are decimal counters
NOTE_ID_PATTERN = re.compile(r"^[0-9]{1,32}$")

router = APIRouter(prefix=settings.notes_prefix, tags=["Notes"])


def get_note_service(request: Request) -> NoteService:
    """The NoteService built by create_app for this application instance."""
    return request.app.state.note_service


def valid_note_id(note_id: str = Path(description="Note identifier")) -> str:
    """Reject malformed ids before any store lookup."""
    if not NOTE_ID_PATTERN.match(note_id):
        raise ValidationError("invalid note id", field="id", context={"value": note_id[:64]})
    return note_id


@router.post(
    "",
    status_code=201,
    response_model=NoteEnvelope,
    responses={400: {"description": "Title missing or blank", "model": ErrorResponse}},
    summary="Create a note",
)
@router.post("/", status_code=201, response_model=NoteEnvelope, include_in_schema=False)
async def create_note(
    payload: Optional[NoteCreate] = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteEnvelope:
    """
    The title is stored trimmed: {"title": "  Groceries "} comes back as
    "Groceries". The body is stored verbatim and defaults to "" when
    omitted; an explicit null body is rejected with 400.
    """
    payload = payload or NoteCreate()
    sent = payload.model_fields_set
    note = service.create_note(
        title=payload.title,
        body=payload.body if "body" in sent else UNSET,
    ).unwrap()
    return NoteEnvelope(note=note)


@router.get(
    "",
    response_model=NoteListEnvelope,
    summary="List all notes in creation order",
)
@router.get("/", response_model=NoteListEnvelope, include_in_schema=False)
async def list_notes(service: NoteService = Depends(get_note_service)) -> NoteListEnvelope:
    return NoteListEnvelope(notes=service.list_notes().unwrap())


@router.get(
    "/{note_id}",
    response_model=NoteEnvelope,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Get a note by id",
)
async def get_note(
    note_id: str = Depends(valid_note_id),
    service: NoteService = Depends(get_note_service),
) -> NoteEnvelope:
    return NoteEnvelope(note=service.get_note(note_id).unwrap())


@router.put(
    "/{note_id}",
    response_model=NoteEnvelope,
    responses={
        400: {"description": "Nothing to update or invalid field", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Update the title and/or body of a note",
)
async def update_note(
    note_id: str = Depends(valid_note_id),
    payload: Optional[NoteUpdate] = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteEnvelope:
    """
    Only fields present in the body are applied. {"body": ""} clears the
    body; {} is rejected with "nothing to update". A new title is stored
    trimmed, as on create.
    """
    payload = payload or NoteUpdate()
    sent = payload.model_fields_set
    note = service.update_note(
        note_id,
        title=payload.title if "title" in sent else UNSET,
        body=payload.body if "body" in sent else UNSET,
    ).unwrap()
    return NoteEnvelope(note=note)


@router.delete(
    "/{note_id}",
    response_model=NoteDeletedEnvelope,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str = Depends(valid_note_id),
    service: NoteService = Depends(get_note_service),
) -> NoteDeletedEnvelope:
    return NoteDeletedEnvelope(note=service.delete_note(note_id).unwrap())
