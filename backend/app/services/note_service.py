"""
QuickNotes Backend - Note Service (Business Rules)
===================================================

What:  Validates and normalizes note requests, delegates to NoteStore, and
       maps outcomes (including absence) to a ServiceResult.
Who:   Called by the route handlers in app.routes.notes.
When:  Once per note request.

Request flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate    │───▶│  NoteStore   │───▶│  Result  │
    │ (HTTP)   │    │  & stamp     │    │  primitive   │    │  value / │
    └──────────┘    └──────────────┘    └──────────────┘    │  error   │
                                                            └──────────┘

Validation always finishes before the store is touched, so a rejected
request never leaves partial side effects.

The service holds no state of its own beyond references to the store and
a clock; it is constructed once per app next to the store.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from app.exceptions import NotFoundError, ValidationError
from app.models.note import Note
from app.schemas.note import NoteResponse
from app.services.result import ServiceResult
from app.storage import NoteStore

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for an update field the caller did not supply."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

# A field on an update request: either UNSET or the value that was sent
# (None when the client sent an explicit JSON null).
FieldUpdate = Union[_Unset, Optional[str]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_note(): required title, default body, identical timestamps
        - list_notes():  pass-through in insertion order
        - get_note():    absence → NotFoundError
        - update_note(): partial merge of supplied fields, refreshed updated_at
        - delete_note(): removal, absence → NotFoundError

    Titles are trimmed and must be non-blank on both create and update.
    Bodies are stored exactly as sent.
    """

    def __init__(
        self,
        store: NoteStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self._clock = clock

    @staticmethod
    def _check_title(title: Any) -> Union[str, ValidationError]:
        if not isinstance(title, str) or not title.strip():
            return ValidationError("title required", field="title")
        return title.strip()

    def create_note(
        self, title: Optional[str], body: FieldUpdate = UNSET
    ) -> ServiceResult[NoteResponse]:
        """
        Create a note.

        An UNSET body defaults to "". An explicit None body is rejected the
        same way update_note rejects it.

        Returns:
            The stored note, or ValidationError("title required") when the
            title is missing or blank, or ValidationError("body must be a
            string") when body is None.
        """
        checked = self._check_title(title)
        if isinstance(checked, ValidationError):
            logger.info("Rejected note create: %s", checked.message)
            return ServiceResult.failure(checked)
        if body is UNSET:
            body = ""
        elif not isinstance(body, str):
            logger.info("Rejected note create: body must be a string")
            return ServiceResult.failure(
                ValidationError("body must be a string", field="body")
            )

        timestamp = self._clock()
        note = self.store.create(
            {
                "title": checked,
                "body": body,
                "created_at": timestamp,
                "updated_at": timestamp,
            }
        )
        logger.info("Note %s created", note.id)
        return ServiceResult.success(NoteResponse.from_note(note))

    def list_notes(self) -> ServiceResult[List[NoteResponse]]:
        return ServiceResult.success(
            [NoteResponse.from_note(note) for note in self.store.list()]
        )

    def get_note(self, note_id: str) -> ServiceResult[NoteResponse]:
        note = self.store.find(note_id)
        return self._found(note, note_id)

    def update_note(
        self,
        note_id: str,
        title: FieldUpdate = UNSET,
        body: FieldUpdate = UNSET,
    ) -> ServiceResult[NoteResponse]:
        """
        Apply a partial update.

        Only fields that are not UNSET are written; body="" is a real update
        that clears the body. Both fields UNSET is a ValidationError
        ("nothing to update"). An unknown id is a NotFoundError.
        """
        if title is UNSET and body is UNSET:
            logger.info("Rejected update of note %s: nothing to update", note_id)
            return ServiceResult.failure(ValidationError("nothing to update"))

        changes: Dict[str, Any] = {}
        if title is not UNSET:
            checked = self._check_title(title)
            if isinstance(checked, ValidationError):
                logger.info("Rejected update of note %s: %s", note_id, checked.message)
                return ServiceResult.failure(checked)
            changes["title"] = checked
        if body is not UNSET:
            if not isinstance(body, str):
                return ServiceResult.failure(
                    ValidationError("body must be a string", field="body")
                )
            changes["body"] = body
        changes["updated_at"] = self._clock()

        note = self.store.update(note_id, changes)
        if note is not None:
            logger.info("Note %s updated (%s)", note_id, ", ".join(sorted(changes)))
        return self._found(note, note_id)

    def delete_note(self, note_id: str) -> ServiceResult[NoteResponse]:
        note = self.store.delete(note_id)
        if note is not None:
            logger.info("Note %s deleted", note_id)
        return self._found(note, note_id)

    @staticmethod
    def _found(note: Optional[Note], note_id: str) -> ServiceResult[NoteResponse]:
        if note is None:
            return ServiceResult.failure(NotFoundError(resource="note", resource_id=note_id))
        return ServiceResult.success(NoteResponse.from_note(note))
