"""
QuickNotes Backend - In-Memory Note Store
==========================================

What:  The exclusive custodian of the note collection.
How:   A list of Note records kept in insertion order, plus a counter that
       hands out identifiers. One store is constructed per application
       (see create_app) and injected into NoteService.
Who:   Used by NoteService only. Business rules live in the service; the
       store trusts that whatever it is given is already valid.

Identifier generation:
    Ids are decimal strings drawn from an itertools.count seeded with the
    start-up time in milliseconds. The counter only ever moves forward, so
    two creates inside the same clock tick still get distinct ids.

Thread Safety:
    Routes run on the event loop, but the store is also safe to share across
    threads: every primitive runs under a single lock, so an append, an
    in-place merge or a removal is never observed half done.
"""

import itertools
import logging
import threading
import time
from typing import Any, Dict, Iterator, List, Mapping, Optional

from app.models.note import MUTABLE_FIELDS, Note

logger = logging.getLogger(__name__)


class NoteStore:
    """Process-local, volatile collection of notes."""

    def __init__(self, id_seed: Optional[int] = None) -> None:
        seed = id_seed if id_seed is not None else int(time.time() * 1000)
        self._ids: Iterator[int] = itertools.count(seed)
        self._notes: List[Note] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)

    def _next_id(self) -> str:
        return str(next(self._ids))

    def _index_of(self, note_id: str) -> Optional[int]:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    def create(self, fields: Mapping[str, Any]) -> Note:
        """
        Allocate an id, append a new record built from `fields`, return it.

        `fields` must carry title, body, created_at and updated_at.
        """
        with self._lock:
            note = Note(id=self._next_id(), **fields)
            self._notes.append(note)
            logger.debug("Stored note %s (%d total)", note.id, len(self._notes))
            return note

    def list(self) -> List[Note]:
        """All notes in insertion order. A new list; the records are shared."""
        with self._lock:
            return list(self._notes)

    def find(self, note_id: str) -> Optional[Note]:
        with self._lock:
            index = self._index_of(note_id)
            return self._notes[index] if index is not None else None

    def update(self, note_id: str, fields: Mapping[str, Any]) -> Optional[Note]:
        """
        Merge `fields` into the stored record in place.

        Keys not present in `fields` are left untouched. Returns None (and
        changes nothing) when no note has `note_id`.
        """
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise KeyError(f"Cannot update note fields: {sorted(unknown)}")

        with self._lock:
            index = self._index_of(note_id)
            if index is None:
                return None
            note = self._notes[index]
            changes: Dict[str, Any] = dict(fields)
            if "updated_at" in changes and changes["updated_at"] < note.created_at:
                changes["updated_at"] = note.created_at
            for name, value in changes.items():
                setattr(note, name, value)
            return note

    def delete(self, note_id: str) -> Optional[Note]:
        """Remove and return the record, or None when it does not exist."""
        with self._lock:
            index = self._index_of(note_id)
            if index is None:
                return None
            note = self._notes.pop(index)
            logger.debug("Removed note %s (%d left)", note.id, len(self._notes))
            return note
