"""
QuickNotes Backend - Note Record
=================================

What:  The in-memory representation of a stored note.
Who:   Created and mutated only by NoteStore; read by NoteService when it
       builds API responses.

Lifecycle:
    1. Created by NoteService.create_note (created_at == updated_at)
    2. Mutated in place by NoteService.update_note (id and created_at survive)
    3. Removed by NoteService.delete_note (terminal)
"""

from dataclasses import dataclass
from datetime import datetime

# Fields a caller may change after creation
MUTABLE_FIELDS = frozenset({"title", "body", "updated_at"})


@dataclass
class Note:
    """A titled piece of text with an optional body and timestamps."""

    id: str
    title: str
    body: str
    created_at: datetime
    updated_at: datetime
