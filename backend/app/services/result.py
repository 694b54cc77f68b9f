"""
QuickNotes Backend - Service Result
====================================

What:  Return type for every NoteService operation: either a value or one
       of the expected error kinds from app.exceptions.
How:   The service never raises for validation or not-found outcomes; it
       returns ServiceResult.failure(...). Route handlers call unwrap(),
       which is the single point where an expected error turns into an
       exception for the registered HTTP handlers.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from app.exceptions import NotesError

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a service call: `value` on success, `error` otherwise."""

    value: Optional[T] = None
    error: Optional[NotesError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: NotesError) -> "ServiceResult[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
