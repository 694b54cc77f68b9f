"""
QuickNotes Backend - Custom Exception Hierarchy
================================================

What:  Application-specific error kinds for the notes API.
How:   Each error carries a user-facing message, an optional context dict
       and the HTTP status it maps to. The service layer hands these back
       inside a ServiceResult; the route boundary unwraps the result and the
       handlers registered in main.py turn the error into a JSON response.

Exception Hierarchy:
    NotesError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    └── NotFoundError     → 404 Not Found

Anything that is not a NotesError is unexpected and becomes a 500.
"""

from typing import Any, Dict, Optional


class NotesError(Exception):
    """
    Base exception for all QuickNotes application errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        context:     Additional debug info (logged but NOT returned to client)
        status_code: HTTP status the error maps to at the route boundary
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesError):
    """
    Raised when client input breaks a business rule.

    When:    Missing or blank title, update with no fields, malformed note id.
    HTTP:    400 Bad Request

    Example response:
        {
            "success": false,
            "error": "title required",
            "details": {"field": "title"}
        }
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotesError):
    """
    Raised when a requested note does not exist.

    The store reports absence as None; the service converts that into this
    error so the boundary can answer with a 404.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id
