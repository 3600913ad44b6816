"""
pgnotes: Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for the three ways a request can fail.
Why:   The repository raises them without knowing about HTTP; global handlers
       registered in main.py turn each type into its status code.
How:   Each exception carries a message (safe to show to the client) and an
       optional context dict (logged server-side only).

Exception Hierarchy:
    NotesAppError (base)
    ├── ValidationError   → 400 Bad Request (empty/missing note content)
    ├── NotFoundError     → 404 Not Found (unknown note id)
    └── StorageError      → 500 Internal Server Error (any data-access failure)

All responses are plain text; none of them carries a structured body.
"""

from typing import Any, Dict, Optional


class NotesAppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAppError):
    """
    Raised when client input fails the presence check.

    When:    POST /submit or /update/{id} with a missing or empty `note`.
    HTTP:    400 Bad Request
    """

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


class NotFoundError(NotesAppError):
    """
    Raised when a requested note does not exist.

    When:    GET /edit/{id} with an id that was never assigned.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the repository converts that
    into this exception so routes stay free of None checks.
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource_id = resource_id


class StorageError(NotesAppError):
    """
    Raised when a database operation fails.

    When:    Connection refused, pool exhausted, query error, missing table...
    HTTP:    500 Internal Server Error

    The message is always opaque ("Failed to save the note."). The original
    cause is logged with its traceback by the repository and its type name is
    kept in `context`; neither reaches the client.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
