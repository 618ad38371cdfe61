"""
Notes API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the error scenarios of the notes API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by the id codec, the validator and the note store; caught by
       the global handlers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError   → 400 Bad Request (missing/empty content)
    ├── InvalidIdError    → 400 Bad Request (malformed note id)
    ├── NotFoundError     → 404 Not Found  (well-formed id, no record)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Raised when a note fails validation before persistence.

    When:    POST /api/notes without `content`, or with empty content.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Note validation failed: content is required",
            "details": {"errors": [{"field": "content", "message": "content is required"}]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or []


class InvalidIdError(NotesAPIError):
    """
    Raised when an externally supplied note id is not a valid native id.

    When:    GET or DELETE /api/notes/{id} with a token that is not
             24 hexadecimal characters (e.g. "2534").
    HTTP:    400 Bad Request

    Well-formed ids that match no record are not this error's concern;
    they surface later as NotFoundError.
    """

    def __init__(
        self,
        raw_id: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["id"] = raw_id
        super().__init__(message="malformatted id", context=ctx)
        self.raw_id = raw_id


class NotFoundError(NotesAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/notes/{id} with a well-formed id that matches no note.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotesAPIError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver details
    are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
