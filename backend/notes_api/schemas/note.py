"""
Notes API — Request/Response Schemas and Note Validation
==========================================================

What:  Pydantic models defining the API contract, plus the typed record and
       validation function that guard every note before persistence.
How:   FastAPI parses request bodies into NoteCreate and serializes store
       results through NoteResponse. validate_new_note() turns raw
       content/important values into a NewNote, reporting problems in a
       ValidationResult instead of raising.
Who:   Route handlers (schemas) and NoteStore.create() (validation).
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, Field

from notes_api.exceptions import ValidationError


# ══════════════════════════════════════════════════════════════════════════
# Validated Record — What the store is allowed to persist
# ══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class NewNote:
    """A note that passed validation and has not been stored yet."""
    content: str
    important: bool = False


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validate_new_note().

    Exactly one of the two is meaningful:
        note:    The validated record (when ok)
        errors:  One FieldError per rejected field (when not ok)
    """
    note: Optional[NewNote] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.note is not None and not self.errors

    def unwrap(self) -> NewNote:
        """
        Returns the validated note, or raises ValidationError listing every
        field error.
        """
        if self.ok:
            return self.note
        summary = "; ".join(e.message for e in self.errors)
        raise ValidationError(
            message=f"Note validation failed: {summary}",
            field=self.errors[0].field if self.errors else None,
            errors=[e.to_dict() for e in self.errors],
        )


def validate_new_note(content: object, important: object = None) -> ValidationResult:
    """
    Validate raw note fields.

    Rules:
        content:    required, must be a string with at least one
                    non-whitespace character; stored as given
        important:  optional boolean; missing or null means False

    HTTP bodies reach here already typed by NoteCreate, so the string and
    boolean checks only fire for direct NoteStore.create() callers.

    Returns:
        ValidationResult holding a NewNote, or the list of field errors
    """
    errors: List[FieldError] = []

    if content is None:
        errors.append(FieldError("content", "content is required"))
    elif not isinstance(content, str):
        errors.append(FieldError("content", "content must be a string"))
    elif not content.strip():
        errors.append(FieldError("content", "content must not be empty"))

    if important is None:
        important = False
    elif not isinstance(important, bool):
        errors.append(FieldError("important", "important must be a boolean"))

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(note=NewNote(content=content, important=important))


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    What:  Body of POST /api/notes.
    How:   Both fields are optional at the schema level so that a missing
           `content` reaches validate_new_note() and is reported as a
           400 validation_error alongside any other field errors.
    """
    content: Optional[str] = Field(default=None, description="Note text (required, non-empty)")
    important: Optional[bool] = Field(default=None, description="Importance flag (default false)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Representation of a stored note.
    Who:   Returned by every /api/notes endpoint that yields a note.
    """
    id: str = Field(description="Note id (24 hex characters)")
    content: str = Field(description="Note text")
    important: bool = Field(description="Importance flag")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "malformatted_id",
            "message": "malformatted id",
            "details": {"id": "2534"},
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
