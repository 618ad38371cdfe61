"""
Notes API — Route Dependencies
================================

What:  FastAPI dependencies that hand route handlers their collaborators.
How:   The Database created in the lifespan lives on `app.state.database`;
       get_database() reads it from the current request, get_note_store()
       wraps it in a NoteStore, and valid_note_id() parses the {note_id}
       path segment before the handler body runs.
"""

from typing import Annotated

from fastapi import Depends, Path, Request

from notes_api.database import Database
from notes_api.exceptions import DatabaseError
from notes_api.ids import NoteId, parse_note_id
from notes_api.services.note_store import NoteStore


def get_database(request: Request) -> Database:
    """The process-wide Database attached at startup."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseError(
            message="The database is not available.",
            context={"reason": "database not initialized"},
        )
    return database


def get_note_store(database: Database = Depends(get_database)) -> NoteStore:
    return NoteStore(database)


def valid_note_id(
    note_id: Annotated[str, Path(description="Note id (24 hex characters)")],
) -> NoteId:
    """
    Parses the {note_id} path segment.

    Raises:
        InvalidIdError: The segment is not a native note id (→ 400)
    """
    return parse_note_id(note_id)
