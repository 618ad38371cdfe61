"""
Notes API — Notes Route Handlers
==================================

What:  The /api/notes resource: list, read, create, delete.
How:   Each handler resolves its inputs through dependencies (id parsing,
       note store), makes exactly one store call, and returns the result.
       Errors raised along the way are turned into HTTP responses by the
       global exception handlers in main.py.

Per-request flow:
    Received → Validated → Executed → Responded
    The first failure ends the request; nothing is written on failure.

Endpoints:
    GET    /api/notes        → 200, array of notes
    GET    /api/notes/{id}   → 200 | 400 malformatted id | 404 not found
    POST   /api/notes        → 201 | 400 validation error
    DELETE /api/notes/{id}   → 204 | 400 malformatted id
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from notes_api.dependencies import get_note_store, valid_note_id
from notes_api.ids import NoteId
from notes_api.schemas.note import ErrorResponse, NoteCreate, NoteResponse
from notes_api.services.note_store import NoteStore

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes",
)
async def list_notes(
    store: NoteStore = Depends(get_note_store),
) -> List[NoteResponse]:
    """Returns every stored note in creation order."""
    return await store.list()


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformatted note id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: NoteId = Depends(valid_note_id),
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    """
    Get one note.

    A malformed id fails in valid_note_id() (400) before the store is
    touched; a well-formed id with no record fails in the store (404).
    """
    return await store.get_by_id(note_id)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing or empty content", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    """
    Create a note from `{"content": str, "important": bool?}`.

    `important` defaults to false. The response carries the assigned id.
    """
    return await store.create(content=payload.content, important=payload.important)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Malformatted note id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: NoteId = Depends(valid_note_id),
    store: NoteStore = Depends(get_note_store),
) -> Response:
    """
    Delete a note by id.

    Responds 204 whether or not the note existed, so repeated deletes of
    the same id all succeed.
    """
    await store.delete_by_id(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
