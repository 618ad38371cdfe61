"""
Notes API — Note Store
========================

What:  The persistent collection of notes: create, list, get by id, delete by id.
How:   Each operation opens one session on the Database it was given,
       runs a single statement, and commits. Results come back as
       NoteResponse models so callers never hold ORM objects after the
       session closes.
Who:   Constructed per request by the get_note_store() dependency; also
       used directly by the test helpers.

Error Handling Strategy:
    - Invalid input          → ValidationError (raised before any I/O)
    - Missing note           → NotFoundError
    - SQLAlchemy failures    → wrapped in DatabaseError (details logged only)
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from notes_api.database import Database
from notes_api.exceptions import DatabaseError, NotFoundError
from notes_api.ids import NoteId
from notes_api.models.note import Note
from notes_api.schemas.note import NoteResponse, validate_new_note

logger = logging.getLogger(__name__)


class NoteStore:
    """
    Business logic layer for note persistence.

    Responsibilities:
        - create():        validate and insert a note, assigning its id
        - list():          every stored note, in creation order
        - get_by_id():     one note, or NotFoundError
        - delete_by_id():  remove a note; absent ids are not an error
    """

    def __init__(self, database: Database):
        self._database = database

    async def create(self, content: object, important: Optional[object] = None) -> NoteResponse:
        """
        Validate and insert a new note.

        Args:
            content: Note text; must be a non-empty string
            important: Optional flag; None means False

        Returns:
            The stored note, including its newly assigned id

        Raises:
            ValidationError: Missing or empty content (nothing is written)
            DatabaseError: The insert failed
        """
        new_note = validate_new_note(content, important).unwrap()

        try:
            async with self._database.session() as session:
                note = Note(content=new_note.content, important=new_note.important)
                session.add(note)
                await session.flush()  # Assigns the id without ending the transaction
                result = NoteResponse.model_validate(note)
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note created: %s (important=%s)", result.id, result.important)
        return result

    async def list(self) -> List[NoteResponse]:
        """
        Return every stored note.

        Ordering is by id, which is time-prefixed, so notes come back in
        creation order and the order is stable within a single read.
        """
        try:
            async with self._database.session() as session:
                result = await session.execute(select(Note).order_by(Note.id))
                return [NoteResponse.model_validate(note) for note in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_by_id(self, note_id: NoteId) -> NoteResponse:
        """
        Retrieve a single note.

        Args:
            note_id: A parsed native id (see notes_api.ids.parse_note_id)

        Raises:
            NotFoundError: No note has this id
            DatabaseError: The query failed
        """
        try:
            async with self._database.session() as session:
                note = await session.get(Note, note_id)
                if note is not None:
                    return NoteResponse.model_validate(note)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            )

        raise NotFoundError(resource="note", resource_id=note_id)

    async def delete_by_id(self, note_id: NoteId) -> None:
        """
        Delete a note if it exists.

        Deleting an id that matches nothing succeeds silently, so the
        operation can be repeated safely.

        Raises:
            DatabaseError: The delete failed
        """
        try:
            async with self._database.session() as session:
                result = await session.execute(delete(Note).where(Note.id == note_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            )

        if result.rowcount:
            logger.info("Note deleted: %s", note_id)
        else:
            logger.debug("Delete of absent note %s ignored", note_id)
