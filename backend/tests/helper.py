"""Test data and database helpers shared by the test modules."""

from typing import List

from notes_api.database import Database
from notes_api.services.note_store import NoteStore

initial_notes = [
    {"content": "HTML is easy", "important": False},
    {"content": "Browser can execute only JavaScript", "important": True},
]


async def notes_in_db(database: Database) -> List[dict]:
    """Every stored note in its JSON shape."""
    notes = await NoteStore(database).list()
    return [note.model_dump() for note in notes]


async def non_existing_id(database: Database) -> str:
    """A well-formed id that no longer belongs to any note."""
    store = NoteStore(database)
    note = await store.create(content="willremovethissoon")
    await store.delete_by_id(note.id)
    return note.id
