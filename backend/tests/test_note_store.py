"""
Notes API — Note Store Tests
==============================

What:  Tests for NoteStore against a real SQLite database (no HTTP).

What we test:
    ✅ create → get_by_id round trip and id assignment
    ✅ Validation failures write nothing
    ✅ list() tracks creates and deletes
    ✅ get_by_id on an unknown id raises NotFoundError
    ✅ delete_by_id is idempotent
    ✅ SQLAlchemy failures surface as DatabaseError
"""

import pytest
from unittest.mock import patch
from sqlalchemy.exc import OperationalError

from notes_api.exceptions import DatabaseError, NotFoundError, ValidationError
from notes_api.ids import is_valid_note_id
from notes_api.services.note_store import NoteStore

import helper


class TestNoteStoreCreate:

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_reads_back_equal(self, database):
        store = NoteStore(database)

        created = await store.create(content="HTML is easy", important=True)
        fetched = await store.get_by_id(created.id)

        assert is_valid_note_id(created.id)
        assert fetched == created
        assert fetched.content == "HTML is easy"
        assert fetched.important is True

    @pytest.mark.asyncio
    async def test_create_defaults_important_to_false(self, database):
        created = await NoteStore(database).create(content="plain")

        assert created.important is False

    @pytest.mark.asyncio
    async def test_created_ids_are_unique(self, database):
        store = NoteStore(database)

        ids = {(await store.create(content=f"note {i}")).id for i in range(20)}

        assert len(ids) == 20

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "  \n\t"])
    async def test_create_rejects_missing_or_empty_content(self, seeded_database, content):
        store = NoteStore(seeded_database)

        with pytest.raises(ValidationError) as exc_info:
            await store.create(content=content, important=True)

        assert exc_info.value.field == "content"
        assert len(await store.list()) == len(helper.initial_notes)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields, bad_field",
        [({"content": 5}, "content"), ({"content": "ok", "important": "yes"}, "important")],
    )
    async def test_create_rejects_wrongly_typed_fields(self, seeded_database, fields, bad_field):
        store = NoteStore(seeded_database)

        with pytest.raises(ValidationError) as exc_info:
            await store.create(**fields)

        assert exc_info.value.field == bad_field
        assert len(await store.list()) == len(helper.initial_notes)


class TestNoteStoreRead:

    @pytest.mark.asyncio
    async def test_list_returns_seeded_notes_in_creation_order(self, seeded_database):
        notes = await NoteStore(seeded_database).list()

        assert [n.content for n in notes] == [n["content"] for n in helper.initial_notes]

    @pytest.mark.asyncio
    async def test_list_empty_database(self, database):
        assert await NoteStore(database).list() == []

    @pytest.mark.asyncio
    async def test_get_unknown_id_raises_not_found(self, seeded_database):
        missing_id = await helper.non_existing_id(seeded_database)

        with pytest.raises(NotFoundError):
            await NoteStore(seeded_database).get_by_id(missing_id)


class TestNoteStoreDelete:

    @pytest.mark.asyncio
    async def test_list_length_tracks_creates_and_deletes(self, database):
        store = NoteStore(database)
        first = await store.create(content="first")
        await store.create(content="second")
        await store.create(content="third")

        await store.delete_by_id(first.id)

        notes = await store.list()
        assert len(notes) == 2
        assert first.id not in {n.id for n in notes}

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, seeded_database):
        store = NoteStore(seeded_database)
        note = (await store.list())[0]

        await store.delete_by_id(note.id)
        await store.delete_by_id(note.id)

        assert len(await store.list()) == len(helper.initial_notes) - 1
        with pytest.raises(NotFoundError):
            await store.get_by_id(note.id)


class TestNoteStoreDatabaseFailures:

    @pytest.mark.asyncio
    async def test_list_wraps_sqlalchemy_errors(self, database):
        store = NoteStore(database)
        failure = OperationalError("SELECT", {}, Exception("database is locked"))

        with patch("sqlalchemy.ext.asyncio.AsyncSession.execute", side_effect=failure):
            with pytest.raises(DatabaseError):
                await store.list()
