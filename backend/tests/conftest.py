"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    database ─── empty SQLite database (aiosqlite) in tmp_path, tables created
    └── seeded_database ─── same database holding helper.initial_notes
        └── test_client ─── HTTPX AsyncClient talking to create_app(database)
"""

import os

# Override settings for testing BEFORE any notes_api imports
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import helper
from notes_api.database import create_database
from notes_api.services.note_store import NoteStore


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides an empty, file-backed SQLite database.

    What:    A real Database with the notes table created.
    Why:     Exercises the same SQLAlchemy code paths as production.
    How:     One file per test under pytest's tmp_path, built the same way
             the lifespan builds one; tables dropped and pool closed afterwards.
    """
    db = create_database(f"sqlite+aiosqlite:///{tmp_path / 'notes_test.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest_asyncio.fixture
async def seeded_database(database):
    """The database fixture, pre-loaded with helper.initial_notes in order."""
    store = NoteStore(database)
    for note in helper.initial_notes:
        await store.create(content=note["content"], important=note["important"])
    return database


@pytest_asyncio.fixture
async def test_client(seeded_database):
    """
    Provides an async HTTP test client for endpoint testing.

    How:     ASGITransport routes requests straight into the app; the
             seeded database is injected so no lifespan run is needed.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
            assert response.status_code == 200
    """
    from notes_api.main import create_app

    app = create_app(database=seeded_database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
