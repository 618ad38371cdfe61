"""
Notes API — Access Log Tests
==============================

What:  Tests for RequestLoggingMiddleware: path templating, note ids on
       per-note requests, and log levels by status.
"""

import logging

import pytest

import helper
from notes_api.middleware.logging import level_for_status, note_id_from_path


def _access_records(caplog):
    return [r for r in caplog.records if r.name == "notes_api.access"]


class TestNoteIdFromPath:

    def test_single_note_path(self):
        assert note_id_from_path("/api/notes/5a3d5da59070081a82a3445c") == "5a3d5da59070081a82a3445c"

    def test_trailing_slash(self):
        assert note_id_from_path("/api/notes/abc/") == "abc"

    @pytest.mark.parametrize("path", ["/api/notes", "/api/notes/", "/health", "/api/notes/a/b"])
    def test_other_paths(self, path):
        assert note_id_from_path(path) is None


class TestLevelForStatus:

    @pytest.mark.parametrize(
        "status, level",
        [
            (200, logging.INFO),
            (201, logging.INFO),
            (204, logging.INFO),
            (400, logging.WARNING),
            (404, logging.WARNING),
            (500, logging.ERROR),
            (503, logging.ERROR),
        ],
    )
    def test_mapping(self, status, level):
        assert level_for_status(status) == level


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_viewing_a_note_logs_its_id(self, test_client, seeded_database, caplog):
        caplog.set_level(logging.INFO, logger="notes_api.access")
        note = (await helper.notes_in_db(seeded_database))[0]

        response = await test_client.get(f"/api/notes/{note['id']}")

        assert response.status_code == 200
        [record] = _access_records(caplog)
        assert record.note_id == note["id"]
        assert record.path == "/api/notes/{id}"
        assert record.levelno == logging.INFO
        assert f"note={note['id']}" in record.getMessage()

    @pytest.mark.asyncio
    async def test_malformed_id_is_logged_as_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="notes_api.access")

        await test_client.delete("/api/notes/2534")

        [record] = _access_records(caplog)
        assert record.note_id == "2534"
        assert record.status == 400
        assert record.levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_collection_requests_carry_no_note_id(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="notes_api.access")

        await test_client.post("/api/notes", json={"content": "logged without body"})

        [record] = _access_records(caplog)
        assert record.note_id is None
        assert record.path == "/api/notes"
        assert "logged without body" not in record.getMessage()

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="notes_api.access")

        await test_client.get("/health")

        assert _access_records(caplog) == []
