"""
Notes API — Note Validation Tests
===================================

What:  Tests for validate_new_note() and ValidationResult.
"""

import pytest

from notes_api.exceptions import ValidationError
from notes_api.schemas.note import NewNote, validate_new_note


class TestValidateNewNote:

    def test_valid_note(self):
        result = validate_new_note("HTML is easy", True)

        assert result.ok
        assert result.errors == []
        assert result.note == NewNote(content="HTML is easy", important=True)

    def test_important_defaults_to_false(self):
        result = validate_new_note("HTML is easy")

        assert result.note.important is False

    def test_content_is_kept_verbatim(self):
        result = validate_new_note("  padded  ")

        assert result.note.content == "  padded  "

    @pytest.mark.parametrize(
        "content, message",
        [
            (None, "content is required"),
            ("", "content must not be empty"),
            ("   ", "content must not be empty"),
            (42, "content must be a string"),
        ],
    )
    def test_bad_content_is_reported(self, content, message):
        result = validate_new_note(content, False)

        assert not result.ok
        assert result.note is None
        assert [(e.field, e.message) for e in result.errors] == [("content", message)]

    def test_non_boolean_important_is_reported(self):
        result = validate_new_note("text", "yes")

        assert not result.ok
        assert result.errors[0].field == "important"

    def test_all_field_errors_are_collected(self):
        result = validate_new_note(None, "yes")

        assert {e.field for e in result.errors} == {"content", "important"}


class TestValidationResultUnwrap:

    def test_unwrap_returns_note(self):
        assert validate_new_note("ok").unwrap() == NewNote(content="ok")

    def test_unwrap_raises_validation_error(self):
        with pytest.raises(ValidationError, match="content is required") as exc_info:
            validate_new_note(None).unwrap()

        assert exc_info.value.field == "content"
        assert exc_info.value.context["errors"] == [
            {"field": "content", "message": "content is required"}
        ]
