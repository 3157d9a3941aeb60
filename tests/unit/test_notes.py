"""Unit tests for NotesService."""

import uuid
from unittest.mock import MagicMock

import pytest

from blankpage.models.note import Note
from blankpage.services.notes import (
    InvalidIdError,
    NotesService,
    NotFoundError,
    UnsupportedFormatError,
    content_disposition,
    download_filename,
)


def _note(title: str = "My Note", content: str = "# Hello\n\nworld") -> Note:
    return Note(id=uuid.uuid4(), title=title, content=content)


def _db_returning(note: Note | None) -> MagicMock:
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = note
    return db


class TestNotesServiceDownload:
    def test_txt_returns_stored_content_as_plain_text(self) -> None:
        note = _note()

        result = NotesService().download(str(note.id), "txt", _db_returning(note))

        assert result["content"] == note.content
        assert result["media_type"] == "text/plain"
        assert result["filename"] == "My Note.txt"

    def test_md_returns_stored_content_as_markdown(self) -> None:
        note = _note()

        result = NotesService().download(str(note.id), "md", _db_returning(note))

        assert result["content"] == note.content
        assert result["media_type"] == "text/markdown"
        assert result["filename"] == "My Note.md"

    def test_rejects_unsupported_format(self) -> None:
        note = _note()

        with pytest.raises(UnsupportedFormatError):
            NotesService().download(str(note.id), "pdf", _db_returning(note))

    def test_raises_invalid_id_error_without_querying(self) -> None:
        db = MagicMock()

        with pytest.raises(InvalidIdError):
            NotesService().download("not-a-uuid", "txt", db)

        db.query.assert_not_called()

    def test_raises_not_found_error_when_note_absent(self) -> None:
        with pytest.raises(NotFoundError):
            NotesService().download(str(uuid.uuid4()), "txt", _db_returning(None))


class TestDownloadFilename:
    def test_replaces_path_separators_and_colons(self) -> None:
        assert download_filename(_note(title="a/b\\c:d")) == "a-b-c-d"

    def test_strips_quotes(self) -> None:
        assert download_filename(_note(title='say "hi"')) == "say hi"

    def test_uses_derived_title_when_title_empty(self) -> None:
        assert download_filename(_note(title="", content="Shopping list\nmilk")) == "Shopping list"

    def test_falls_back_to_note_for_empty_note(self) -> None:
        assert download_filename(_note(title="", content="")) == "note"


class TestContentDisposition:
    def test_ascii_name_is_quoted_as_is(self) -> None:
        assert content_disposition("Todo- today.txt") == 'attachment; filename="Todo- today.txt"'

    def test_non_ascii_name_gets_utf8_parameter(self) -> None:
        header = content_disposition("Café notes 日本.txt")

        assert header == (
            'attachment; filename="Cafe notes.txt"; '
            "filename*=UTF-8''Caf%C3%A9%20notes%20%E6%97%A5%E6%9C%AC.txt"
        )
        header.encode("latin-1")

    def test_emoji_only_name_falls_back_to_note(self) -> None:
        header = content_disposition("🎉.md")

        assert header.startswith('attachment; filename="note.md"; ')
        assert header.endswith("filename*=UTF-8''%F0%9F%8E%89.md")
