"""Notes service: look up notes and render them for download."""

import unicodedata
import uuid
from datetime import UTC, datetime
from urllib.parse import quote

from sqlalchemy.orm import Session

from blankpage.models.note import UNTITLED, Note
from blankpage.services.types import DownloadResult

DOWNLOAD_MEDIA_TYPES = {
    "txt": "text/plain",
    "md": "text/markdown",
}

_FILENAME_REPLACEMENTS = {"/": "-", "\\": "-", ":": "-"}


class NotFoundError(Exception):
    """Raised when the requested note or share does not exist."""


class InvalidIdError(ValueError):
    """Raised when an identifier is not a UUID."""


class UnsupportedFormatError(ValueError):
    """Raised when a download format other than txt or md is requested."""


def utcnow() -> datetime:
    return datetime.now(tz=UTC).replace(tzinfo=None)


def parse_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidIdError(f"Invalid id: {raw!r}") from exc


def download_filename(note: Note) -> str:
    """Return a header-safe file stem for *note*."""
    title = note.display_title()
    if title == UNTITLED and not note.title:
        return "note"
    for old, new in _FILENAME_REPLACEMENTS.items():
        title = title.replace(old, new)
    title = "".join(c for c in title if c not in "\"\r\n").strip()
    return title or "note"


def _ascii_filename(filename: str) -> str:
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        stem, ext = filename, ""
    folded = unicodedata.normalize("NFKD", stem).encode("ascii", "ignore").decode("ascii")
    folded = " ".join("".join(c for c in folded if c.isprintable()).split()) or "note"
    return f"{folded}{dot}{ext}"


def content_disposition(filename: str) -> str:
    """Build an attachment Content-Disposition header value for *filename*.

    Response headers go out as latin-1, so a name outside ASCII is sent as an
    ASCII ``filename`` fallback plus an RFC 5987 ``filename*`` parameter.
    """
    if filename.isascii() and filename.isprintable():
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{_ascii_filename(filename)}\"; filename*=UTF-8''{quote(filename)}"


class NotesService:
    def get(self, note_id: str, db: Session) -> Note:
        """Return the note with *note_id*.

        Raises InvalidIdError for a malformed id and NotFoundError if absent.
        """
        parsed = parse_id(note_id)
        note = db.query(Note).filter(Note.id == parsed).first()
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        return note

    def download(self, note_id: str, fmt: str, db: Session) -> DownloadResult:
        note = self.get(note_id, db)
        media_type = DOWNLOAD_MEDIA_TYPES.get(fmt)
        if media_type is None:
            raise UnsupportedFormatError(f"Unsupported download format: {fmt!r}")
        return DownloadResult(
            filename=f"{download_filename(note)}.{fmt}",
            media_type=media_type,
            content=note.content,
        )
