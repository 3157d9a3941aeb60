"""Sharing service: create share links and resolve them back to notes."""

import logging
import uuid
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blankpage.models.note import Note
from blankpage.models.shared_note import SharedNote
from blankpage.services.notes import InvalidIdError, NotFoundError, parse_id, utcnow

logger = logging.getLogger(__name__)

# One hundred years.
MAX_EXPIRY_HOURS = 100 * 365 * 24


class ShareExpiredError(Exception):
    """Raised when a share exists but its expiry has passed."""


class PersistenceError(Exception):
    """Raised when a write to the database fails."""


class InvalidExpiryError(ValueError):
    """Raised when expiry hours reach past the representable date range."""


def expiry_from_hours(expiry_hours: int, now: datetime) -> datetime | None:
    """Return the absolute expiry for *expiry_hours*; None means permanent."""
    if expiry_hours <= 0:
        return None
    if expiry_hours > MAX_EXPIRY_HOURS:
        raise InvalidExpiryError(f"expiryHours must be at most {MAX_EXPIRY_HOURS}")
    try:
        return now + timedelta(hours=expiry_hours)
    except OverflowError as exc:
        raise InvalidExpiryError(f"expiryHours {expiry_hours} is out of range") from exc


def build_share_url(forwarded_proto: str | None, host: str, share_id: uuid.UUID) -> str:
    """Build the public link, honouring X-Forwarded-Proto from a proxy."""
    proto = (forwarded_proto or "").strip().lower()
    if not proto.startswith("http"):
        proto = "http"
    return f"{proto}://{host}/shared/{share_id}"


def format_share_date(value: datetime) -> str:
    """Format like 'January 2, 2006'."""
    return f"{value:%B} {value.day}, {value.year}"


class SharingService:
    def create_share(
        self,
        title: str,
        content: str,
        expiry_hours: int,
        db: Session,
        now: datetime | None = None,
    ) -> SharedNote:
        """Persist a note and a share pointing at it.

        The two rows are committed separately; a failed share insert leaves
        the note in place. Raises PersistenceError on either failure, and
        InvalidExpiryError before anything is written.
        """
        now = now or utcnow()
        expires_at = expiry_from_hours(expiry_hours, now)
        note = Note(id=uuid.uuid4(), title=title, content=content, created_at=now, updated_at=now)
        try:
            db.add(note)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Failed to save note: %s", exc)
            raise PersistenceError("Failed to save note") from exc

        shared = SharedNote(
            id=uuid.uuid4(),
            note_id=note.id,
            created_at=now,
            expires_at=expires_at,
        )
        try:
            db.add(shared)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Failed to create share link for note %s: %s", note.id, exc)
            raise PersistenceError("Failed to create share link") from exc

        logger.info("Created share %s (expires_at=%s)", shared.id, shared.expires_at)
        return shared

    def resolve(self, share_id: str, db: Session, now: datetime | None = None) -> Note:
        """Return the note behind *share_id*.

        Raises NotFoundError for malformed or unknown ids and
        ShareExpiredError once the share's expiry has passed.
        """
        try:
            parsed = parse_id(share_id)
        except InvalidIdError as exc:
            raise NotFoundError(f"Share {share_id} not found") from exc

        shared = db.query(SharedNote).filter(SharedNote.id == parsed).first()
        if shared is None or shared.note is None:
            raise NotFoundError(f"Share {share_id} not found")
        if shared.is_expired(now or utcnow()):
            raise ShareExpiredError(f"Share {share_id} has expired")
        return shared.note
