"""Expiry sweeper: deletes expired shares and the notes they expose.

Runs once at startup and then on a fixed interval in a daemon thread. There
is no catch-up for missed ticks and no retry inside a cycle; a failed cycle
is logged and the next tick starts fresh.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blankpage.models.note import Note
from blankpage.models.shared_note import SharedNote
from blankpage.services.notes import utcnow

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 6 * 60 * 60


def find_expired(db: Session, now: datetime) -> list[SharedNote]:
    return (
        db.query(SharedNote)
        .filter(SharedNote.expires_at.is_not(None), SharedNote.expires_at < now)
        .all()
    )


def delete_note(note_id: object, db: Session) -> int:
    """Delete a note by id. Idempotent: a missing note deletes nothing."""
    deleted: int = db.query(Note).filter(Note.id == note_id).delete(synchronize_session=False)
    db.commit()
    return deleted


def sweep_expired(db: Session, now: datetime | None = None) -> int:
    """Delete every share whose expiry is before *now*, then its note.

    Returns the number of shares removed. Note deletion is best effort and
    never stops the sweep.
    """
    now = now or utcnow()
    try:
        expired = find_expired(db, now)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Error finding expired shared notes: %s", exc)
        return 0

    if not expired:
        return 0

    # Copy ids out first; a rollback expires the ORM objects.
    targets = [(shared.id, shared.note_id) for shared in expired]
    removed = 0
    for share_id, note_id in targets:
        try:
            db.query(SharedNote).filter(SharedNote.id == share_id).delete(synchronize_session=False)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Error deleting shared note %s: %s", share_id, exc)
            continue
        removed += 1

        try:
            delete_note(note_id, db)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Error deleting note %s: %s", note_id, exc)

    logger.info("Cleaned up %d expired shared notes", removed)
    return removed


class ExpirySweeper:
    """Owns the background thread that calls sweep_expired on an interval."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        self._session_factory = session_factory
        self._interval = interval_seconds
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def run_once(self) -> int:
        db = self._session_factory()
        try:
            return sweep_expired(db)
        finally:
            db.close()

    def start(self) -> None:
        """Start the timer thread. No-op if already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="expiry-sweeper", daemon=True)
        self._thread.start()
        logger.info("Expiry sweeper started (every %.0fs)", self._interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Expiry sweeper stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _loop(self) -> None:
        # wait() returns True only when stop() was called.
        while not self._stop.wait(self._interval):
            try:
                self.run_once()
            except Exception:
                logger.exception("Expiry sweep failed")
