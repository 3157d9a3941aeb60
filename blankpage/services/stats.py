"""Aggregate statistics over all stored notes."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from blankpage.models.note import Note
from blankpage.schemas.note import StatsResponse


class StatsService:
    def compute(self, db: Session) -> StatsResponse:
        total_notes: int = db.query(func.count(Note.id)).scalar() or 0
        # Word counting follows Note.word_count, so it runs in Python over a full scan.
        total_words = sum(note.word_count() for note in db.query(Note).all())
        return StatsResponse(total_notes=total_notes, total_words=total_words)
