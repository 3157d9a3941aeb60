"""SharedNote ORM model: a link to a note, optionally time-limited."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blankpage.db import Base
from blankpage.models.note import Note


class SharedNote(Base):
    __tablename__ = "shared_notes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    note_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
    # NULL means the share never expires.
    expires_at: Mapped[datetime | None] = mapped_column(nullable=True, index=True)

    note: Mapped[Note] = relationship("Note", lazy="joined")

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now
