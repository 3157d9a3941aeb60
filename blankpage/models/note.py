"""Note ORM model."""

import re
import uuid
from datetime import datetime

from sqlalchemy import Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from blankpage.db import Base

UNTITLED = "Untitled Note"
_TITLE_MAX_CHARS = 50
# Only space, newline and tab separate words.
_WORD_SEPARATORS = re.compile(r"[ \n\t]+")


class Note(Base):
    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())

    def display_title(self) -> str:
        """Return the title, or one derived from the first non-blank line of content."""
        if self.title:
            return self.title
        first_line = next((line for line in (self.content or "").splitlines() if line.strip()), "")
        if not first_line:
            return UNTITLED
        if len(first_line) > _TITLE_MAX_CHARS:
            return first_line[:_TITLE_MAX_CHARS] + "..."
        return first_line

    def word_count(self) -> int:
        if not self.content:
            return 0
        return sum(1 for word in _WORD_SEPARATORS.split(self.content) if word)
