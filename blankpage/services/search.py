"""Search service over note titles and content."""

from sqlalchemy import or_
from sqlalchemy.orm import Session

from blankpage.models.note import Note

_LIKE_ESCAPE = "\\"


def _like_pattern(query: str) -> str:
    """Wrap *query* for a substring match, treating % and _ literally."""
    escaped = (
        query.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class SearchService:
    def search(self, query: str, db: Session) -> list[Note]:
        """Return notes whose title or content contains *query*, case-insensitively.

        Most recently updated first. An empty query raises ValueError.
        """
        if not query:
            raise ValueError("Query parameter required")
        pattern = _like_pattern(query)
        return (
            db.query(Note)
            .filter(
                or_(
                    Note.title.ilike(pattern, escape=_LIKE_ESCAPE),
                    Note.content.ilike(pattern, escape=_LIKE_ESCAPE),
                )
            )
            .order_by(Note.updated_at.desc())
            .all()
        )
