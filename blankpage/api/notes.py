"""Notes API router: download, search and stats."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blankpage.db import get_session
from blankpage.schemas.note import NoteRead, SearchResponse, StatsResponse
from blankpage.services.notes import (
    InvalidIdError,
    NotesService,
    NotFoundError,
    UnsupportedFormatError,
    content_disposition,
)
from blankpage.services.search import SearchService
from blankpage.services.stats import StatsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/notes/{note_id}/download/{fmt}", response_class=PlainTextResponse)
def download_note(
    note_id: str,
    fmt: str,
    db: Session = Depends(get_session),
) -> PlainTextResponse:
    try:
        result = NotesService().download(note_id, fmt, db)
    except InvalidIdError as exc:
        raise HTTPException(status_code=400, detail="Invalid note ID") from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Note not found") from exc
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=400, detail="Invalid format") from exc

    return PlainTextResponse(
        content=result["content"],
        media_type=result["media_type"],
        headers={"Content-Disposition": content_disposition(result["filename"])},
    )


@router.get("/search")
def search_notes(
    q: str = Query(default=""),
    db: Session = Depends(get_session),
) -> SearchResponse:
    if not q:
        raise HTTPException(status_code=400, detail="Query parameter required")
    try:
        notes = SearchService().search(q, db)
    except SQLAlchemyError as exc:
        logger.error("Search for %r failed: %s", q, exc)
        raise HTTPException(status_code=500, detail="Search failed") from exc
    return SearchResponse(notes=[NoteRead.model_validate(n) for n in notes])


@router.get("/stats", response_model=StatsResponse)
def stats(db: Session = Depends(get_session)) -> StatsResponse:
    try:
        return StatsService().compute(db)
    except SQLAlchemyError as exc:
        logger.error("Stats query failed: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to compute stats") from exc
