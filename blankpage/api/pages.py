"""HTML pages: landing page and shared note viewer."""

import pathlib

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from blankpage.db import get_session
from blankpage.services.notes import NotFoundError
from blankpage.services.sharing import ShareExpiredError, SharingService, format_share_date

router = APIRouter()

templates = Jinja2Templates(directory=str(pathlib.Path(__file__).parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request=request, name="index.html", context={"title": "Blank.page"}
    )


def view_shared_note(
    share_id: str,
    request: Request,
    db: Session = Depends(get_session),
) -> HTMLResponse:
    """Render a shared note, or the not-found (404) / expired (410) page."""
    try:
        note = SharingService().resolve(share_id, db)
    except NotFoundError:
        return templates.TemplateResponse(
            request=request,
            name="shared_not_found.html",
            context={"title": "Note Not Found"},
            status_code=404,
        )
    except ShareExpiredError:
        return templates.TemplateResponse(
            request=request,
            name="shared_expired.html",
            context={"title": "Note Expired"},
            status_code=410,
        )
    return templates.TemplateResponse(
        request=request,
        name="shared_note.html",
        context={
            "title": note.display_title(),
            "content": note.content,
            "date": format_share_date(note.created_at),
        },
    )


router.add_api_route(
    "/shared/{share_id}",
    view_shared_note,
    methods=["GET"],
    response_class=HTMLResponse,
    include_in_schema=False,
)
