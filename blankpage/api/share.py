"""Share API router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from blankpage.api.pages import view_shared_note
from blankpage.db import get_session
from blankpage.schemas.share import ShareRequest, ShareResponse
from blankpage.services.sharing import (
    InvalidExpiryError,
    PersistenceError,
    SharingService,
    build_share_url,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/share", response_model=ShareResponse, response_model_exclude_none=True)
def create_share(
    body: ShareRequest,
    request: Request,
    db: Session = Depends(get_session),
) -> ShareResponse:
    try:
        shared = SharingService().create_share(body.title, body.content, body.expiry_hours, db)
    except InvalidExpiryError as exc:
        raise HTTPException(status_code=400, detail="Invalid request") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    host = request.headers.get("host") or request.url.netloc
    return ShareResponse(
        share_id=shared.id,
        share_url=build_share_url(request.headers.get("x-forwarded-proto"), host, shared.id),
        expires_at=shared.expires_at,
    )


router.add_api_route(
    "/shared/{share_id}",
    view_shared_note,
    methods=["GET"],
    response_class=HTMLResponse,
)
