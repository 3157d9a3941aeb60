"""FastAPI application entry point."""

import logging
import pathlib
import sys
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S")

# Apply the same format to Uvicorn's loggers so they also show timestamps.
for _uvicorn_logger in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    _log = logging.getLogger(_uvicorn_logger)
    _log.handlers.clear()
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"))
    _log.addHandler(_handler)
    _log.propagate = False

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse
from sqlalchemy import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from blankpage import config
from blankpage.db import create_tables, make_engine, make_session_factory
from blankpage.schemas.note import ErrorResponse, HealthResponse
from blankpage.services.sweeper import ExpirySweeper

logger = logging.getLogger(__name__)

if not load_dotenv():
    logger.info("No .env file found, using system environment variables")

_STATIC_DIR = pathlib.Path(__file__).parent / "static"


def create_app(engine: Engine | None = None, sweep_interval_seconds: float | None = None) -> FastAPI:
    """Build the application.

    *engine* defaults to one built from DATABASE_URL when the app starts, so
    importing this module never touches the database.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db_engine = engine or make_engine()
        create_tables(db_engine)
        session_factory = make_session_factory(db_engine)
        app.state.engine = db_engine
        app.state.session_factory = session_factory

        # Clean up expired shares before serving, then on a timer.
        interval = sweep_interval_seconds or config.sweep_interval_seconds()
        sweeper = ExpirySweeper(session_factory, interval_seconds=interval)
        sweeper.run_once()
        sweeper.start()
        app.state.sweeper = sweeper
        try:
            yield
        finally:
            sweeper.stop()
            if engine is None:
                db_engine.dispose()

    app = FastAPI(title="Blank.page", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Invalid request", detail=str(exc.errors())).model_dump(),
        )

    @app.exception_handler(Exception)
    async def _global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="internal_error", detail=str(exc)).model_dump(),
        )

    # Import and register routers after app is defined to avoid circular imports.
    from blankpage.api import notes, pages, share

    app.include_router(pages.router, tags=["pages"])
    app.include_router(share.router, prefix="/api", tags=["share"])
    app.include_router(notes.router, prefix="/api", tags=["notes"])

    @app.get("/health")
    def health() -> HealthResponse:
        return HealthResponse(status="healthy", timestamp=int(time.time()))

    if _STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")

    return app


app = create_app()


def run() -> None:
    """Console entry point: validate config and serve on 0.0.0.0:$PORT."""
    import uvicorn

    try:
        config.database_url()
    except RuntimeError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    port = config.port()
    logger.info("Server starting on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
