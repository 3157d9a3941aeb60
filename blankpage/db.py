"""SQLAlchemy engine and session factory."""

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from blankpage import config

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str | None = None) -> Engine:
    url = config.normalise_database_url(database_url) if database_url else config.database_url()
    # SQLite needs this for the sweeper thread to share the engine.
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_session(request: Request) -> Generator[Session, None, None]:
    """Yield a database session and close it when the request is done."""
    session_factory: sessionmaker[Session] = request.app.state.session_factory
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def create_tables(engine: Engine) -> None:
    """Create all tables. Idempotent: safe to run on every startup."""
    # Import models so Base.metadata includes them before create_all().
    import blankpage.models.note  # noqa: F401
    import blankpage.models.shared_note  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready")
