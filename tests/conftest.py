"""Shared pytest fixtures."""

import uuid
from collections.abc import Callable, Iterator
from datetime import datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from blankpage.db import create_tables, make_session_factory
from blankpage.main import create_app
from blankpage.models.note import Note
from blankpage.models.shared_note import SharedNote


@pytest.fixture()
def db_session() -> MagicMock:
    """Mock database session for unit tests."""
    return MagicMock()


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine shared by every session and thread in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    db = make_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(engine: Engine) -> Iterator[TestClient]:
    """TestClient over an app wired to the in-memory engine."""
    app = create_app(engine=engine, sweep_interval_seconds=3600)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_note(session: Session) -> Callable[..., Note]:
    """Return a helper that commits a note to the in-memory store."""

    def _make(
        title: str = "",
        content: str = "",
        updated_at: datetime | None = None,
    ) -> Note:
        stamp = updated_at or datetime(2026, 1, 1, 12, 0, 0)
        note = Note(id=uuid.uuid4(), title=title, content=content, created_at=stamp, updated_at=stamp)
        session.add(note)
        session.commit()
        return note

    return _make


@pytest.fixture()
def make_share(session: Session) -> Callable[[Note, datetime | None], SharedNote]:
    """Return a helper that commits a share of *note* with the given expiry."""

    def _make(note: Note, expires_at: datetime | None) -> SharedNote:
        shared = SharedNote(
            id=uuid.uuid4(),
            note_id=note.id,
            created_at=datetime(2026, 1, 1, 12, 0, 0),
            expires_at=expires_at,
        )
        session.add(shared)
        session.commit()
        return shared

    return _make
