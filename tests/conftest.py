"""Pytest configuration and fixtures for the tournament backend tests."""

import os
import tempfile

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

# Keep the module-level database file out of the project tree
os.environ.setdefault("KARTA_DB_PATH", os.path.join(tempfile.gettempdir(), "karta_backend_test.db"))
os.environ.setdefault("KARTA_SQL_ECHO", "false")

from karta_backend import models  # noqa: E402,F401  (registers the tables)
from karta_backend.core.database import get_session  # noqa: E402


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    """TestClient with the session dependency pointed at the in-memory database."""
    from fastapi.testclient import TestClient
    from karta_backend.main import app

    def _override_session():
        yield session

    app.dependency_overrides[get_session] = _override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def service(session):
    from karta_backend.services.tournament_service import TournamentService
    return TournamentService(session)
