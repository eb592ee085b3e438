"""Shared test fixtures and configuration."""

from __future__ import annotations

import os
from typing import Generator

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("EXPENSEDESK_API_TOKEN", None)
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from expensedesk.database.database import Base, get_db
from expensedesk.database.models.record import Record  # noqa: F401  (registers the table)
from expensedesk.database.services.record_store import RecordStore
from expensedesk.database.services.setup_service import SetupService


@pytest.fixture
def engine():
    """A fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db_session) -> RecordStore:
    return RecordStore(db_session)


@pytest.fixture
def seeded_store(store) -> RecordStore:
    """Record store holding the demo company, users, rule and expenses."""
    SetupService.seed_demo_data(store)
    return store


@pytest.fixture
def app(session_factory):
    """The FastAPI app wired to the per-test database."""
    from main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def seeded_client(client) -> TestClient:
    response = client.post("/setup")
    assert response.status_code == 200
    return client
