# backend/tests/conftest.py
from __future__ import annotations

import random
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rentmaster import models  # noqa: F401
from rentmaster.db import Base, get_db
from rentmaster.deps import get_now
from rentmaster.main import create_app
from rentmaster.services.snapshot_store import ensure_seeded

NOW = datetime(2026, 10, 19, 10, 0, 0)


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def seeded_db(db):
    ensure_seeded(db, now=NOW, rng=random.Random(1))
    return db


@pytest.fixture()
def client(session_factory, seeded_db):
    app = create_app()

    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_now] = lambda: NOW
    # no context manager: the startup hook would touch the real store
    return TestClient(app)
