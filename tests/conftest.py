# tests/conftest.py

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

# Keep the import-time engine off the working directory.
os.environ.setdefault("TASKBOARD_DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from taskboard.database import Base, get_db, make_engine
from taskboard.main import app


@pytest.fixture()
def session_factory(tmp_path: Path) -> Iterator[sessionmaker]:
    """A fresh SQLite file per test."""
    engine = make_engine(f"sqlite:///{tmp_path / 'taskboard.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register(client: TestClient, email: str, password: str = "secret", username: str = "") -> str:
    resp = client.post(
        "/api/users/register",
        json={"username": username or email.split("@")[0], "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["user_id"]


@pytest.fixture()
def alice(client: TestClient) -> str:
    return register(client, "alice@mail.com")


@pytest.fixture()
def bob(client: TestClient) -> str:
    return register(client, "bob@mail.com")
