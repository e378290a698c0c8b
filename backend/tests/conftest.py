from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

# Keep the application's own engine off the working directory.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from jobportal.db.base import Base
from jobportal.db.session import get_db
from jobportal.main import app

DEFAULT_PASSWORD = "secret1"


@pytest.fixture
def engine(tmp_path: Path) -> Iterator[Engine]:
    db_path = tmp_path / "jobportal.sqlite3"
    test_engine = create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    def override_get_db() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client: TestClient) -> Callable[..., dict]:
    def _signup(username: str, roles: list[str] | None = None, password: str = DEFAULT_PASSWORD) -> dict:
        payload = {"username": username, "email": f"{username}@mail.com", "password": password}
        if roles is not None:
            payload["role"] = roles
        response = client.post("/api/auth/signup", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _signup


@pytest.fixture
def signin(client: TestClient) -> Callable[..., dict]:
    def _signin(username: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = client.post("/api/auth/signin", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _signin


@pytest.fixture
def auth_headers(signup, signin) -> Callable[..., dict[str, str]]:
    """Register a user with the given roles and return bearer headers for it."""

    def _auth_headers(username: str, roles: list[str] | None = None) -> dict[str, str]:
        signup(username, roles)
        token = signin(username)["accessToken"]
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
