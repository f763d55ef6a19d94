import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-cookies")

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobtracker.models  # noqa: F401  (register tables on Base.metadata)
from jobtracker.database import Base, get_db
from jobtracker.dependencies import get_current_user
from jobtracker.main import app
from jobtracker.repos import user_repo


@dataclass
class StubUser:
    id: str = "user-1"
    username: str = "stubuser"
    email: str = "user@example.com"
    password_hash: str = "hashed-password"
    created_at: datetime = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def client(stub_user: StubUser):
    """Client whose caller is ``stub_user``; router collaborators are monkeypatched per test."""
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    """Fresh in-memory SQLite schema per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def api(db):
    """Client backed by the SQLite session with real cookie authentication."""
    def _db_override():
        yield db

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(username: str, password: str = "secret123", email: str | None = None):
        return user_repo.create(db, username, email or f"{username}@example.com", password)

    return _make


@pytest.fixture
def client_as(api):
    """Logged-in client per user; each has its own cookie jar."""
    def _login(username: str, password: str = "secret123") -> TestClient:
        c = TestClient(app)
        resp = c.post("/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return c

    return _login
