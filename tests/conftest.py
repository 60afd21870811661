"""
Shared fixtures.

Settings are read from the environment at import time, so the test values
are set before anything from backend/ is imported.  Each test gets a fresh
in-memory SQLite database wired in through ``get_db``.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.security import hash_password, token_for_user  # noqa: E402
from database import Base, get_db  # noqa: E402
from main import app  # noqa: E402
from models.user import User  # noqa: E402
import models.blog  # noqa: F401, E402


@pytest.fixture
def session_factory():
    """Fresh schema per test; StaticPool keeps the one in-memory DB alive."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
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
def make_user(db):
    """Insert a user directly and return it."""

    def _make(username="alice", email=None, password="secret1", role="user"):
        user = User(
            username=username,
            email=email or f"{username}@x.com",
            password_hash=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


def _bearer(user) -> dict:
    return {"Authorization": f"Bearer {token_for_user(user)}"}


@pytest.fixture
def headers_for():
    """Authorization header carrying a freshly issued token for a user."""
    return _bearer


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def admin(make_user):
    return make_user("root", email="root@x.com", role="admin")


@pytest.fixture
def alice_headers(alice):
    return _bearer(alice)


@pytest.fixture
def bob_headers(bob):
    return _bearer(bob)


@pytest.fixture
def admin_headers(admin):
    return _bearer(admin)


BLOG = {
    "title": "My First Post",
    "content": "<p>hi</p>",
    "category": "Technology",
    "excerpt": "hi",
}


@pytest.fixture
def blog_payload():
    return dict(BLOG)
