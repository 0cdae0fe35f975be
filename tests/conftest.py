"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from devfeeds.config import get_settings
from devfeeds.database import Base, get_db
from devfeeds.main import app
from devfeeds.models.user import User
from devfeeds.services.identity import create_session_token


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/devfeeds", "/devfeeds_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def session_headers(identity_id: str) -> AuthHeaders:
    """Headers carrying a browser session cookie for an identity."""
    token = create_session_token(identity_id)
    cookie_name = get_settings().session_cookie_name
    return AuthHeaders({"Cookie": f"{cookie_name}={token}"}, user_id=identity_id)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def users(db):
    """User rows for the two test identities, for tests that bypass the API."""
    created = [User(id="user-1"), User(id="user-2")]
    db.add_all(created)
    db.commit()
    return created


@pytest.fixture
def auth_headers(client):
    """Session headers for the primary test user."""
    return session_headers("user-1")


@pytest.fixture
def other_headers(client):
    """Session headers for a second user."""
    return session_headers("user-2")


@pytest.fixture
def api_key_headers(client, auth_headers):
    """Bearer API key headers for the primary test user."""
    response = client.get("/api/v1/api-key", headers=auth_headers)
    assert response.status_code == 200
    key = response.json()["key"]
    return AuthHeaders({"Authorization": f"Bearer {key}"}, user_id=auth_headers.user_id)


@pytest.fixture
def feed(client, auth_headers):
    """A feed owned by the primary test user."""
    response = client.post(
        "/api/v1/feeds",
        headers=auth_headers,
        json={"title": "My Feed!!", "description": "Things I made"},
    )
    assert response.status_code == 201
    return response.json()
