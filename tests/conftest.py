"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Registered users and their auth headers
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtracker.core.config import Settings
from jobtracker.core.database import Base, enable_sqlite_foreign_keys, get_db
from jobtracker.core.security import TokenService
from jobtracker.models import Job, User  # noqa: F401  Register models on Base.metadata
from main import create_app


TEST_SECRET = "test-signing-secret"

# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

test_settings = Settings(
    DATABASE_URL="sqlite://",
    SECRET=TEST_SECRET,
    JSON_LOGS=False,
    LOG_LEVEL="DEBUG",
)
app = create_app(test_settings)


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def token_service():
    """Token service signing with the same secret as the test app"""
    return TokenService(TEST_SECRET)


@pytest.fixture
def register_and_login(client):
    """
    Factory fixture: register a user, log in, and return (user, headers).

    headers carries the raw token in the authorization header, as existing
    clients send it.
    """
    def _register_and_login(username="al", password="pw1", email="a@x.com"):
        response = client.post("/api/register", json={
            "username": username,
            "password": password,
            "email": email,
        })
        assert response.status_code == 201, response.text

        login = client.post("/api/login", json={"username": username, "password": password})
        assert login.status_code == 200, login.text
        body = login.json()
        return body["user"], {"authorization": body["token"]}

    return _register_and_login


@pytest.fixture
def auth_user(register_and_login):
    """A logged-in user: (user dict, headers)"""
    return register_and_login()


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "Senior Python Engineer",
        "company": "Acme Corp",
        "location": "San Francisco, CA (Remote)",
        "description": "Build and run the job tracking platform.",
        "requirements": "Python, FastAPI, PostgreSQL",
    }


@pytest.fixture
def test_secret():
    """Signing secret configured on the test app"""
    return TEST_SECRET
