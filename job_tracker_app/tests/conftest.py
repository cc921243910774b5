"""
Pytest configuration and shared fixtures for the Job Application Tracker tests.
"""
import os

# Cheap password hashing for tests; must be set before settings are cached
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import patch

from job_tracker_app.backend.main import app
from job_tracker_app.backend.models.db.database import get_db, Base
from job_tracker_app.backend.models.db import crud
from job_tracker_app.backend.models.db import application as application_model
from job_tracker_app.backend.security import get_password_hash


# Test Database Setup
@pytest.fixture(scope="function")
def test_db_engine():
    """Fresh in-memory SQLite database per test, shared across threads."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine):
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def test_client(test_db_session):
    """Create a test client with overridden database dependency."""
    def override_get_db():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


# User Fixtures
@pytest.fixture
def test_user_data():
    return {
        "email": "test@example.com",
        "password": "testpassword123",
    }


@pytest.fixture
def test_user(test_db_session, test_user_data):
    """Create a test user directly in the database."""
    return crud.create_user(
        test_db_session,
        email=test_user_data["email"],
        hashed_password=get_password_hash(test_user_data["password"]),
    )


@pytest.fixture
def other_user(test_db_session):
    return crud.create_user(
        test_db_session,
        email="other@example.com",
        hashed_password=get_password_hash("otherpassword"),
    )


@pytest.fixture
def logged_in_client(test_client, test_user_data):
    """A client holding a session cookie for a freshly registered user."""
    response = test_client.post("/api/auth/register", json=test_user_data)
    assert response.status_code == 201
    return test_client


@pytest.fixture
def make_application(test_db_session):
    """Insert an application row for a user without going through the API."""
    def _make(user, **fields):
        values = {
            "company": "Acme",
            "title": "Engineer",
            "status": "Applied",
        }
        values.update(fields)
        db_application = application_model.Application(user_id=user.id, **values)
        test_db_session.add(db_application)
        test_db_session.commit()
        test_db_session.refresh(db_application)
        return db_application
    return _make


@pytest.fixture
def sample_application_data():
    return {
        "company": "Tech Innovations Inc",
        "title": "Senior Python Developer",
        "url": "https://example.com/job/123",
        "status": "Applied",
        "appliedDate": "2024-01-15",
        "notes": "Applied through company website",
    }


# Environment Variable Mocks
@pytest.fixture(autouse=True)
def mock_environment_variables():
    """Mock environment variables for testing."""
    test_env = {
        "SECRET_KEY": "test-secret-key-for-session-tokens-12345678901234567890",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, test_env):
        yield test_env
