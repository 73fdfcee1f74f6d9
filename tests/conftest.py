"""
Pytest configuration and fixtures for Digeon API tests.
"""
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="digeon-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from digeon.auth import create_access_token, get_password_hash
from digeon.config import get_settings
from digeon.database import Base, get_db
from digeon.limiter import limiter
from digeon.main import app
from digeon.models.user import User

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None

# bcrypt is slow; every fixture user shares this password
TEST_PASSWORD = "testpassword123"
_TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def upload_dir(tmp_path, monkeypatch):
    """Point media storage at a temporary directory."""
    monkeypatch.setattr(get_settings(), "upload_dir", str(tmp_path))
    return tmp_path


def make_user(db, username: str, **fields) -> User:
    """Insert an active user directly."""
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=_TEST_PASSWORD_HASH,
        display_name=fields.pop("display_name", username.title()),
        is_active=fields.pop("is_active", True),
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user: User) -> dict:
    """Bearer auth headers for a user."""
    token = create_access_token({"sub": str(user.id), "username": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def test_user(db):
    """Create a test user."""
    return make_user(db, "testuser", display_name="Test User")


@pytest.fixture(scope="function")
def other_user(db):
    """A second account to interact with."""
    return make_user(db, "otheruser", display_name="Other User")


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """Get auth headers for the test user."""
    return headers_for(test_user)


@pytest.fixture(scope="function")
def other_headers(other_user):
    """Get auth headers for the second user."""
    return headers_for(other_user)
