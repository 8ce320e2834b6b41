# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Points the app at a throwaway SQLite database and upload directory
#   before any imports
# - Provides a TestClient with a fresh schema per test
# - Provides registered users and auth headers
# =============================================================================

import os
import shutil
import tempfile

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

_TEST_ROOT = tempfile.mkdtemp(prefix="image-api-tests-")

os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TEST_ROOT, 'test.db')}")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TEST_ROOT, "uploads"))
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789abcdef")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

TEST_PASSWORD = "Password123"

# Smallest byte strings that look like the declared types; the API trusts
# the multipart content type and never decodes the image.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32


def _reset_storage() -> None:
    from app.config import settings

    shutil.rmtree(settings.UPLOAD_DIR, ignore_errors=True)


def _reset_schema() -> None:
    import core.entities  # noqa: F401
    from lib.database import Base, engine

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """TestClient running the app lifespan against an empty database."""
    from app.main import app

    _reset_storage()
    _reset_schema()

    with TestClient(app) as test_client:
        yield test_client

    _reset_storage()


@pytest.fixture
def db_session():
    """A database session on an empty schema, for service-level tests."""
    from lib.database import SessionLocal

    _reset_storage()
    _reset_schema()

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        _reset_storage()


@pytest.fixture
def register_user(client):
    """Factory: register a user through the API and return its credentials."""

    def _register(email: str = "jane@example.com", full_name: str = "Jane Doe") -> dict:
        payload = {"email": email, "password": TEST_PASSWORD, "fullName": full_name}
        response = client.post("/api/v1/users/register", json=payload)
        assert response.status_code == 201, response.text
        return {**payload, "id": response.json()["data"]["userId"]}

    return _register


@pytest.fixture
def login_as(client):
    """Factory: log in and return Authorization headers."""

    def _login(email: str, password: str = TEST_PASSWORD) -> dict[str, str]:
        response = client.post(
            "/api/v1/users/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['data']['token']}"}

    return _login


@pytest.fixture
def registered_user(register_user):
    return register_user()


@pytest.fixture
def auth_headers(registered_user, login_as):
    return login_as(registered_user["email"])


@pytest.fixture
def other_auth_headers(register_user, login_as):
    """Headers for a second user who owns nothing."""
    user = register_user(email="mallory@example.com", full_name="Mallory")
    return login_as(user["email"])


@pytest.fixture
def upload_image(client):
    """Factory: upload an image and return the response body's data."""

    def _upload(
        headers: dict[str, str],
        filename: str = "photo.png",
        content: bytes = PNG_BYTES,
        content_type: str = "image/png",
    ) -> dict:
        response = client.post(
            "/api/v1/images",
            files={"image": (filename, content, content_type)},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _upload
