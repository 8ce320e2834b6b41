# =============================================================================
# tests/test_users_api.py - Registration and Login Endpoint Tests
# =============================================================================

from unittest.mock import patch

from core.repositories import UserRepository
from lib.security import decode_access_token
from tests.conftest import TEST_PASSWORD

REGISTER_URL = "/api/v1/users/register"
LOGIN_URL = "/api/v1/users/login"


class TestRegister:
    """Test POST /api/v1/users/register."""

    def test_register_success(self, client):
        response = client.post(
            REGISTER_URL,
            json={"email": "jane@example.com", "password": TEST_PASSWORD, "fullName": "Jane Doe"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert isinstance(body["data"]["userId"], int)

    def test_register_duplicate_email(self, client, registered_user):
        response = client.post(
            REGISTER_URL,
            json={"email": registered_user["email"], "password": TEST_PASSWORD, "fullName": "Copy"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Email already exists"
        assert body["code"] == "EMAIL_ALREADY_EXISTS"

    def test_register_duplicate_email_differs_only_in_case(self, client, registered_user):
        response = client.post(
            REGISTER_URL,
            json={"email": "JANE@EXAMPLE.COM", "password": TEST_PASSWORD, "fullName": "Copy"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email already exists"

    def test_register_duplicate_caught_by_unique_constraint(self, client, registered_user):
        """Two registrations racing past the lookup still end in a clean 400."""
        with patch.object(UserRepository, "find_by_email", return_value=None):
            response = client.post(
                REGISTER_URL,
                json={"email": registered_user["email"], "password": TEST_PASSWORD, "fullName": "Copy"},
            )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Email already exists"
        assert body["code"] == "EMAIL_ALREADY_EXISTS"

    def test_register_password_too_long(self, client):
        response = client.post(
            REGISTER_URL,
            json={"email": "jane@example.com", "password": "Password1" + "a" * 64, "fullName": "Jane"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0] == {
            "field": "password",
            "message": "Password must be at most 72 bytes long",
        }

    def test_register_validation_errors(self, client):
        response = client.post(
            REGISTER_URL,
            json={"email": "nope", "password": "short"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        fields = {error["field"]: error["message"] for error in body["errors"]}
        assert fields["email"] == "Must be a valid email address"
        assert fields["password"] == "Password must be at least 6 characters long"
        assert "fullName" in fields

    def test_register_weak_password(self, client):
        response = client.post(
            REGISTER_URL,
            json={"email": "jane@example.com", "password": "alllowercase1", "fullName": "Jane"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"


class TestLogin:
    """Test POST /api/v1/users/login."""

    def test_login_success(self, client, registered_user):
        response = client.post(
            LOGIN_URL,
            json={"email": registered_user["email"], "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"

        user = body["data"]["user"]
        assert user["id"] == registered_user["id"]
        assert user["email"] == "jane@example.com"
        assert user["fullName"] == "Jane Doe"
        assert "createdAt" in user
        assert "password" not in user

        claims = decode_access_token(body["data"]["token"])
        assert claims.user_id == registered_user["id"]

    def test_login_email_is_case_insensitive(self, client, registered_user):
        response = client.post(
            LOGIN_URL,
            json={"email": "Jane@Example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200

    def test_login_wrong_password(self, client, registered_user):
        response = client.post(
            LOGIN_URL,
            json={"email": registered_user["email"], "password": "WrongPass1"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_rejects_password_extended_past_72_bytes(self, client):
        password = "Password1" + "a" * 63
        registered = client.post(
            REGISTER_URL,
            json={"email": "long@example.com", "password": password, "fullName": "Long"},
        )
        assert registered.status_code == 201

        response = client.post(
            LOGIN_URL,
            json={"email": "long@example.com", "password": password + "DIFFERENT"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_unknown_email(self, client):
        response = client.post(
            LOGIN_URL,
            json={"email": "ghost@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_missing_password(self, client):
        response = client.post(LOGIN_URL, json={"email": "jane@example.com"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"
