# =============================================================================
# tests/test_auth_api.py - Bearer Authentication Tests
# =============================================================================

from lib.security import create_access_token

ME_URL = "/api/v1/auth/me"
VERIFY_URL = "/api/v1/auth/verify"


class TestBearerAuthentication:
    """Test header handling of the get_current_user dependency."""

    def test_missing_header(self, client):
        response = client.get(ME_URL)

        assert response.status_code == 401
        assert response.json()["message"] == "Authorization header missing"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_wrong_scheme(self, client):
        response = client.get(ME_URL, headers={"Authorization": "Token abc"})

        assert response.status_code == 401
        assert response.json()["message"] == (
            "Invalid authorization header format. Expected: Bearer <token>"
        )

    def test_extra_parts(self, client):
        response = client.get(ME_URL, headers={"Authorization": "Bearer a b"})

        assert response.status_code == 401
        assert "Expected: Bearer <token>" in response.json()["message"]

    def test_invalid_token(self, client):
        response = client.get(ME_URL, headers={"Authorization": "Bearer not.a.jwt"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_expired_token(self, client, registered_user):
        token = create_access_token(registered_user["id"], expires_in=-60)

        response = client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"


class TestCurrentUser:
    """Test GET /auth/me and /auth/verify."""

    def test_me(self, client, registered_user, auth_headers):
        response = client.get(ME_URL, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == registered_user["id"]
        assert data["email"] == registered_user["email"]
        assert data["fullName"] == registered_user["fullName"]

    def test_me_for_deleted_user(self, client):
        token = create_access_token(999)

        response = client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    def test_verify(self, client, registered_user, auth_headers):
        response = client.get(VERIFY_URL, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Token is valid"
        assert body["data"] == {
            "valid": True,
            "userId": registered_user["id"],
            "email": registered_user["email"],
        }
