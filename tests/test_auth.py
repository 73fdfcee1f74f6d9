"""
Tests for authentication endpoints.
"""
from conftest import TEST_PASSWORD, make_user


class TestAuthEndpoints:
    """Test auth endpoints."""

    def test_register_user(self, client):
        """Registration returns 201 with tokens and the public profile."""
        response = client.post(
            "/api/auth/register",
            json={
                "username": "alice",
                "email": "alice@example.com",
                "password": "password1",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["username"] == "alice"
        assert data["user"]["display_name"] == "alice"
        assert data["user"]["followers_count"] == 0
        assert "password_hash" not in data["user"]

    def test_register_duplicate_username(self, client, test_user):
        """Registering an existing username is a conflict."""
        response = client.post(
            "/api/auth/register",
            json={
                "username": "testuser",
                "email": "someone-else@example.com",
                "password": "anotherpassword",
            },
        )
        assert response.status_code == 409
        assert response.json()["error"] == "user already exists"
        assert response.json()["error_code"] == "CONFLICT"

    def test_register_duplicate_email(self, client, test_user):
        """Registering an existing email is a conflict."""
        response = client.post(
            "/api/auth/register",
            json={
                "username": "brandnew",
                "email": "testuser@example.com",
                "password": "anotherpassword",
            },
        )
        assert response.status_code == 409

    def test_register_short_username(self, client):
        """Usernames under three characters are rejected."""
        response = client.post(
            "/api/auth/register",
            json={"username": "al", "email": "al@example.com", "password": "password1"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_register_short_password(self, client):
        """Passwords under eight characters are rejected."""
        response = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "alice@example.com", "password": "short"},
        )
        assert response.status_code == 400

    def test_register_invalid_email(self, client):
        """A malformed email fails request validation with 400."""
        response = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "not-an-email", "password": "password1"},
        )
        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_login_with_username(self, client, test_user):
        """Test successful login by username."""
        response = client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": TEST_PASSWORD},
        )
        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["user"]["id"] == str(test_user.id)

    def test_login_with_email(self, client, test_user):
        """Test successful login by email."""
        response = client.post(
            "/api/auth/login",
            json={"email": "testuser@example.com", "password": TEST_PASSWORD},
        )
        assert response.status_code == 200

    def test_login_wrong_password(self, client, test_user):
        """Test login with wrong password fails."""
        response = client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": "wrongpassword"},
        )
        assert response.status_code == 401

    def test_login_nonexistent_user(self, client):
        """Test login with non-existent user fails."""
        response = client.post(
            "/api/auth/login",
            json={"username": "nobody", "password": "anypassword"},
        )
        assert response.status_code == 401

    def test_login_inactive_user(self, client, db):
        """Deactivated accounts cannot log in."""
        make_user(db, "sleeper", is_active=False)
        response = client.post(
            "/api/auth/login",
            json={"username": "sleeper", "password": TEST_PASSWORD},
        )
        assert response.status_code == 401

    def test_get_current_user(self, client, test_user):
        """Test getting current user info with a token from login."""
        login_response = client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": TEST_PASSWORD},
        )
        token = login_response.json()["access_token"]

        response = client.get(
            "/api/auth/me",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == test_user.email
        assert data["id"] == str(test_user.id)
        assert data["posts_count"] == 0

    def test_get_current_user_unauthenticated(self, client):
        """Test getting current user without auth fails."""
        response = client.get("/api/auth/me")
        assert response.status_code == 401

    def test_get_current_user_bad_token(self, client):
        """A garbage token is treated as anonymous."""
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_refresh_token(self, client, test_user):
        """Test token refresh."""
        login_response = client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": TEST_PASSWORD},
        )
        refresh_token = login_response.json()["refresh_token"]

        response = client.post(
            "/api/auth/refresh",
            json={"refresh_token": refresh_token},
        )
        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data

    def test_refresh_rejects_access_token(self, client, test_user):
        """An access token cannot be used as a refresh token."""
        login_response = client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": TEST_PASSWORD},
        )
        access_token = login_response.json()["access_token"]

        response = client.post("/api/auth/refresh", json={"refresh_token": access_token})
        assert response.status_code == 401

    def test_logout(self, client, auth_headers):
        """Logout is acknowledged for an authenticated caller."""
        response = client.post("/api/auth/logout", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "logged out successfully"
