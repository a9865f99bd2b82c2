"""Integration tests for authentication API endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from clarity.core.security import create_access_token, get_user_id_from_token
from clarity.models.user import User
from clarity.repositories.user import UserRepository


class TestSignup:
    """Test signup endpoint."""

    @pytest.mark.asyncio
    async def test_signup_success(self, client: AsyncClient, db_session: AsyncSession):
        """Test successful signup returns a token and the public profile."""
        response = await client.post(
            "/api/auth/signup",
            json={"email": "ann@example.com", "password": "secret1", "name": "Ann"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User created successfully"
        assert data["user"]["email"] == "ann@example.com"
        assert data["user"]["name"] == "Ann"
        assert "password" not in data["user"]
        assert "passwordHash" not in data["user"]
        assert "password_hash" not in data["user"]

        # Token identifies the new user
        assert str(get_user_id_from_token(data["token"])) == data["user"]["id"]

        repo = UserRepository(db_session)
        user = await repo.get_by_email("ann@example.com")
        assert user is not None
        assert user.password_hash != "secret1"

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, client: AsyncClient, test_user: User):
        """Test signup with an existing email returns 400."""
        response = await client.post(
            "/api/auth/signup",
            json={"email": test_user.email, "password": "another1", "name": "Dup"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "AUTH_004"

    @pytest.mark.asyncio
    async def test_signup_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/auth/signup", json={"email": "x@example.com"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    @pytest.mark.asyncio
    async def test_signup_invalid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/signup",
            json={"email": "not-an-email", "password": "secret1", "name": "Ann"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_signup_short_password(self, client: AsyncClient):
        """Test signup with password shorter than 6 characters."""
        response = await client.post(
            "/api/auth/signup",
            json={"email": "ann@example.com", "password": "12345", "name": "Ann"},
        )

        assert response.status_code == 400


class TestLogin:
    """Test login endpoint."""

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/auth/login",
            json={"email": "testuser@example.com", "password": "password123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["id"] == str(test_user.id)
        assert get_user_id_from_token(data["token"]) == test_user.id

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/auth/login",
            json={"email": "testuser@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_003"

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient):
        """Unknown email is indistinguishable from a wrong password."""
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_003"

    @pytest.mark.asyncio
    async def test_login_missing_password(self, client: AsyncClient):
        response = await client.post("/api/auth/login", json={"email": "testuser@example.com"})

        assert response.status_code == 400


class TestCurrentUser:
    """Test the authenticated profile endpoint and token checks."""

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, test_user: User, auth_headers: dict):
        response = await client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "id": str(test_user.id),
            "email": "testuser@example.com",
            "name": "Test User",
        }

    @pytest.mark.asyncio
    async def test_me_without_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_001"

    @pytest.mark.asyncio
    async def test_me_with_invalid_token(self, client: AsyncClient):
        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "AUTH_002"

    @pytest.mark.asyncio
    async def test_me_for_unknown_user(self, client: AsyncClient):
        """A well-formed token for a user that does not exist is rejected."""
        token = create_access_token(uuid4())
        response = await client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403
