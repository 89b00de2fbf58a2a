"""Integration tests for authentication API endpoints."""

from datetime import date

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.core.security import create_access_token, create_refresh_token
from envelope_budget.models.user import User
from envelope_budget.repositories.identity import IdentityRepository
from envelope_budget.repositories.user import UserRepository


class TestUserRegistration:
    """Test user registration endpoint."""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "newuser@example.com", "password": "SecurePass123!", "name": "New User"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "newuser@example.com"
        assert data["name"] == "New User"
        assert "password" not in data

        identity = await IdentityRepository(db_session).get_by_email("newuser@example.com")
        assert identity is not None
        assert identity.password_hash != "SecurePass123!"

        user = await UserRepository(db_session).get_by_subject(identity.subject)
        assert user is not None
        assert user.interval_type.value == "MONTHLY"
        assert user.interval_start_date == date.today()
        assert user.bank_access_token is None

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": test_user.email, "password": "AnotherPass123!", "name": "Duplicate"},
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "USER_002"

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "not-an-email", "password": "SecurePass123!", "name": "Test User"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "test@example.com", "password": "short", "name": "Test User"},
        )

        assert response.status_code == 400
        assert "password" in response.json()["message"]


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "password123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user_id"] == str(test_user.id)
        assert data["name"] == "Test User"

        me = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
        )
        assert me.status_code == 200
        assert me.json()["email"] == "testuser@example.com"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "WrongPassword"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_002"

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert response.status_code == 401


class TestTokens:
    @pytest.mark.asyncio
    async def test_refresh(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": create_refresh_token(test_user.subject_id)},
        )

        assert response.status_code == 200
        assert "access_token" in response.json()

    @pytest.mark.asyncio
    async def test_access_token_not_accepted_as_refresh(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": create_access_token(test_user.subject_id)},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_001"

    @pytest.mark.asyncio
    async def test_me_without_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_me_with_invalid_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_for_unknown_subject(self, client: AsyncClient):
        token = create_access_token("no-such-subject")

        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_001"
