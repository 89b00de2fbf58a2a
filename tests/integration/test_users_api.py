"""Integration tests for user settings endpoints."""

import pytest
from httpx import AsyncClient


class TestUserSettings:
    @pytest.mark.asyncio
    async def test_get_settings(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/v1/users/settings", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "testuser@example.com"
        assert data["interval_type"] == "MONTHLY"
        assert data["has_bank_link"] is False

    @pytest.mark.asyncio
    async def test_update_interval(self, client: AsyncClient, auth_headers):
        response = await client.put(
            "/api/v1/users/settings",
            headers=auth_headers,
            json={"interval_type": "BIWEEKLY", "interval_start_date": "2024-01-01"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["interval_type"] == "BIWEEKLY"
        assert data["interval_start_date"] == "2024-01-01"

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, client: AsyncClient, auth_headers):
        response = await client.put("/api/v1/users/settings", headers=auth_headers, json={})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_002"

    @pytest.mark.asyncio
    async def test_unknown_interval_rejected(self, client: AsyncClient, auth_headers):
        response = await client.put(
            "/api/v1/users/settings", headers=auth_headers, json={"interval_type": "DAILY"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_linked_user_reports_bank_link(self, client: AsyncClient, auth_headers, linked_user):
        response = await client.get("/api/v1/users/settings", headers=auth_headers)

        assert response.json()["has_bank_link"] is True
