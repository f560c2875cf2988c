"""Tests for location sharing endpoints"""

import pytest
from datetime import datetime, timedelta
from httpx import AsyncClient
from fastapi import status

from fieldops.models import Location

from conftest import login_as


@pytest.mark.asyncio
class TestLocations:

    async def test_record_location(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.post("/api/v1/locations", json={"lat": 45.5, "lng": -122.6})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["user_id"] == str(sample_user.id)
        assert data["lat"] == 45.5

    async def test_out_of_range_coordinates(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.post("/api/v1/locations", json={"lat": 91, "lng": 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_live_shows_latest_per_user(
        self, async_client: AsyncClient, db_session, sample_user, other_user
    ):
        """Test each user appears once, at their newest ping, however old it is"""
        base = datetime(2024, 3, 13, 8)
        db_session.add_all([
            Location(user_id=sample_user.id, lat=1.0, lng=1.0, timestamp=base),
            Location(user_id=sample_user.id, lat=2.0, lng=2.0, timestamp=base + timedelta(minutes=5)),
            Location(user_id=other_user.id, lat=9.0, lng=9.0, timestamp=base - timedelta(days=30)),
        ])
        await db_session.commit()
        await login_as(async_client, sample_user)

        response = await async_client.get("/api/v1/locations/live")

        assert response.status_code == status.HTTP_200_OK
        live = response.json()
        assert [(row["user"]["email"], row["location"]["lat"]) for row in live] == [
            ("worker@example.com", 2.0),
            ("other@example.com", 9.0),
        ]

    async def test_own_history(self, async_client: AsyncClient, db_session, sample_user):
        base = datetime(2024, 3, 13, 8)
        db_session.add_all([
            Location(user_id=sample_user.id, lat=1.0, lng=1.0, timestamp=base),
            Location(user_id=sample_user.id, lat=2.0, lng=2.0, timestamp=base + timedelta(minutes=5)),
        ])
        await db_session.commit()
        await login_as(async_client, sample_user)

        response = await async_client.get("/api/v1/locations/history")

        assert [row["lat"] for row in response.json()] == [2.0, 1.0]

    async def test_other_users_history_is_admin_only(
        self, async_client: AsyncClient, db_session, admin_user, sample_user, other_user
    ):
        db_session.add(Location(user_id=other_user.id, lat=3.0, lng=3.0, timestamp=datetime(2024, 3, 13)))
        await db_session.commit()

        await login_as(async_client, sample_user)
        response = await async_client.get("/api/v1/locations/history", params={"user_id": str(other_user.id)})
        assert response.status_code == status.HTTP_403_FORBIDDEN

        await login_as(async_client, admin_user)
        response = await async_client.get("/api/v1/locations/history", params={"user_id": str(other_user.id)})
        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 1
