"""Integration tests for Likes API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient


class TestLike:
    @pytest.mark.asyncio
    async def test_like_updates_count_and_notifies_owner(
        self, client: AsyncClient, create_profile, headers_for
    ) -> None:
        alice = await create_profile("user_alice", "Alice")
        await create_profile("user_bob", "Bob")
        headers = headers_for("user_bob")

        response = await client.post("/api/likes", json={"profile_id": alice["id"]}, headers=headers)

        assert response.status_code == 201
        assert response.json()["message"] == "Successfully liked profile"

        profile = (await client.get("/api/profiles/user_alice", headers=headers)).json()["data"]
        assert profile["like_count"] == 1
        assert profile["is_liked"] is True

        notifications = (
            await client.get("/api/notifications", headers=headers_for("user_alice"))
        ).json()["data"]
        assert len(notifications) == 1
        assert notifications[0]["type"] == "like"
        assert notifications[0]["actor_name"] == "Bob"
        assert notifications[0]["profile_id"] == alice["id"]
        assert notifications[0]["profile_name"] == "Alice"

    @pytest.mark.asyncio
    async def test_like_unknown_profile_is_404(self, client: AsyncClient, headers_for) -> None:
        response = await client.post(
            "/api/likes", json={"profile_id": str(uuid4())}, headers=headers_for("user_bob")
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Profile not found"

    @pytest.mark.asyncio
    async def test_like_own_profile_is_400(
        self, client: AsyncClient, create_profile, headers_for
    ) -> None:
        alice = await create_profile("user_alice", "Alice")

        response = await client.post(
            "/api/likes", json={"profile_id": alice["id"]}, headers=headers_for("user_alice")
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "SELF_LIKE"

    @pytest.mark.asyncio
    async def test_duplicate_like_is_400_and_counted_once(
        self, client: AsyncClient, create_profile, headers_for
    ) -> None:
        alice = await create_profile("user_alice", "Alice")
        headers = headers_for("user_bob")
        await client.post("/api/likes", json={"profile_id": alice["id"]}, headers=headers)

        response = await client.post("/api/likes", json={"profile_id": alice["id"]}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Already liked this profile"
        profile = (await client.get("/api/profiles/user_alice")).json()["data"]
        assert profile["like_count"] == 1

    @pytest.mark.asyncio
    async def test_malformed_profile_id_is_400(self, client: AsyncClient, headers_for) -> None:
        response = await client.post(
            "/api/likes", json={"profile_id": "not-a-uuid"}, headers=headers_for("user_bob")
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestUnlike:
    @pytest.mark.asyncio
    async def test_unlike_removes_like_and_notification(
        self, client: AsyncClient, create_profile, headers_for
    ) -> None:
        alice = await create_profile("user_alice", "Alice")
        headers = headers_for("user_bob")
        await client.post("/api/likes", json={"profile_id": alice["id"]}, headers=headers)

        response = await client.delete(
            "/api/likes", params={"profile_id": alice["id"]}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Successfully unliked profile"
        profile = (await client.get("/api/profiles/user_alice", headers=headers)).json()["data"]
        assert profile["like_count"] == 0
        assert profile["is_liked"] is False
        notifications = (
            await client.get("/api/notifications", headers=headers_for("user_alice"))
        ).json()["data"]
        assert notifications == []

    @pytest.mark.asyncio
    async def test_unlike_never_liked_is_200(self, client: AsyncClient, headers_for) -> None:
        response = await client.delete(
            "/api/likes", params={"profile_id": str(uuid4())}, headers=headers_for("user_bob")
        )

        assert response.status_code == 200
