"""Unit tests for Notification service layer."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from core.exceptions import IdentityProviderError
from domain.entities.notification import Notification, NotificationTypes
from domain.services.notification_service import NotificationService
from infrastructure.auth.provider import IdentityUser


class FakeIdentityDirectory:
    """In-memory identity directory."""

    def __init__(self, users: dict[str, IdentityUser] | None = None, error: Exception | None = None):
        self.users = users or {}
        self.error = error
        self.calls: list[str] = []

    async def get_user(self, user_id: str) -> IdentityUser | None:
        self.calls.append(user_id)
        if self.error:
            raise self.error
        return self.users.get(user_id)


def _echo_create(uow) -> None:
    async def create(notification: Notification) -> Notification:
        return notification

    uow.notifications.create = AsyncMock(side_effect=create)


# --- Actor resolution ---


class TestResolveActor:
    @pytest.mark.asyncio
    async def test_prefers_actor_profile(self, uow, make_profile):
        uow.profiles.get_by_user_id.return_value = make_profile(
            "user_bob", "Bob", avatar_url="https://img/bob.png"
        )
        directory = FakeIdentityDirectory({"user_bob": IdentityUser(id="user_bob", first_name="Robert")})
        service = NotificationService(lambda: uow, identity_directory=directory)

        actor = await service.resolve_actor(uow, "user_bob", fallback_name="Token Bob")

        assert actor.name == "Bob"
        assert actor.avatar_url == "https://img/bob.png"
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_falls_back_to_identity_directory(self, uow):
        uow.profiles.get_by_user_id.return_value = None
        directory = FakeIdentityDirectory(
            {
                "user_bob": IdentityUser(
                    id="user_bob", first_name="Bob", last_name="Stone", image_url="https://idp/bob.png"
                )
            }
        )
        service = NotificationService(lambda: uow, identity_directory=directory)

        actor = await service.resolve_actor(uow, "user_bob", fallback_name="Token Bob")

        assert actor.name == "Bob Stone"
        assert actor.avatar_url == "https://idp/bob.png"

    @pytest.mark.asyncio
    async def test_falls_back_to_token_name_when_directory_fails(self, uow):
        uow.profiles.get_by_user_id.return_value = None
        directory = FakeIdentityDirectory(error=IdentityProviderError("down"))
        service = NotificationService(lambda: uow, identity_directory=directory)

        actor = await service.resolve_actor(uow, "user_bob", fallback_name="Token Bob")

        assert actor.name == "Token Bob"

    @pytest.mark.asyncio
    async def test_defaults_to_someone(self, uow):
        uow.profiles.get_by_user_id.return_value = None
        service = NotificationService(lambda: uow, identity_directory=FakeIdentityDirectory())

        actor = await service.resolve_actor(uow, "user_bob")

        assert actor.name == "Someone"
        assert actor.avatar_url is None


# --- Side effects ---


class TestNotifyFollow:
    @pytest.mark.asyncio
    async def test_writes_follow_notification_for_recipient(self, uow, make_profile):
        uow.profiles.get_by_user_id.return_value = make_profile("user_bob", "Bob")
        _echo_create(uow)
        service = NotificationService(lambda: uow)

        created = await service.notify_follow("user_bob", "user_alice")

        assert created is not None
        assert created.user_id == "user_alice"
        assert created.type == NotificationTypes.FOLLOW
        assert created.actor_user_id == "user_bob"
        assert created.actor_name == "Bob"
        assert created.profile_id is None
        assert uow.committed is True

    @pytest.mark.asyncio
    async def test_swallows_store_failure(self, uow):
        uow.profiles.get_by_user_id.return_value = None
        uow.notifications.create.side_effect = RuntimeError("connection reset")
        service = NotificationService(lambda: uow)

        assert await service.notify_follow("user_bob", "user_alice") is None
        assert uow.committed is False


class TestNotifyLike:
    @pytest.mark.asyncio
    async def test_carries_profile_reference(self, uow, make_profile):
        liked = make_profile("user_alice", "Alice")
        uow.profiles.get_by_user_id.return_value = None
        _echo_create(uow)
        service = NotificationService(lambda: uow)

        created = await service.notify_like("user_bob", liked, fallback_name="Bobby")

        assert created is not None
        assert created.user_id == "user_alice"
        assert created.type == NotificationTypes.LIKE
        assert created.profile_id == liked.id
        assert created.profile_name == "Alice"
        assert created.actor_name == "Bobby"


class TestRetract:
    @pytest.mark.asyncio
    async def test_retract_follow_matches_recipient_actor_and_type(self, uow):
        uow.notifications.delete_matching.return_value = 2
        service = NotificationService(lambda: uow)

        deleted = await service.retract_follow("user_bob", "user_alice")

        assert deleted == 2
        uow.notifications.delete_matching.assert_awaited_once_with(
            NotificationTypes.FOLLOW, "user_bob", user_id="user_alice"
        )
        assert uow.committed is True

    @pytest.mark.asyncio
    async def test_retract_like_matches_actor_profile_and_type(self, uow, profile_id):
        uow.notifications.delete_matching.return_value = 1
        service = NotificationService(lambda: uow)

        await service.retract_like("user_bob", profile_id)

        uow.notifications.delete_matching.assert_awaited_once_with(
            NotificationTypes.LIKE, "user_bob", profile_id=profile_id
        )

    @pytest.mark.asyncio
    async def test_retract_swallows_failure(self, uow):
        uow.notifications.delete_matching.side_effect = RuntimeError("boom")
        service = NotificationService(lambda: uow)

        assert await service.retract_follow("user_bob", "user_alice") == 0


# --- Reads and marks ---


class TestReadAndMark:
    @pytest.mark.asyncio
    async def test_get_notifications_uses_list_limit(self, uow):
        uow.notifications.get_user_notifications.return_value = []
        service = NotificationService(lambda: uow, list_limit=50)

        await service.get_notifications("user_alice", unread_only=True)

        uow.notifications.get_user_notifications.assert_awaited_once_with(
            "user_alice", unread_only=True, limit=50
        )

    @pytest.mark.asyncio
    async def test_mark_read_scopes_to_caller(self, uow):
        ids = [uuid4(), uuid4()]
        uow.notifications.mark_read.return_value = 1
        service = NotificationService(lambda: uow)

        count = await service.mark_read("user_alice", ids)

        assert count == 1
        uow.notifications.mark_read.assert_awaited_once_with("user_alice", ids)
        assert uow.committed is True

    @pytest.mark.asyncio
    async def test_mark_read_with_no_ids_is_noop(self, uow):
        service = NotificationService(lambda: uow)

        assert await service.mark_read("user_alice", []) == 0
        uow.notifications.mark_read.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_mark_all_read(self, uow):
        uow.notifications.mark_all_read.return_value = 4
        service = NotificationService(lambda: uow)

        assert await service.mark_all_read("user_alice") == 4
        assert uow.committed is True
