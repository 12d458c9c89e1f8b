"""Unit tests for Like service layer."""

from unittest.mock import AsyncMock

import pytest

from core.exceptions import AlreadyLikedError, ProfileNotFoundError, SelfLikeError
from domain.entities.like import Like
from domain.services.like_service import LikeService


@pytest.fixture
def notifications() -> AsyncMock:
    return AsyncMock()


def _echo_create(uow) -> None:
    async def create(like: Like) -> Like:
        return like

    uow.likes.create = AsyncMock(side_effect=create)


class TestLike:
    @pytest.mark.asyncio
    async def test_like_creates_edge_and_notifies_owner(self, uow, make_profile, notifications):
        profile = make_profile("user_alice", "Alice")
        uow.likes.exists.return_value = False
        uow.profiles.get.return_value = profile
        _echo_create(uow)
        service = LikeService(lambda: uow, notification_service=notifications)

        like = await service.like("user_bob", profile.id, actor_name="Bob")

        assert like.user_id == "user_bob"
        assert like.profile_id == profile.id
        assert uow.committed is True
        notifications.notify_like.assert_awaited_once_with(
            "user_bob", profile, fallback_name="Bob", fallback_avatar_url=None
        )

    @pytest.mark.asyncio
    async def test_like_unknown_profile(self, uow, profile_id, notifications):
        uow.likes.exists.return_value = False
        uow.profiles.get.return_value = None
        service = LikeService(lambda: uow, notification_service=notifications)

        with pytest.raises(ProfileNotFoundError):
            await service.like("user_bob", profile_id)

        notifications.notify_like.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_like_own_profile(self, uow, make_profile):
        profile = make_profile("user_alice", "Alice")
        uow.likes.exists.return_value = False
        uow.profiles.get.return_value = profile
        service = LikeService(lambda: uow)

        with pytest.raises(SelfLikeError):
            await service.like("user_alice", profile.id)

        uow.likes.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_checked_before_profile_lookup(self, uow, profile_id):
        uow.likes.exists.return_value = True
        service = LikeService(lambda: uow)

        with pytest.raises(AlreadyLikedError):
            await service.like("user_bob", profile_id)

        uow.profiles.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_reported_as_conflict(self, uow, make_profile):
        profile = make_profile("user_alice", "Alice")
        uow.likes.exists.return_value = False
        uow.profiles.get.return_value = profile
        uow.likes.create.return_value = None
        service = LikeService(lambda: uow)

        with pytest.raises(AlreadyLikedError):
            await service.like("user_bob", profile.id)

        assert uow.committed is False


class TestUnlike:
    @pytest.mark.asyncio
    async def test_unlike_removes_edge_and_notification(self, uow, profile_id, notifications):
        uow.likes.delete.return_value = True
        service = LikeService(lambda: uow, notification_service=notifications)

        assert await service.unlike("user_bob", profile_id) is True

        uow.likes.delete.assert_awaited_once_with("user_bob", profile_id)
        notifications.retract_like.assert_awaited_once_with("user_bob", profile_id)

    @pytest.mark.asyncio
    async def test_unlike_without_edge(self, uow, profile_id):
        uow.likes.delete.return_value = False
        service = LikeService(lambda: uow)

        assert await service.unlike("user_bob", profile_id) is False
