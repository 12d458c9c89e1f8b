"""Follow service layer with business logic."""

from collections.abc import Callable
from typing import Optional

import structlog

from core.exceptions import AlreadyFollowingError, SelfFollowError, ValidationError
from domain.entities.follow import Follow
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import NotificationService

logger = structlog.get_logger()


class FollowService:
    """Service layer for follow edges between users."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        notification_service: Optional[NotificationService] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._notification = notification_service

    async def follow(
        self,
        follower_id: str,
        following_id: str,
        actor_name: str | None = None,
        actor_avatar_url: str | None = None,
    ) -> Follow:
        """Create a follow edge and notify the followed user.

        Raises:
            ValidationError: If following_id is empty
            SelfFollowError: If the user tries to follow themselves
            AlreadyFollowingError: If the edge already exists
        """
        if not following_id:
            raise ValidationError("following_id is required")
        if follower_id == following_id:
            raise SelfFollowError()

        async with self._uow_factory() as uow:
            if await uow.follows.exists(follower_id, following_id):
                raise AlreadyFollowingError(following_id)

            created = await uow.follows.create(
                Follow(follower_id=follower_id, following_id=following_id)
            )
            # Lost a race with a concurrent request for the same pair
            if created is None:
                raise AlreadyFollowingError(following_id)
            await uow.commit()

        logger.info("follow_created", follower_id=follower_id, following_id=following_id)

        if self._notification:
            await self._notification.notify_follow(
                follower_id,
                following_id,
                fallback_name=actor_name,
                fallback_avatar_url=actor_avatar_url,
            )

        return created

    async def unfollow(self, follower_id: str, following_id: str) -> bool:
        """Remove a follow edge. Returns False if there was none.

        The matching follow notifications are removed either way.
        """
        if not following_id:
            raise ValidationError("following_id is required")

        async with self._uow_factory() as uow:
            deleted = await uow.follows.delete(follower_id, following_id)
            await uow.commit()

        logger.info(
            "follow_deleted",
            follower_id=follower_id,
            following_id=following_id,
            existed=deleted,
        )

        if self._notification:
            await self._notification.retract_follow(follower_id, following_id)

        return deleted
