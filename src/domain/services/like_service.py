"""Like service layer with business logic."""

from collections.abc import Callable
from typing import Optional
from uuid import UUID

import structlog

from core.exceptions import AlreadyLikedError, ProfileNotFoundError, SelfLikeError
from domain.entities.like import Like
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import NotificationService

logger = structlog.get_logger()


class LikeService:
    """Service layer for likes on profiles."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        notification_service: Optional[NotificationService] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._notification = notification_service

    async def like(
        self,
        user_id: str,
        profile_id: UUID,
        actor_name: str | None = None,
        actor_avatar_url: str | None = None,
    ) -> Like:
        """Like a profile and notify its owner.

        Raises:
            AlreadyLikedError: If the user already likes the profile
            ProfileNotFoundError: If the profile does not exist
            SelfLikeError: If the user owns the profile
        """
        async with self._uow_factory() as uow:
            if await uow.likes.exists(user_id, profile_id):
                raise AlreadyLikedError(str(profile_id))

            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            if profile.user_id == user_id:
                raise SelfLikeError()

            created = await uow.likes.create(Like(user_id=user_id, profile_id=profile_id))
            if created is None:
                raise AlreadyLikedError(str(profile_id))
            await uow.commit()

        logger.info("like_created", user_id=user_id, profile_id=str(profile_id))

        if self._notification:
            await self._notification.notify_like(
                user_id,
                profile,
                fallback_name=actor_name,
                fallback_avatar_url=actor_avatar_url,
            )

        return created

    async def unlike(self, user_id: str, profile_id: UUID) -> bool:
        """Remove a like. Returns False if there was none."""
        async with self._uow_factory() as uow:
            deleted = await uow.likes.delete(user_id, profile_id)
            await uow.commit()

        logger.info(
            "like_deleted",
            user_id=user_id,
            profile_id=str(profile_id),
            existed=deleted,
        )

        if self._notification:
            await self._notification.retract_like(user_id, profile_id)

        return deleted
