"""Notification service layer for creating and managing notifications."""

from collections.abc import Callable
from typing import Optional
from uuid import UUID

import structlog

from core.exceptions import AppException
from domain.entities.notification import ActorSummary, Notification, NotificationTypes
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IIdentityDirectory

logger = structlog.get_logger()

DEFAULT_ACTOR_NAME = "Someone"
NOTIFICATION_LIST_LIMIT = 50


class NotificationService:
    """Service layer for notification creation and management.

    Writes triggered by follows and likes run in their own Unit of Work
    after the edge has been committed. They never raise: failures are
    logged and the caller's mutation stands.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        identity_directory: Optional[IIdentityDirectory] = None,
        list_limit: int = NOTIFICATION_LIST_LIMIT,
    ) -> None:
        self._uow_factory = uow_factory
        self._identity = identity_directory
        self._list_limit = list_limit

    # --- Read / mark methods ---

    async def get_notifications(
        self, user_id: str, unread_only: bool = False
    ) -> list[Notification]:
        """Get the recipient's newest notifications."""
        async with self._uow_factory() as uow:
            return await uow.notifications.get_user_notifications(
                user_id, unread_only=unread_only, limit=self._list_limit
            )

    async def mark_read(self, user_id: str, notification_ids: list[UUID]) -> int:
        """Mark the given notifications read. IDs owned by others are ignored."""
        if not notification_ids:
            return 0
        async with self._uow_factory() as uow:
            count = await uow.notifications.mark_read(user_id, notification_ids)
            await uow.commit()
        return count

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every notification of the recipient read."""
        async with self._uow_factory() as uow:
            count = await uow.notifications.mark_all_read(user_id)
            await uow.commit()
        return count

    # --- Side effects of follow/like mutations ---

    async def notify_follow(
        self,
        actor_id: str,
        recipient_id: str,
        fallback_name: str | None = None,
        fallback_avatar_url: str | None = None,
    ) -> Notification | None:
        """Tell ``recipient_id`` that ``actor_id`` started following them."""
        try:
            async with self._uow_factory() as uow:
                actor = await self.resolve_actor(
                    uow, actor_id, fallback_name, fallback_avatar_url
                )
                created = await uow.notifications.create(
                    Notification(
                        user_id=recipient_id,
                        type=NotificationTypes.FOLLOW,
                        actor_user_id=actor_id,
                        actor_name=actor.name,
                        actor_avatar_url=actor.avatar_url,
                    )
                )
                await uow.commit()
        except Exception:
            logger.exception(
                "notification_create_failed",
                type_name=NotificationTypes.FOLLOW,
                actor_id=actor_id,
                recipient_id=recipient_id,
            )
            return None
        return created

    async def notify_like(
        self,
        actor_id: str,
        profile: Profile,
        fallback_name: str | None = None,
        fallback_avatar_url: str | None = None,
    ) -> Notification | None:
        """Tell the profile owner that ``actor_id`` liked their profile."""
        try:
            async with self._uow_factory() as uow:
                actor = await self.resolve_actor(
                    uow, actor_id, fallback_name, fallback_avatar_url
                )
                created = await uow.notifications.create(
                    Notification(
                        user_id=profile.user_id,
                        type=NotificationTypes.LIKE,
                        actor_user_id=actor_id,
                        actor_name=actor.name,
                        actor_avatar_url=actor.avatar_url,
                        profile_id=profile.id,
                        profile_name=profile.name,
                    )
                )
                await uow.commit()
        except Exception:
            logger.exception(
                "notification_create_failed",
                type_name=NotificationTypes.LIKE,
                actor_id=actor_id,
                profile_id=str(profile.id),
            )
            return None
        return created

    async def retract_follow(self, actor_id: str, recipient_id: str) -> int:
        """Delete every follow notification from ``actor_id`` to ``recipient_id``."""
        try:
            async with self._uow_factory() as uow:
                deleted = await uow.notifications.delete_matching(
                    NotificationTypes.FOLLOW, actor_id, user_id=recipient_id
                )
                await uow.commit()
        except Exception:
            logger.exception(
                "notification_delete_failed",
                type_name=NotificationTypes.FOLLOW,
                actor_id=actor_id,
                recipient_id=recipient_id,
            )
            return 0
        return deleted

    async def retract_like(self, actor_id: str, profile_id: UUID) -> int:
        """Delete every like notification from ``actor_id`` about ``profile_id``."""
        try:
            async with self._uow_factory() as uow:
                deleted = await uow.notifications.delete_matching(
                    NotificationTypes.LIKE, actor_id, profile_id=profile_id
                )
                await uow.commit()
        except Exception:
            logger.exception(
                "notification_delete_failed",
                type_name=NotificationTypes.LIKE,
                actor_id=actor_id,
                profile_id=str(profile_id),
            )
            return 0
        return deleted

    # --- Actor resolution ---

    async def resolve_actor(
        self,
        uow: IUnitOfWork,
        actor_id: str,
        fallback_name: str | None = None,
        fallback_avatar_url: str | None = None,
    ) -> ActorSummary:
        """Resolve the actor's display name and avatar.

        Order: the actor's profile, then the identity provider's user
        directory, then the token's own claims, then ``"Someone"``.
        """
        profile = await uow.profiles.get_by_user_id(actor_id)
        if profile:
            return ActorSummary(name=profile.name, avatar_url=profile.avatar_url)

        if self._identity is not None:
            try:
                user = await self._identity.get_user(actor_id)
            except AppException as e:
                logger.warning("identity_lookup_failed", actor_id=actor_id, error=e.message)
                user = None
            if user and user.display_name:
                return ActorSummary(
                    name=user.display_name,
                    avatar_url=user.image_url or fallback_avatar_url,
                )

        return ActorSummary(
            name=fallback_name or DEFAULT_ACTOR_NAME,
            avatar_url=fallback_avatar_url,
        )
