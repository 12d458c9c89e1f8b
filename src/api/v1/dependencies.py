"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.follow_service import FollowService
from domain.services.like_service import LikeService
from domain.services.notification_service import NotificationService
from domain.services.profile_service import ProfileService
from domain.services.social_graph_service import SocialGraphService
from infrastructure.auth.identity_client import HttpIdentityDirectory
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.storage.s3_avatar_store import S3AvatarStore


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_identity_directory() -> HttpIdentityDirectory:
    """Get the identity provider user directory client."""
    return HttpIdentityDirectory()


@lru_cache
def get_avatar_store() -> S3AvatarStore:
    """Get the S3 avatar store."""
    return S3AvatarStore()


@lru_cache
def get_notification_service() -> NotificationService:
    """Get Notification service instance."""
    return NotificationService(
        get_uow_factory(),
        identity_directory=get_identity_directory(),
        list_limit=settings.notification_list_limit,
    )


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        avatar_store=get_avatar_store(),
        social_graph=SocialGraphService(),
    )


@lru_cache
def get_follow_service() -> FollowService:
    """Get Follow service instance."""
    return FollowService(
        get_uow_factory(),
        notification_service=get_notification_service(),
    )


@lru_cache
def get_like_service() -> LikeService:
    """Get Like service instance."""
    return LikeService(
        get_uow_factory(),
        notification_service=get_notification_service(),
    )
