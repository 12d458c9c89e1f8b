"""Profile service layer with business logic."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

import structlog

from core.exceptions import (
    AppException,
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    ValidationError,
)
from domain.entities.pagination import Page, PageRequest
from domain.entities.profile import AvatarUpload, Profile, ProfileWithStats
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.social_graph_service import SocialGraphService
from infrastructure.storage.provider import IAvatarStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProfileWriteResult:
    """Outcome of a create/update: the enriched profile and the avatar status."""

    profile: ProfileWithStats
    avatar_failed: bool = False


class ProfileService:
    """Service layer for profile CRUD and the profile feed."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        avatar_store: Optional[IAvatarStore] = None,
        social_graph: Optional[SocialGraphService] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._avatars = avatar_store
        self._graph = social_graph or SocialGraphService()

    async def create(
        self,
        user_id: str,
        name: str,
        bio: str,
        headline: str,
        interests: list[str],
        avatar: AvatarUpload | None = None,
    ) -> ProfileWriteResult:
        """Create the caller's profile, then attach the avatar if one was sent.

        The profile is committed before the upload; a failed upload leaves
        the profile without an avatar and sets ``avatar_failed``.
        """
        if not (name and bio and headline):
            raise ValidationError("Name, bio, and headline are required")

        async with self._uow_factory() as uow:
            if await uow.profiles.get_by_user_id(user_id):
                raise ProfileAlreadyExistsError(user_id)

            profile = Profile(
                user_id=user_id,
                name=name,
                bio=bio,
                headline=headline,
                interests=list(interests),
            )
            created = await uow.profiles.create(profile)
            if created is None:
                raise ProfileAlreadyExistsError(user_id)
            await uow.commit()

        logger.info("profile_created", user_id=user_id, profile_id=str(created.id))

        avatar_failed = False
        if avatar is not None:
            avatar_failed = not await self._try_replace_avatar(user_id, avatar, old_url=None)

        return ProfileWriteResult(
            profile=await self._require_with_stats(user_id, viewer_id=user_id),
            avatar_failed=avatar_failed,
        )

    async def get(self, user_id: str) -> Profile | None:
        """Get a profile by owner, without stats."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_user_id(user_id)

    async def get_with_stats(
        self, user_id: str, viewer_id: str | None = None
    ) -> ProfileWithStats | None:
        """Get a profile by owner with stats relative to ``viewer_id``."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                return None
            stats = await self._graph.get_stats(uow, profile.id, viewer_id)
        return ProfileWithStats(profile=profile, stats=stats)

    async def update(
        self,
        user_id: str,
        name: str | None = None,
        bio: str | None = None,
        headline: str | None = None,
        interests: list[str] | None = None,
        avatar: AvatarUpload | None = None,
    ) -> ProfileWriteResult:
        """Apply a partial update. Empty values are ignored.

        Raises:
            ProfileNotFoundError: If the user has no profile
        """
        fields: dict[str, Any] = {}
        if name:
            fields["name"] = name
        if bio:
            fields["bio"] = bio
        if headline:
            fields["headline"] = headline
        if interests is not None:
            fields["interests"] = list(interests)

        async with self._uow_factory() as uow:
            if fields:
                profile = await uow.profiles.update(user_id, fields)
                await uow.commit()
            else:
                profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                raise ProfileNotFoundError(user_id)

        if fields:
            logger.info("profile_updated", user_id=user_id, fields=sorted(fields))

        avatar_failed = False
        if avatar is not None:
            avatar_failed = not await self._try_replace_avatar(
                user_id, avatar, old_url=profile.avatar_url
            )

        return ProfileWriteResult(
            profile=await self._require_with_stats(user_id, viewer_id=user_id),
            avatar_failed=avatar_failed,
        )

    async def update_avatar(self, user_id: str, avatar: AvatarUpload) -> Profile:
        """Upload an avatar and point the profile at it.

        Raises:
            ValidationError: If no avatar store is configured
            AvatarStorageError: If the upload fails
            ProfileNotFoundError: If the user has no profile
        """
        if self._avatars is None:
            raise ValidationError("Avatar uploads are not configured")

        url = await self._avatars.upload(user_id, avatar)
        async with self._uow_factory() as uow:
            profile = await uow.profiles.update_avatar(user_id, url)
            if not profile:
                raise ProfileNotFoundError(user_id)
            await uow.commit()
        return profile

    async def delete(self, user_id: str) -> None:
        """Delete the user's profile and, best-effort, its avatar object.

        Raises:
            ProfileNotFoundError: If the user has no profile
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                raise ProfileNotFoundError(user_id)

            if profile.avatar_url:
                await self._delete_avatar_quietly(profile.avatar_url)

            await uow.profiles.delete(user_id)
            await uow.commit()

        logger.info("profile_deleted", user_id=user_id)

    async def list_profiles(
        self,
        request: PageRequest,
        search: str | None = None,
        interest: str | None = None,
        following_only: bool = False,
        viewer_id: str | None = None,
    ) -> Page[ProfileWithStats]:
        """List profiles newest first with stats relative to ``viewer_id``.

        A search term takes precedence over an interest filter. The
        following-only feed is empty for anonymous viewers and for viewers
        who follow nobody.
        """
        if search:
            interest = None

        async with self._uow_factory() as uow:
            user_ids: list[str] | None = None
            if following_only:
                if not viewer_id:
                    return Page.empty(request)
                user_ids = await uow.follows.get_following_ids(viewer_id)
                if not user_ids:
                    return Page.empty(request)

            rows, total = await uow.profiles.list_page(
                offset=request.offset,
                limit=request.limit,
                search=search,
                interest=interest,
                user_ids=user_ids,
            )
            data = await self._graph.enrich(uow, rows, viewer_id)

        return Page(page=request.page, limit=request.limit, total=total, data=data)

    async def _require_with_stats(self, user_id: str, viewer_id: str | None) -> ProfileWithStats:
        enriched = await self.get_with_stats(user_id, viewer_id)
        if not enriched:
            raise ProfileNotFoundError(user_id)
        return enriched

    async def _try_replace_avatar(
        self, user_id: str, avatar: AvatarUpload, old_url: str | None
    ) -> bool:
        """Upload a new avatar, dropping the old object first. Returns success."""
        if old_url:
            await self._delete_avatar_quietly(old_url)
        try:
            await self.update_avatar(user_id, avatar)
        except AppException as e:
            logger.error(
                "avatar_upload_failed",
                user_id=user_id,
                error_code=str(e.error_code),
                error=e.message,
            )
            return False
        return True

    async def _delete_avatar_quietly(self, url: str) -> None:
        if self._avatars is None:
            return
        try:
            await self._avatars.delete(url)
        except AppException as e:
            logger.warning("avatar_delete_failed", url=url, error=e.message)
