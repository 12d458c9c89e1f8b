"""Social graph aggregation: follow/like counts and viewer-relative flags."""

from uuid import UUID

from domain.entities.profile import Profile, ProfileWithStats, SocialStats
from domain.repositories.unit_of_work import IUnitOfWork


class SocialGraphService:
    """Computes SocialStats for profiles inside a caller-owned Unit of Work.

    Stats are derived on every read and never stored. Each profile costs
    five small queries (three counts, two existence checks).
    """

    async def get_stats(
        self,
        uow: IUnitOfWork,
        profile_id: UUID,
        viewer_id: str | None = None,
    ) -> SocialStats:
        """Compute stats for one profile.

        A profile that cannot be resolved yields all-zero stats rather than
        an error.
        """
        profile = await uow.profiles.get(profile_id)
        if not profile:
            return SocialStats()
        return await self._stats_for(uow, profile, viewer_id)

    async def enrich(
        self,
        uow: IUnitOfWork,
        profiles: list[Profile],
        viewer_id: str | None = None,
    ) -> list[ProfileWithStats]:
        """Attach stats to each profile, preserving order."""
        enriched = []
        for profile in profiles:
            stats = await self._stats_for(uow, profile, viewer_id)
            enriched.append(ProfileWithStats(profile=profile, stats=stats))
        return enriched

    async def _stats_for(
        self,
        uow: IUnitOfWork,
        profile: Profile,
        viewer_id: str | None,
    ) -> SocialStats:
        owner_id = profile.user_id
        follower_count = await uow.follows.count_followers(owner_id)
        following_count = await uow.follows.count_following(owner_id)
        like_count = await uow.likes.count_for_profile(profile.id)

        is_following = False
        is_liked = False
        if viewer_id:
            is_following = await uow.follows.exists(viewer_id, owner_id)
            is_liked = await uow.likes.exists(viewer_id, profile.id)

        return SocialStats(
            follower_count=follower_count,
            following_count=following_count,
            like_count=like_count,
            is_following=is_following,
            is_liked=is_liked,
        )
