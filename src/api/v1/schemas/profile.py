"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.pagination import Page
from domain.entities.profile import ProfileWithStats


class ProfileResponse(BaseModel):
    """Profile with social stats relative to the caller."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "user_2bEa",
                "name": "Bea",
                "bio": "Designer and runner",
                "headline": "Product designer",
                "avatar_url": "https://avatars.s3.amazonaws.com/profile-images/user_2bEa-1717000000000.png",
                "interests": ["design", "running"],
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
                "follower_count": 1,
                "following_count": 0,
                "like_count": 3,
                "is_following": True,
                "is_liked": False,
            }
        }
    )

    id: UUID
    user_id: str
    name: str
    bio: str
    headline: str
    avatar_url: str | None = None
    interests: list[str]
    created_at: datetime
    updated_at: datetime
    follower_count: int = 0
    following_count: int = 0
    like_count: int = 0
    is_following: bool = False
    is_liked: bool = False

    @classmethod
    def from_domain(cls, item: ProfileWithStats) -> "ProfileResponse":
        profile, stats = item.profile, item.stats
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            name=profile.name,
            bio=profile.bio,
            headline=profile.headline,
            avatar_url=profile.avatar_url,
            interests=profile.interests,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            follower_count=stats.follower_count,
            following_count=stats.following_count,
            like_count=stats.like_count,
            is_following=stats.is_following,
            is_liked=stats.is_liked,
        )


class ProfilePage(BaseModel):
    """One page of the profile feed."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[ProfileResponse]
    page: int
    limit: int
    total: int
    has_more: bool = Field(alias="hasMore")

    @classmethod
    def from_domain(cls, page: Page[ProfileWithStats]) -> "ProfilePage":
        return cls(
            data=[ProfileResponse.from_domain(p) for p in page.data],
            page=page.page,
            limit=page.limit,
            total=page.total,
            has_more=page.has_more,
        )
