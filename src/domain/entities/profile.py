"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Profile:
    """Domain entity for a user profile, keyed by the external identity ``user_id``."""

    user_id: str
    name: str
    bio: str
    headline: str
    id: UUID = field(default_factory=uuid4)
    avatar_url: str | None = None
    interests: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class SocialStats:
    """Read-only value object: follow/like counts and viewer-relative flags."""

    follower_count: int = 0
    following_count: int = 0
    like_count: int = 0
    is_following: bool = False
    is_liked: bool = False


@dataclass(frozen=True, slots=True)
class ProfileWithStats:
    """Read-only value object: a Profile bundled with its social stats."""

    profile: Profile
    stats: SocialStats


@dataclass(frozen=True, slots=True)
class AvatarUpload:
    """An avatar image received from the client, ready to be stored."""

    filename: str
    content_type: str
    data: bytes

    @property
    def extension(self) -> str:
        """File extension without the dot (``"bin"`` when absent)."""
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot and ext else "bin"
