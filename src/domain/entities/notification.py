"""Notification domain entities and type constants."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


class NotificationTypes:
    """Notification type constants."""

    FOLLOW = "follow"
    LIKE = "like"

    ALL = (FOLLOW, LIKE)


@dataclass
class Notification:
    """Domain entity for a notification delivered to ``user_id``.

    Actor and profile display fields are denormalized at write time so the
    feed can be rendered without further lookups.
    """

    user_id: str
    type: str
    actor_user_id: str
    actor_name: str
    id: UUID = field(default_factory=uuid4)
    actor_avatar_url: str | None = None
    profile_id: UUID | None = None
    profile_name: str | None = None
    read: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if self.type not in NotificationTypes.ALL:
            raise ValueError(f"Unknown notification type: {self.type}")


@dataclass(frozen=True, slots=True)
class ActorSummary:
    """Display name and avatar of the user who triggered a notification."""

    name: str
    avatar_url: str | None = None
