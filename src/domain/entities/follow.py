"""Follow edge domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Follow:
    """Directed edge: ``follower_id`` follows ``following_id`` (both external user IDs)."""

    follower_id: str
    following_id: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if self.follower_id == self.following_id:
            raise ValueError("follower_id and following_id must differ")
