"""Follow repository protocol."""

from typing import Protocol

from domain.entities.follow import Follow


class IFollowRepository(Protocol):
    """Repository interface for Follow edges."""

    async def exists(self, follower_id: str, following_id: str) -> bool:
        """Check whether ``follower_id`` follows ``following_id``."""
        ...

    async def create(self, follow: Follow) -> Follow | None:
        """Insert an edge. Returns None if the pair already exists."""
        ...

    async def delete(self, follower_id: str, following_id: str) -> bool:
        """Delete an edge and return whether a row was removed."""
        ...

    async def count_followers(self, user_id: str) -> int:
        """Count edges pointing at ``user_id``."""
        ...

    async def count_following(self, user_id: str) -> int:
        """Count edges starting at ``user_id``."""
        ...

    async def get_following_ids(self, follower_id: str) -> list[str]:
        """Get every user ID that ``follower_id`` follows."""
        ...
