"""Like repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.like import Like


class ILikeRepository(Protocol):
    """Repository interface for Like edges."""

    async def exists(self, user_id: str, profile_id: UUID) -> bool:
        """Check whether ``user_id`` likes the profile."""
        ...

    async def create(self, like: Like) -> Like | None:
        """Insert an edge. Returns None if the pair already exists."""
        ...

    async def delete(self, user_id: str, profile_id: UUID) -> bool:
        """Delete an edge and return whether a row was removed."""
        ...

    async def count_for_profile(self, profile_id: UUID) -> int:
        """Count likes on a profile."""
        ...
