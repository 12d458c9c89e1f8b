"""Profile repository protocol."""

from typing import Any, Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, profile_id: UUID) -> Profile | None:
        """Get a profile by its row ID."""
        ...

    async def get_by_user_id(self, user_id: str) -> Profile | None:
        """Get the profile owned by an external user ID."""
        ...

    async def create(self, profile: Profile) -> Profile | None:
        """Create a profile. Returns None if the user already has one."""
        ...

    async def update(self, user_id: str, fields: dict[str, Any]) -> Profile | None:
        """Apply a partial update. Returns None if the user has no profile."""
        ...

    async def update_avatar(self, user_id: str, avatar_url: str | None) -> Profile | None:
        """Set or clear the avatar URL."""
        ...

    async def delete(self, user_id: str) -> bool:
        """Delete the user's profile and return whether a row was removed."""
        ...

    async def list_page(
        self,
        offset: int,
        limit: int,
        search: str | None = None,
        interest: str | None = None,
        user_ids: list[str] | None = None,
    ) -> tuple[list[Profile], int]:
        """Get one page of profiles, newest first, plus the total match count."""
        ...
