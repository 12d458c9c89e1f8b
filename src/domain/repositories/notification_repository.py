"""Notification repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.notification import Notification


class INotificationRepository(Protocol):
    """Repository interface for Notification entities."""

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        ...

    async def get_user_notifications(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
    ) -> list[Notification]:
        """Get the newest notifications for a recipient."""
        ...

    async def mark_read(self, user_id: str, notification_ids: list[UUID]) -> int:
        """Mark the recipient's notifications in ``notification_ids`` as read."""
        ...

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of the recipient as read."""
        ...

    async def delete_matching(
        self,
        type_name: str,
        actor_user_id: str,
        user_id: str | None = None,
        profile_id: UUID | None = None,
    ) -> int:
        """Delete every notification matching the given fields. Returns count deleted."""
        ...
