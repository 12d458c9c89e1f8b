"""Pydantic schemas for Notification API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class NotificationResponse(BaseModel):
    """Single notification in the recipient's feed."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str  # "follow" | "like"
    actor_user_id: str
    actor_name: str
    actor_avatar_url: str | None = None
    profile_id: UUID | None = None
    profile_name: str | None = None
    read: bool
    created_at: datetime


class MarkReadRequest(BaseModel):
    """Mark specific notifications, or all of them, as read."""

    model_config = ConfigDict(populate_by_name=True)

    notification_ids: list[UUID] | None = Field(None, alias="notificationIds")
    mark_all_as_read: bool = Field(False, alias="markAllAsRead")


class MarkReadResult(BaseModel):
    """Outcome of a mark-read request."""

    success: bool = True
    updated: int = 0
