"""Pydantic schemas for Like API."""

from uuid import UUID

from pydantic import BaseModel


class LikeCreate(BaseModel):
    """Schema for liking a profile."""

    profile_id: UUID
