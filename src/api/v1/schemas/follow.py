"""Pydantic schemas for Follow API."""

from pydantic import BaseModel, Field


class FollowCreate(BaseModel):
    """Schema for following a user."""

    following_id: str = Field(..., min_length=1, max_length=255)
