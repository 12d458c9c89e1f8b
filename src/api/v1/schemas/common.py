"""Common Pydantic schemas shared across the API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: ``{"data": ..., "message": ...}``."""

    data: T | None = None
    message: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error: str
    error_code: str
    details: Any | None = None


class SuccessFlag(BaseModel):
    """Acknowledgement payload for mutations without a resource body."""

    success: bool = True
