"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SELF_FOLLOW = "SELF_FOLLOW"
    SELF_LIKE = "SELF_LIKE"

    # Conflict errors (reported as 400)
    ALREADY_FOLLOWING = "ALREADY_FOLLOWING"
    ALREADY_LIKED = "ALREADY_LIKED"
    PROFILE_ALREADY_EXISTS = "PROFILE_ALREADY_EXISTS"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Upstream errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    IDENTITY_PROVIDER_ERROR = "IDENTITY_PROVIDER_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Unauthorized",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Caller is acting on another user's resource."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class ValidationError(AppException):
    """Missing or malformed input."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details=details,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
            status_code=404,
            details={"profile": identifier},
        )


class ProfileAlreadyExistsError(AppException):
    """The user already has a profile."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_ALREADY_EXISTS,
            message="Profile already exists for this user",
            status_code=400,
            details={"user_id": user_id},
        )


class SelfFollowError(AppException):
    """A user tried to follow themselves."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.SELF_FOLLOW,
            message="Cannot follow yourself",
            status_code=400,
        )


class SelfLikeError(AppException):
    """A user tried to like their own profile."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.SELF_LIKE,
            message="Cannot like your own profile",
            status_code=400,
        )


class AlreadyFollowingError(AppException):
    """A follow edge already exists for this pair."""

    def __init__(self, following_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_FOLLOWING,
            message="Already following this user",
            status_code=400,
            details={"following_id": following_id},
        )


class AlreadyLikedError(AppException):
    """A like edge already exists for this pair."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_LIKED,
            message="Already liked this profile",
            status_code=400,
            details={"profile_id": profile_id},
        )


class AvatarStorageError(AppException):
    """The avatar object store rejected or failed a request."""

    def __init__(self, message: str = "Failed to store avatar") -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message=message,
            status_code=502,
        )


class IdentityProviderError(AppException):
    """The identity provider user API failed."""

    def __init__(self, message: str = "Identity provider request failed") -> None:
        super().__init__(
            error_code=ErrorCode.IDENTITY_PROVIDER_ERROR,
            message=message,
            status_code=502,
        )
