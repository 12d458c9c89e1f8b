"""Profile API routes."""

import orjson
from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from api.dependencies.auth import CurrentUser, OptionalUser, require_owner
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ApiResponse
from api.v1.schemas.profile import ProfilePage, ProfileResponse
from core.config import settings
from core.exceptions import ProfileNotFoundError, ValidationError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.pagination import PageRequest
from domain.entities.profile import AvatarUpload
from domain.services.profile_service import ProfileService, ProfileWriteResult

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "",
    response_model=ApiResponse[ProfilePage],
    summary="List profiles",
    responses={
        200: {"description": "Paginated profile feed with social stats"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    user: OptionalUser,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        description=f"Page size, capped at {settings.max_page_size}",
    ),
    search: str | None = Query(None, description="Match name, bio or headline"),
    interest: str | None = Query(None, description="Exact interest tag"),
    following_only: bool = Query(False, description="Only profiles the caller follows"),
    service: ProfileService = Depends(get_profile_service),
) -> ApiResponse[ProfilePage]:
    """
    Get one page of profiles, newest first.

    `search` takes precedence over `interest` when both are given. Stats
    flags (`is_following`, `is_liked`) are relative to the caller; anonymous
    callers get an empty `following_only` feed. A `limit` above the maximum
    page size is clamped rather than rejected.
    """
    result = await service.list_profiles(
        PageRequest(page=page, limit=min(limit, settings.max_page_size)),
        search=(search or "").strip() or None,
        interest=(interest or "").strip() or None,
        following_only=following_only,
        viewer_id=user.id if user else None,
    )
    return ApiResponse(data=ProfilePage.from_domain(result))


@router.post(
    "",
    response_model=ApiResponse[ProfileResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create the caller's profile",
    responses={
        201: {"description": "Profile created"},
        400: {"description": "Validation error or profile already exists"},
        401: {"description": "Not authenticated"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    user: CurrentUser,
    name: str = Form(..., min_length=1, max_length=100),
    bio: str = Form(..., min_length=1, max_length=1000),
    headline: str = Form(..., min_length=1, max_length=200),
    interests: str | None = Form(None, description="JSON array of interest tags"),
    avatar: UploadFile | None = File(None),
    service: ProfileService = Depends(get_profile_service),
) -> ApiResponse[ProfileResponse]:
    """Create a profile from a multipart form, with an optional avatar image."""
    result = await service.create(
        user_id=user.id,
        name=name.strip(),
        bio=bio.strip(),
        headline=headline.strip(),
        interests=_parse_interests(interests) or [],
        avatar=await _read_avatar(avatar),
    )
    return _write_response(result, "Profile created successfully")


@router.get(
    "/{user_id}",
    response_model=ApiResponse[ProfileResponse],
    summary="Get a profile",
    responses={
        200: {"description": "Profile with stats relative to the caller"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user_id: str,
    user: OptionalUser,
    service: ProfileService = Depends(get_profile_service),
) -> ApiResponse[ProfileResponse]:
    """Get the profile owned by `user_id`."""
    profile = await service.get_with_stats(user_id, viewer_id=user.id if user else None)
    if not profile:
        raise ProfileNotFoundError(user_id)
    return ApiResponse(data=ProfileResponse.from_domain(profile))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[ProfileResponse],
    summary="Update the caller's profile",
    responses={
        200: {"description": "Profile updated"},
        403: {"description": "Not the profile owner"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    user_id: str,
    user: CurrentUser,
    name: str | None = Form(None, max_length=100),
    bio: str | None = Form(None, max_length=1000),
    headline: str | None = Form(None, max_length=200),
    interests: str | None = Form(None, description="JSON array of interest tags"),
    avatar: UploadFile | None = File(None),
    service: ProfileService = Depends(get_profile_service),
) -> ApiResponse[ProfileResponse]:
    """Partially update a profile. Omitted or empty fields are left unchanged."""
    require_owner(user, user_id, "update")

    result = await service.update(
        user_id,
        name=(name or "").strip() or None,
        bio=(bio or "").strip() or None,
        headline=(headline or "").strip() or None,
        interests=_parse_interests(interests),
        avatar=await _read_avatar(avatar),
    )
    return _write_response(result, "Profile updated successfully")


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[None],
    summary="Delete the caller's profile",
    responses={
        200: {"description": "Profile deleted"},
        403: {"description": "Not the profile owner"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    user_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ApiResponse[None]:
    """Delete a profile, the likes it received and its avatar image."""
    require_owner(user, user_id, "delete")

    await service.delete(user_id)
    return ApiResponse(message="Profile deleted successfully")


def _parse_interests(raw: str | None) -> list[str] | None:
    """Decode the JSON-encoded interests form field."""
    if not raw:
        return None
    try:
        value = orjson.loads(raw)
    except orjson.JSONDecodeError:
        raise ValidationError("interests must be a JSON array of strings") from None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError("interests must be a JSON array of strings")
    return [v.strip() for v in value if v.strip()]


async def _read_avatar(upload: UploadFile | None) -> AvatarUpload | None:
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    if not data:
        return None
    return AvatarUpload(
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
        data=data,
    )


def _write_response(result: ProfileWriteResult, message: str) -> ApiResponse[ProfileResponse]:
    if result.avatar_failed:
        message = f"{message}, but avatar upload failed"
    return ApiResponse(data=ProfileResponse.from_domain(result.profile), message=message)
