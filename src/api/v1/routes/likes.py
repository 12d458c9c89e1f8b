"""Like API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_like_service
from api.v1.schemas.common import ApiResponse, SuccessFlag
from api.v1.schemas.like import LikeCreate
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.like_service import LikeService

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post(
    "",
    response_model=ApiResponse[SuccessFlag],
    status_code=status.HTTP_201_CREATED,
    summary="Like a profile",
    responses={
        201: {"description": "Profile liked; the owner is notified"},
        400: {"description": "Own profile or already liked"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_profile(
    request: Request,
    body: LikeCreate,
    user: CurrentUser,
    service: LikeService = Depends(get_like_service),
) -> ApiResponse[SuccessFlag]:
    """Like the profile identified by `profile_id`."""
    await service.like(
        user.id,
        body.profile_id,
        actor_name=user.display_name,
        actor_avatar_url=user.avatar_url,
    )
    return ApiResponse(data=SuccessFlag(), message="Successfully liked profile")


@router.delete(
    "",
    response_model=ApiResponse[SuccessFlag],
    summary="Unlike a profile",
    responses={
        200: {"description": "Like removed (also when there was none)"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_profile(
    request: Request,
    user: CurrentUser,
    profile_id: UUID = Query(..., description="Profile to unlike"),
    service: LikeService = Depends(get_like_service),
) -> ApiResponse[SuccessFlag]:
    """Remove a like and withdraw the like notification."""
    await service.unlike(user.id, profile_id)
    return ApiResponse(data=SuccessFlag(), message="Successfully unliked profile")
