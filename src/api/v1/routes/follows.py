"""Follow API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_follow_service
from api.v1.schemas.common import ApiResponse, SuccessFlag
from api.v1.schemas.follow import FollowCreate
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.follow_service import FollowService

router = APIRouter(prefix="/follows", tags=["follows"])


@router.post(
    "",
    response_model=ApiResponse[SuccessFlag],
    status_code=status.HTTP_201_CREATED,
    summary="Follow a user",
    responses={
        201: {"description": "Now following; the followed user is notified"},
        400: {"description": "Self-follow or already following"},
        401: {"description": "Not authenticated"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def follow_user(
    request: Request,
    body: FollowCreate,
    user: CurrentUser,
    service: FollowService = Depends(get_follow_service),
) -> ApiResponse[SuccessFlag]:
    """Follow the user identified by `following_id`."""
    await service.follow(
        user.id,
        body.following_id,
        actor_name=user.display_name,
        actor_avatar_url=user.avatar_url,
    )
    return ApiResponse(data=SuccessFlag(), message="Successfully followed user")


@router.delete(
    "",
    response_model=ApiResponse[SuccessFlag],
    summary="Unfollow a user",
    responses={
        200: {"description": "No longer following (also when never followed)"},
        401: {"description": "Not authenticated"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unfollow_user(
    request: Request,
    user: CurrentUser,
    following_id: str = Query(..., min_length=1, description="User to unfollow"),
    service: FollowService = Depends(get_follow_service),
) -> ApiResponse[SuccessFlag]:
    """Stop following a user and withdraw the follow notification."""
    await service.unfollow(user.id, following_id)
    return ApiResponse(data=SuccessFlag(), message="Successfully unfollowed user")
