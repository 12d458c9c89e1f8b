"""Notification API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_notification_service
from api.v1.schemas.common import ApiResponse
from api.v1.schemas.notification import MarkReadRequest, MarkReadResult, NotificationResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=ApiResponse[list[NotificationResponse]],
    summary="List notifications",
    responses={
        200: {"description": "Newest notifications first, at most 50"},
        401: {"description": "Not authenticated"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_notifications(
    request: Request,
    user: CurrentUser,
    unread_only: bool = Query(False, description="Only unread notifications"),
    service: NotificationService = Depends(get_notification_service),
) -> ApiResponse[list[NotificationResponse]]:
    """Get the caller's notifications."""
    notifications = await service.get_notifications(user.id, unread_only=unread_only)
    return ApiResponse(data=[NotificationResponse.model_validate(n) for n in notifications])


@router.put(
    "",
    response_model=ApiResponse[MarkReadResult],
    summary="Mark notifications as read",
    responses={
        200: {"description": "Number of notifications marked as read"},
        401: {"description": "Not authenticated"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def mark_notifications_read(
    request: Request,
    body: MarkReadRequest,
    user: CurrentUser,
    service: NotificationService = Depends(get_notification_service),
) -> ApiResponse[MarkReadResult]:
    """
    Mark notifications as read.

    `markAllAsRead: true` marks everything; otherwise only the listed
    `notificationIds` that belong to the caller are updated.
    """
    if body.mark_all_as_read:
        updated = await service.mark_all_read(user.id)
    else:
        updated = await service.mark_read(user.id, body.notification_ids or [])
    return ApiResponse(data=MarkReadResult(updated=updated))
