"""API router configuration."""

from fastapi import APIRouter

from api.v1.routes.follows import router as follows_router
from api.v1.routes.likes import router as likes_router
from api.v1.routes.notifications import router as notifications_router
from api.v1.routes.profiles import router as profiles_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(follows_router)
router.include_router(likes_router)
router.include_router(notifications_router)
