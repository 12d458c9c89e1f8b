"""SQLAlchemy implementation of Like repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.like import Like
from infrastructure.database.models import LikeModel


class SQLAlchemyLikeRepository:
    """SQLAlchemy implementation of ILikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, user_id: str, profile_id: UUID) -> bool:
        """Check whether ``user_id`` likes the profile."""
        stmt = select(LikeModel.id).where(
            LikeModel.user_id == user_id,
            LikeModel.profile_id == profile_id,
        )
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def create(self, like: Like) -> Like | None:
        """Insert an edge. Returns None when the unique constraint rejects it."""
        model = LikeModel(
            id=like.id,
            user_id=like.user_id,
            profile_id=like.profile_id,
            created_at=like.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError:
            await self._session.rollback()
            return None
        return Like(
            id=model.id,
            user_id=model.user_id,
            profile_id=model.profile_id,
            created_at=model.created_at,
        )

    async def delete(self, user_id: str, profile_id: UUID) -> bool:
        """Delete an edge and return whether a row was removed."""
        stmt = delete(LikeModel).where(
            LikeModel.user_id == user_id,
            LikeModel.profile_id == profile_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_for_profile(self, profile_id: UUID) -> int:
        """Count likes on a profile."""
        stmt = select(func.count()).select_from(LikeModel).where(LikeModel.profile_id == profile_id)
        result = await self._session.execute(stmt)
        return result.scalar() or 0
