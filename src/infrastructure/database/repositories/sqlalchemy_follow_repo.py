"""SQLAlchemy implementation of Follow repository."""

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.follow import Follow
from infrastructure.database.models import FollowModel


class SQLAlchemyFollowRepository:
    """SQLAlchemy implementation of IFollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, follower_id: str, following_id: str) -> bool:
        """Check whether ``follower_id`` follows ``following_id``."""
        stmt = select(FollowModel.id).where(
            FollowModel.follower_id == follower_id,
            FollowModel.following_id == following_id,
        )
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def create(self, follow: Follow) -> Follow | None:
        """Insert an edge. Returns None when the unique constraint rejects it."""
        model = FollowModel(
            id=follow.id,
            follower_id=follow.follower_id,
            following_id=follow.following_id,
            created_at=follow.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError:
            await self._session.rollback()
            return None
        return self._to_entity(model)

    async def delete(self, follower_id: str, following_id: str) -> bool:
        """Delete an edge and return whether a row was removed."""
        stmt = delete(FollowModel).where(
            FollowModel.follower_id == follower_id,
            FollowModel.following_id == following_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_followers(self, user_id: str) -> int:
        """Count edges pointing at ``user_id``."""
        stmt = select(func.count()).select_from(FollowModel).where(
            FollowModel.following_id == user_id
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def count_following(self, user_id: str) -> int:
        """Count edges starting at ``user_id``."""
        stmt = select(func.count()).select_from(FollowModel).where(
            FollowModel.follower_id == user_id
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def get_following_ids(self, follower_id: str) -> list[str]:
        """Get every user ID that ``follower_id`` follows."""
        stmt = select(FollowModel.following_id).where(FollowModel.follower_id == follower_id)
        result = await self._session.execute(stmt)
        return list(result.scalars())

    def _to_entity(self, model: FollowModel) -> Follow:
        """Convert ORM model to domain entity."""
        return Follow(
            id=model.id,
            follower_id=model.follower_id,
            following_id=model.following_id,
            created_at=model.created_at,
        )
