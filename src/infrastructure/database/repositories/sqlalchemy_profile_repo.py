"""SQLAlchemy implementation of Profile repository."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.models import LikeModel, ProfileModel

UPDATABLE_FIELDS = frozenset({"name", "bio", "headline", "interests"})


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, profile_id: UUID) -> Profile | None:
        """Get a profile by its row ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_user_id(self, user_id: str) -> Profile | None:
        """Get the profile owned by an external user ID."""
        model = await self._get_model_by_user_id(user_id)
        return self._to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile | None:
        """Create a profile. Returns None if the user already has one."""
        model = self._to_model(profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError:
            await self._session.rollback()
            return None
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, user_id: str, fields: dict[str, Any]) -> Profile | None:
        """Apply a partial update to name, bio, headline and/or interests."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update profile fields: {sorted(unknown)}")

        model = await self._get_model_by_user_id(user_id)
        if not model:
            return None

        for key, value in fields.items():
            setattr(model, key, value)
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    async def update_avatar(self, user_id: str, avatar_url: str | None) -> Profile | None:
        """Set or clear the avatar URL."""
        model = await self._get_model_by_user_id(user_id)
        if not model:
            return None

        model.avatar_url = avatar_url
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, user_id: str) -> bool:
        """Delete the user's profile together with the likes it received."""
        model = await self._get_model_by_user_id(user_id)
        if not model:
            return False

        await self._session.execute(delete(LikeModel).where(LikeModel.profile_id == model.id))
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def list_page(
        self,
        offset: int,
        limit: int,
        search: str | None = None,
        interest: str | None = None,
        user_ids: list[str] | None = None,
    ) -> tuple[list[Profile], int]:
        """Get one page of profiles, newest first, plus the total match count."""
        conditions: list[ColumnElement[bool]] = []

        if user_ids is not None:
            conditions.append(ProfileModel.user_id.in_(user_ids))

        if search:
            conditions.append(
                or_(
                    ProfileModel.name.icontains(search, autoescape=True),
                    ProfileModel.bio.icontains(search, autoescape=True),
                    ProfileModel.headline.icontains(search, autoescape=True),
                )
            )

        if interest:
            conditions.append(self._has_interest(interest))

        count_stmt = select(func.count()).select_from(ProfileModel).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(ProfileModel)
            .where(*conditions)
            .order_by(ProfileModel.created_at.desc(), ProfileModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()], total

    def _has_interest(self, interest: str) -> ColumnElement[bool]:
        """Exact-match containment of ``interest`` in the interests array."""
        if self._session.bind.dialect.name == "postgresql":
            return ProfileModel.interests.contains([interest])

        # SQLite (tests): expand the JSON array with json_each
        elements = func.json_each(ProfileModel.interests).table_valued("value")
        return select(elements.c.value).where(elements.c.value == interest).exists()

    async def _get_model_by_user_id(self, user_id: str) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            bio=model.bio,
            headline=model.headline,
            avatar_url=model.avatar_url,
            interests=list(model.interests or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            name=entity.name,
            bio=entity.bio,
            headline=entity.headline,
            avatar_url=entity.avatar_url,
            interests=list(entity.interests),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
