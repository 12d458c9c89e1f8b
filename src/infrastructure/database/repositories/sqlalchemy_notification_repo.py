"""SQLAlchemy implementation of Notification repository."""

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.notification import Notification
from infrastructure.database.models import NotificationModel


class SQLAlchemyNotificationRepository:
    """SQLAlchemy implementation of INotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        model = self._to_model(notification)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_user_notifications(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
    ) -> list[Notification]:
        """Get the newest notifications for a recipient."""
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)

        if unread_only:
            stmt = stmt.where(NotificationModel.read.is_(False))

        stmt = stmt.order_by(
            NotificationModel.created_at.desc(),
            NotificationModel.id.desc(),
        ).limit(limit)

        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars()]

    async def mark_read(self, user_id: str, notification_ids: list[UUID]) -> int:
        """Mark the recipient's notifications in ``notification_ids`` as read."""
        if not notification_ids:
            return 0
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.id.in_(notification_ids),
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of the recipient as read."""
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    async def delete_matching(
        self,
        type_name: str,
        actor_user_id: str,
        user_id: str | None = None,
        profile_id: UUID | None = None,
    ) -> int:
        """Delete every notification matching the given fields. Returns count deleted."""
        stmt = delete(NotificationModel).where(
            NotificationModel.type == type_name,
            NotificationModel.actor_user_id == actor_user_id,
        )
        if user_id is not None:
            stmt = stmt.where(NotificationModel.user_id == user_id)
        if profile_id is not None:
            stmt = stmt.where(NotificationModel.profile_id == profile_id)

        result = await self._session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    # --- Conversion methods ---

    def _to_entity(self, model: NotificationModel) -> Notification:
        """Convert NotificationModel to domain entity."""
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            actor_user_id=model.actor_user_id,
            actor_name=model.actor_name,
            actor_avatar_url=model.actor_avatar_url,
            profile_id=model.profile_id,
            profile_name=model.profile_name,
            read=model.read,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Notification) -> NotificationModel:
        """Convert Notification domain entity to ORM model."""
        return NotificationModel(
            id=entity.id,
            user_id=entity.user_id,
            type=entity.type,
            actor_user_id=entity.actor_user_id,
            actor_name=entity.actor_name,
            actor_avatar_url=entity.actor_avatar_url,
            profile_id=entity.profile_id,
            profile_name=entity.profile_name,
            read=entity.read,
            created_at=entity.created_at,
        )
