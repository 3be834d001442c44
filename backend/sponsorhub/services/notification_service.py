"""
Notification Service - per-user notification feed

Other services call ``notify`` inside their own transaction so that a status
change and the notification it triggers are committed together.
Notifications older than NOTIFICATION_RETENTION_DAYS are hidden from every
query and purged by ``NotificationCleanupService``.
"""

import asyncio
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from sponsorhub.core.config import settings
from sponsorhub.core.database import AsyncSessionLocal
from sponsorhub.core.exceptions import AuthorizationError, ResourceNotFoundError
from sponsorhub.core.logging_config import logger
from sponsorhub.models.notification import Notification, NotificationType, RelatedEntityType
from sponsorhub.services.base import BaseService


def retention_cutoff(now: Optional[datetime] = None) -> datetime:
    """Oldest created_at that is still visible"""
    now = now or datetime.utcnow()
    return now - timedelta(days=settings.NOTIFICATION_RETENTION_DAYS)


class NotificationService(BaseService):

    def notify(
        self,
        user_id: str,
        title: str,
        message: str,
        notification_type: NotificationType = NotificationType.SYSTEM,
        related_entity_type: Optional[RelatedEntityType] = None,
        related_entity_id: Optional[str] = None,
    ) -> Notification:
        """Queue a notification on the current session (caller commits)"""
        notification = Notification(
            user_id=str(user_id),
            title=title,
            message=message,
            type=notification_type,
            related_entity_type=related_entity_type,
            related_entity_id=str(related_entity_id) if related_entity_id else None,
        )
        self.db.add(notification)
        logger.debug(f"Queued notification '{title}' for user {user_id}")
        return notification

    def _visible(self, user_id: str):
        return select(Notification).where(
            Notification.user_id == str(user_id),
            Notification.created_at >= retention_cutoff(),
        )

    async def list_for_user(self, user_id: str, limit: int = 20, skip: int = 0) -> Tuple[List[Notification], int]:
        query = self._visible(user_id)
        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        result = await self.db.execute(
            query.order_by(Notification.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def unread_count(self, user_id: str) -> int:
        query = self._visible(user_id).where(Notification.is_read.is_(False))
        count = await self.db.scalar(select(func.count()).select_from(query.subquery()))
        return count or 0

    async def get_owned(self, notification_id: str, user_id: str, action: str) -> Notification:
        notification = await self.get_or_404(Notification, notification_id, "Notification")
        # Past the retention window it no longer exists for anyone
        if notification.created_at < retention_cutoff():
            raise ResourceNotFoundError("Notification", notification_id)
        if str(notification.user_id) != str(user_id):
            raise AuthorizationError(f"You can only {action} your own notifications")
        return notification

    async def mark_read(self, notification_id: str, user_id: str) -> Notification:
        notification = await self.get_owned(notification_id, user_id, "mark")
        notification.is_read = True
        await self.db.commit()
        return notification

    async def mark_all_read(self, user_id: str) -> int:
        result = await self.db.execute(
            update(Notification)
            .where(
                Notification.user_id == str(user_id),
                Notification.is_read.is_(False),
                Notification.created_at >= retention_cutoff(),
            )
            .values(is_read=True, updated_at=datetime.utcnow())
        )
        await self.db.commit()
        return result.rowcount or 0

    async def delete(self, notification_id: str, user_id: str) -> None:
        notification = await self.get_owned(notification_id, user_id, "delete")
        await self.db.delete(notification)
        await self.db.commit()


async def purge_expired_notifications(db: AsyncSession, now: Optional[datetime] = None) -> int:
    """Delete notifications past the retention window, returns the number removed"""
    result = await db.execute(
        delete(Notification).where(Notification.created_at < retention_cutoff(now))
    )
    await db.commit()
    return result.rowcount or 0


class NotificationCleanupService:
    """
    Background task that purges expired notifications on an interval.
    """

    def __init__(self, cleanup_interval_minutes: int = 60):
        self.cleanup_interval = timedelta(minutes=cleanup_interval_minutes)
        self.running = False
        self._task: Optional[asyncio.Task] = None
        self.stats = {
            "total_purged": 0,
            "last_run": None,
        }

    async def start(self):
        """Start the background cleanup loop"""
        if self.running:
            logger.warning("[NotificationCleanup] Service already running")
            return

        self.running = True
        self._task = asyncio.create_task(self._cleanup_loop())
        logger.info(f"[NotificationCleanup] Started - Interval: {self.cleanup_interval}")

    async def stop(self):
        """Stop the cleanup loop"""
        self.running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("[NotificationCleanup] Stopped")

    async def _cleanup_loop(self):
        while self.running:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"[NotificationCleanup] Error in cleanup loop: {e}", exc_info=True)

            await asyncio.sleep(self.cleanup_interval.total_seconds())

    async def run_once(self) -> int:
        async with AsyncSessionLocal() as db:
            purged = await purge_expired_notifications(db)

        self.stats["total_purged"] += purged
        self.stats["last_run"] = datetime.utcnow().isoformat()
        if purged:
            logger.info(f"[NotificationCleanup] Purged {purged} expired notifications")
        return purged


# Global instance, configured from settings in the app lifespan
notification_cleanup = NotificationCleanupService()
