"""
Collaboration Service

Lifecycle (each transition is a guarded status write):

    pending --activate--> active --complete--> completed
       |                    |
       +----terminate-------+--> terminated

Activate and terminate belong to the organizer who owns the collaboration;
either participant may complete it. The other participant is notified on
every transition.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import select, or_

from sponsorhub.core.exceptions import AuthorizationError, InvalidStateError
from sponsorhub.core.logging_config import logger
from sponsorhub.models.collaboration import Collaboration, CollaborationStatus
from sponsorhub.models.notification import NotificationType, RelatedEntityType
from sponsorhub.models.user import User, UserRole
from sponsorhub.schemas.collaboration import CollaborationUpdate
from sponsorhub.services.base import BaseService
from sponsorhub.services.notification_service import NotificationService

TERMINABLE_STATUSES = (CollaborationStatus.PENDING, CollaborationStatus.ACTIVE)


class CollaborationService(BaseService):

    async def get_collaboration(self, collaboration_id: str) -> Collaboration:
        return await self.get_or_404(Collaboration, collaboration_id, "Collaboration")

    async def get_for_participant(self, collaboration_id: str, user: User) -> Collaboration:
        """Only the organizer or sponsor of the collaboration (admins excluded)"""
        collaboration = await self.get_collaboration(collaboration_id)
        if not collaboration.is_participant(user.id):
            raise AuthorizationError("You are not a participant in this collaboration")
        return collaboration

    async def get_visible(self, collaboration_id: str, user: User) -> Collaboration:
        """Participants and admins"""
        collaboration = await self.get_collaboration(collaboration_id)
        if user.role != UserRole.ADMIN and not collaboration.is_participant(user.id):
            raise AuthorizationError("You do not have access to this collaboration")
        return collaboration

    async def list_for_user(self, user: User, status: Optional[CollaborationStatus] = None) -> List[Collaboration]:
        query = select(Collaboration)
        if user.role != UserRole.ADMIN:
            query = query.where(or_(
                Collaboration.organizer_id == str(user.id),
                Collaboration.sponsor_id == str(user.id),
            ))
        if status:
            query = query.where(Collaboration.status == status)

        result = await self.db.execute(query.order_by(Collaboration.created_at.desc()))
        return list(result.scalars().all())

    async def update(self, collaboration_id: str, user: User, data: CollaborationUpdate) -> Collaboration:
        collaboration = await self.get_for_participant(collaboration_id, user)

        changes = data.model_dump(exclude_unset=True)
        if "notes" in changes:
            collaboration.notes = changes["notes"]
        if "end_date" in changes:
            collaboration.end_date = changes["end_date"]

        await self.db.commit()
        return collaboration

    # ==================== Transitions ====================

    def _require_owner_organizer(self, collaboration: Collaboration, user: User, action: str) -> None:
        if str(collaboration.organizer_id) != str(user.id):
            raise AuthorizationError(f"Only the organizer of this collaboration can {action} it")

    @staticmethod
    def _require_status(collaboration: Collaboration, allowed: Iterable[CollaborationStatus], action: str) -> None:
        if collaboration.status not in allowed:
            raise InvalidStateError(
                f"Cannot {action} collaboration with status: {collaboration.status.value}",
                collaboration.status.value,
            )

    def _notify_other_party(self, collaboration: Collaboration, actor: User, title: str, message: str) -> None:
        NotificationService(self.db).notify(
            collaboration.other_party_id(actor.id),
            title,
            message,
            NotificationType.COLLABORATION,
            RelatedEntityType.COLLABORATION,
            collaboration.id,
        )

    async def _transition(
        self,
        collaboration: Collaboration,
        actor: User,
        new_status: CollaborationStatus,
        title: str,
        message: str,
        **log_extra,
    ) -> Collaboration:
        old_status = collaboration.status.value
        collaboration.status = new_status
        self._notify_other_party(collaboration, actor, title, message)
        await self.db.commit()
        logger.log_status_change("Collaboration", collaboration.id, old_status, new_status.value,
                                 actor_id=str(actor.id), **log_extra)
        return collaboration

    async def activate(self, collaboration_id: str, user: User) -> Collaboration:
        collaboration = await self.get_collaboration(collaboration_id)
        self._require_owner_organizer(collaboration, user, "activate")
        self._require_status(collaboration, (CollaborationStatus.PENDING,), "activate")

        collaboration.start_date = datetime.utcnow()
        return await self._transition(
            collaboration, user, CollaborationStatus.ACTIVE,
            "Collaboration Activated",
            f'Your collaboration for "{collaboration.event.title}" is now active.',
        )

    async def complete(self, collaboration_id: str, user: User) -> Collaboration:
        collaboration = await self.get_for_participant(collaboration_id, user)
        self._require_status(collaboration, (CollaborationStatus.ACTIVE,), "complete")

        collaboration.end_date = datetime.utcnow()
        return await self._transition(
            collaboration, user, CollaborationStatus.COMPLETED,
            "Collaboration Completed",
            f'Your collaboration for "{collaboration.event.title}" has been marked as completed.',
        )

    async def terminate(self, collaboration_id: str, user: User, reason: Optional[str] = None) -> Collaboration:
        collaboration = await self.get_collaboration(collaboration_id)
        self._require_owner_organizer(collaboration, user, "terminate")
        self._require_status(collaboration, TERMINABLE_STATUSES, "terminate")

        collaboration.end_date = datetime.utcnow()
        collaboration.termination_reason = reason
        return await self._transition(
            collaboration, user, CollaborationStatus.TERMINATED,
            "Collaboration Terminated",
            f'Your collaboration for "{collaboration.event.title}" has been terminated.'
            + (f" Reason: {reason}" if reason else ""),
            reason=reason,
        )
