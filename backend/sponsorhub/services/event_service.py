"""
Event Service - organizer event lifecycle and admin moderation

Lifecycle: draft -> published -> closed. Public visibility additionally
requires admin approval (is_approved).
"""

from typing import List, Optional, Tuple

from sqlalchemy import select, or_, delete, func

from sponsorhub.core.exceptions import AuthorizationError, InvalidStateError, ValidationError
from sponsorhub.core.logging_config import logger
from sponsorhub.models.collaboration import Collaboration
from sponsorhub.models.event import Event, EventStatus, EventMode
from sponsorhub.models.notification import NotificationType, RelatedEntityType
from sponsorhub.models.proposal import SponsorshipProposal
from sponsorhub.models.sponsorship_request import SponsorshipRequest
from sponsorhub.models.user import User, UserRole
from sponsorhub.schemas.event import EventCreate, EventUpdate, SponsorshipRequirementsUpdate
from sponsorhub.services.base import BaseService
from sponsorhub.services.notification_service import NotificationService
from sponsorhub.utils.pagination import paginate

PUBLIC_EVENTS_LIMIT = 50


class EventService(BaseService):

    async def get_event(self, event_id: str) -> Event:
        return await self.get_or_404(Event, event_id, "Event")

    async def get_owned_event(self, event_id: str, user: User, action: str = "modify") -> Event:
        """Fetch an event and make sure ``user`` organizes it"""
        event = await self.get_event(event_id)
        if str(event.organizer_id) != str(user.id):
            raise AuthorizationError(f"You can only {action} your own events")
        return event

    # ==================== Queries ====================

    async def list_public(
        self,
        category: Optional[str] = None,
        event_mode: Optional[EventMode] = None,
        search: Optional[str] = None,
    ) -> List[Event]:
        query = select(Event).where(
            Event.status == EventStatus.PUBLISHED,
            Event.is_approved.is_(True),
        )
        if category:
            query = query.where(Event.category == category)
        if event_mode:
            query = query.where(Event.event_mode == event_mode)
        if search:
            term = f"%{search}%"
            query = query.where(or_(Event.title.ilike(term), Event.description.ilike(term)))

        result = await self.db.execute(
            query.order_by(Event.start_date.asc()).limit(PUBLIC_EVENTS_LIMIT)
        )
        return list(result.scalars().all())

    async def list_for_organizer(self, organizer: User) -> List[Event]:
        result = await self.db.execute(
            select(Event)
            .where(Event.organizer_id == str(organizer.id))
            .order_by(Event.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_visible_event(self, event_id: str, user: Optional[User]) -> Event:
        """Public events for anyone; drafts/unapproved only for the owner or an admin"""
        event = await self.get_event(event_id)
        if event.is_public:
            return event
        if user and (str(event.organizer_id) == str(user.id) or user.role == UserRole.ADMIN):
            return event
        raise AuthorizationError("You do not have access to this event")

    async def list_all(
        self,
        page: int,
        limit: int,
        status: Optional[EventStatus] = None,
        is_approved: Optional[bool] = None,
        event_mode: Optional[EventMode] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Event], dict]:
        """Admin listing with filters"""
        query = select(Event)
        if status:
            query = query.where(Event.status == status)
        if is_approved is not None:
            query = query.where(Event.is_approved.is_(is_approved))
        if event_mode:
            query = query.where(Event.event_mode == event_mode)
        if search:
            term = f"%{search}%"
            query = query.where(or_(Event.title.ilike(term), Event.description.ilike(term)))

        return await paginate(self.db, query.order_by(Event.created_at.desc()), page, limit)

    # ==================== Organizer mutations ====================

    async def create_event(self, organizer: User, data: EventCreate) -> Event:
        payload = data.model_dump(exclude={"date", "sponsorship_needs"})
        event = Event(
            **payload,
            date=data.date or data.start_date,
            sponsorship_needs=data.sponsorship_needs.model_dump(),
            organizer_id=str(organizer.id),
            status=EventStatus.DRAFT,
            is_approved=False,
        )
        self.db.add(event)
        await self.db.commit()

        logger.info(f"Event created: {event.id} by organizer {organizer.id}")
        return await self.reload(event)

    async def update_event(self, event_id: str, user: User, data: EventUpdate) -> Event:
        event = await self.get_owned_event(event_id, user, "update")
        if event.status != EventStatus.DRAFT:
            raise InvalidStateError("Only draft events can be updated", event.status.value)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        start_date = changes.get("start_date") or event.start_date
        end_date = changes.get("end_date") or event.end_date
        if end_date <= start_date:
            raise ValidationError("End date must be after start date", field="end_date")

        for field, value in changes.items():
            setattr(event, field, value)

        await self.db.commit()
        return await self.reload(event)

    async def delete_event(self, event_id: str, user: User) -> None:
        event = await self.get_owned_event(event_id, user, "delete")
        if event.status != EventStatus.DRAFT:
            raise InvalidStateError("Only draft events can be deleted", event.status.value)

        collaborations = await self.db.scalar(
            select(func.count(Collaboration.id)).where(Collaboration.event_id == event.id)
        )
        if collaborations:
            raise InvalidStateError("Events with collaborations cannot be deleted")

        await self.db.execute(delete(SponsorshipProposal).where(SponsorshipProposal.event_id == event.id))
        await self.db.execute(delete(SponsorshipRequest).where(SponsorshipRequest.event_id == event.id))
        await self.db.delete(event)
        await self.db.commit()
        logger.info(f"Event deleted: {event_id} by organizer {user.id}")

    async def publish_event(self, event_id: str, user: User) -> Event:
        event = await self.get_owned_event(event_id, user, "publish")
        if event.status != EventStatus.DRAFT:
            raise InvalidStateError(
                f"Only draft events can be published. Current status: {event.status.value}",
                event.status.value,
            )

        event.status = EventStatus.PUBLISHED
        await self.db.commit()
        logger.log_status_change("Event", event.id, EventStatus.DRAFT.value, EventStatus.PUBLISHED.value)
        return event

    async def close_event(self, event_id: str, user: User) -> Event:
        event = await self.get_owned_event(event_id, user, "close")
        if event.status != EventStatus.PUBLISHED:
            raise InvalidStateError(
                f"Only published events can be closed. Current status: {event.status.value}",
                event.status.value,
            )

        event.status = EventStatus.CLOSED
        await self.db.commit()
        logger.log_status_change("Event", event.id, EventStatus.PUBLISHED.value, EventStatus.CLOSED.value)
        return event

    async def update_requirements(self, event_id: str, user: User, data: SponsorshipRequirementsUpdate) -> Event:
        event = await self.get_owned_event(event_id, user, "update")
        if event.status == EventStatus.CLOSED:
            raise InvalidStateError("Cannot update sponsorship requirements of a closed event", event.status.value)

        event.sponsorship_needs = data.sponsorship_needs.model_dump()
        if data.amount_required is not None:
            event.amount_required = data.amount_required

        await self.db.commit()
        return event

    # ==================== Admin moderation ====================

    async def set_approval(self, event_id: str, is_approved: bool) -> Event:
        event = await self.get_event(event_id)
        event.is_approved = is_approved
        await self.db.commit()
        return event

    async def approve_published(self, event_id: str) -> Event:
        """Admin approval of a published, not-yet-approved event"""
        event = await self.get_event(event_id)
        if event.status != EventStatus.PUBLISHED:
            raise InvalidStateError("Only published events can be approved", event.status.value)
        if event.is_approved:
            raise InvalidStateError("Event is already approved", event.status.value)

        event.is_approved = True
        NotificationService(self.db).notify(
            event.organizer_id,
            "Event Approved",
            f'Your event "{event.title}" has been approved and is now publicly visible.',
            NotificationType.SYSTEM,
            RelatedEntityType.EVENT,
            event.id,
        )
        await self.db.commit()
        return event

    async def reject(self, event_id: str, reason: str) -> Event:
        """Send an event back to draft with a reason the organizer can act on"""
        event = await self.get_event(event_id)
        old_status = event.status.value

        event.status = EventStatus.DRAFT
        event.is_approved = False
        NotificationService(self.db).notify(
            event.organizer_id,
            "Event Rejected",
            f'Your event "{event.title}" was rejected by an admin. Reason: {reason}',
            NotificationType.SYSTEM,
            RelatedEntityType.EVENT,
            event.id,
        )
        await self.db.commit()
        logger.log_status_change("Event", event.id, old_status, EventStatus.DRAFT.value, reason=reason)
        return event
