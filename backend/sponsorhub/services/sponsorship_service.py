"""
Sponsorship Request Service - lightweight sponsor/organizer connection requests

Either side can start the conversation: a sponsor requests to sponsor an
event, or an organizer invites a sponsor. One request exists per
(sponsor, organizer, event) triple.
"""

from typing import List

from sqlalchemy import select

from sponsorhub.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    ResourceNotFoundError,
    ValidationError,
)
from sponsorhub.core.logging_config import logger
from sponsorhub.models.event import Event
from sponsorhub.models.notification import NotificationType, RelatedEntityType
from sponsorhub.models.sponsorship_request import SponsorshipRequest, RequestStatus, RequestInitiator
from sponsorhub.models.user import User, UserRole
from sponsorhub.schemas.sponsorship import SponsorRequestCreate, SponsorInviteCreate
from sponsorhub.services.base import BaseService
from sponsorhub.services.notification_service import NotificationService
from sponsorhub.utils.ids import ensure_valid_id


def _preview(message: str, label: str) -> str:
    return f" {label}: {message[:50]}..." if message else ""


class SponsorshipService(BaseService):

    def __init__(self, db):
        super().__init__(db)
        self.notifications = NotificationService(db)

    async def event_organizers(self, event_id: str) -> List[User]:
        event = await self.get_or_404(Event, event_id, "Event")
        return [event.organizer]

    async def list_active_sponsors(self) -> List[User]:
        result = await self.db.execute(
            select(User)
            .where(User.role == UserRole.SPONSOR, User.is_active.is_(True))
            .order_by(User.name.asc())
        )
        return list(result.scalars().all())

    async def _ensure_unique(self, sponsor_id: str, organizer_id: str, event_id: str, message: str) -> None:
        existing = await self.db.execute(
            select(SponsorshipRequest.id).where(
                SponsorshipRequest.sponsor_id == sponsor_id,
                SponsorshipRequest.organizer_id == organizer_id,
                SponsorshipRequest.event_id == event_id,
            )
        )
        if existing.first() is not None:
            raise ConflictError(message)

    async def request_sponsorship(self, sponsor: User, data: SponsorRequestCreate) -> SponsorshipRequest:
        event_id = ensure_valid_id(data.event_id, "event")
        organizer_id = ensure_valid_id(data.organizer_id, "organizer")

        event = await self.get_or_404(Event, event_id, "Event")
        if str(event.organizer_id) != organizer_id:
            raise ValidationError("Organizer is not related to this event", field="organizer_id")

        await self._ensure_unique(str(sponsor.id), organizer_id, event.id, "Request already sent")

        request = SponsorshipRequest(
            sponsor_id=str(sponsor.id),
            organizer_id=organizer_id,
            event_id=event.id,
            status=RequestStatus.PENDING,
            initiated_by=RequestInitiator.SPONSOR,
            message=data.message or "",
        )
        self.db.add(request)
        self.notifications.notify(
            organizer_id,
            "New Sponsorship Request",
            f"New sponsorship request from {sponsor.name} for {event.title}."
            + _preview(data.message, "Proposal"),
            NotificationType.PROPOSAL,
            RelatedEntityType.EVENT,
            event.id,
        )
        await self.db.commit()

        logger.info(f"Sponsorship request {request.id}: sponsor {sponsor.id} -> organizer {organizer_id}")
        return await self.reload(request)

    async def invite_sponsor(self, organizer: User, data: SponsorInviteCreate) -> SponsorshipRequest:
        event_id = ensure_valid_id(data.event_id, "event")
        sponsor_id = ensure_valid_id(data.sponsor_id, "sponsor")

        event = await self.get_or_404(Event, event_id, "Event")
        if str(event.organizer_id) != str(organizer.id):
            raise AuthorizationError("You can only invite sponsors to your own events")

        sponsor = await self.get_or_404(User, sponsor_id, "Sponsor")
        if sponsor.role != UserRole.SPONSOR:
            raise ResourceNotFoundError("Sponsor", sponsor_id)

        await self._ensure_unique(sponsor.id, str(organizer.id), event.id, "Request already exists")

        request = SponsorshipRequest(
            sponsor_id=sponsor.id,
            organizer_id=str(organizer.id),
            event_id=event.id,
            status=RequestStatus.PENDING,
            initiated_by=RequestInitiator.ORGANIZER,
            message=data.message or "",
        )
        self.db.add(request)
        self.notifications.notify(
            sponsor.id,
            "Sponsorship Invitation",
            f"You've been invited by {organizer.name} to sponsor {event.title}."
            + _preview(data.message, "Note"),
            NotificationType.PROPOSAL,
            RelatedEntityType.EVENT,
            event.id,
        )
        await self.db.commit()

        logger.info(f"Sponsorship invite {request.id}: organizer {organizer.id} -> sponsor {sponsor.id}")
        return await self.reload(request)

    async def list_for_organizer(self, organizer: User) -> List[SponsorshipRequest]:
        result = await self.db.execute(
            select(SponsorshipRequest)
            .where(SponsorshipRequest.organizer_id == str(organizer.id))
            .order_by(SponsorshipRequest.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_for_sponsor(self, sponsor: User) -> List[SponsorshipRequest]:
        result = await self.db.execute(
            select(SponsorshipRequest)
            .where(SponsorshipRequest.sponsor_id == str(sponsor.id))
            .order_by(SponsorshipRequest.created_at.desc())
        )
        return list(result.scalars().all())

    async def respond(self, request_id: str, organizer: User, accept: bool) -> SponsorshipRequest:
        """Organizer accepts or rejects a pending request addressed to them"""
        request_id = ensure_valid_id(request_id, "request")
        result = await self.db.execute(
            select(SponsorshipRequest).where(
                SponsorshipRequest.id == request_id,
                SponsorshipRequest.organizer_id == str(organizer.id),
            )
        )
        request = result.scalar_one_or_none()
        if request is None:
            raise ResourceNotFoundError("Request", request_id)
        if request.status != RequestStatus.PENDING:
            raise InvalidStateError(
                f"Request has already been {request.status.value}", request.status.value
            )

        request.status = RequestStatus.ACCEPTED if accept else RequestStatus.REJECTED
        verb = "accepted" if accept else "rejected"
        self.notifications.notify(
            request.sponsor_id,
            f"Request {verb.capitalize()}",
            f"Organizer {verb} your sponsorship request",
            NotificationType.PROPOSAL,
            RelatedEntityType.EVENT,
            request.event_id,
        )
        await self.db.commit()

        logger.log_status_change("SponsorshipRequest", request.id, RequestStatus.PENDING.value, request.status.value)
        return request
