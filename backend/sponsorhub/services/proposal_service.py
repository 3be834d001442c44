"""
Proposal Service - sponsor bids and organizer decisions

A sponsor may hold one live proposal per event; only a rejection frees the
slot, so an accepted proposal blocks resubmission too.
Accepting a proposal creates the collaboration in the same transaction.
"""

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from sponsorhub.core.exceptions import AuthorizationError, ConflictError, InvalidStateError
from sponsorhub.core.logging_config import logger
from sponsorhub.models.collaboration import Collaboration, CollaborationStatus
from sponsorhub.models.event import Event
from sponsorhub.models.notification import NotificationType, RelatedEntityType
from sponsorhub.models.proposal import SponsorshipProposal, ProposalStatus, OPEN_PROPOSAL_STATUSES
from sponsorhub.models.user import User, UserRole
from sponsorhub.schemas.proposal import ProposalCreate
from sponsorhub.services.base import BaseService
from sponsorhub.services.notification_service import NotificationService
from sponsorhub.utils.ids import ensure_valid_id

DUPLICATE_PROPOSAL_MESSAGE = "You already have a proposal for this event"


class ProposalService(BaseService):

    def __init__(self, db):
        super().__init__(db)
        self.notifications = NotificationService(db)

    async def get_proposal(self, proposal_id: str) -> SponsorshipProposal:
        return await self.get_or_404(SponsorshipProposal, proposal_id, "Proposal")

    async def _get_for_event_owner(self, proposal_id: str, user: User, action: str) -> SponsorshipProposal:
        proposal = await self.get_proposal(proposal_id)
        if str(proposal.event.organizer_id) != str(user.id):
            raise AuthorizationError(f"You can only {action} proposals for your own events")
        return proposal

    # ==================== Sponsor side ====================

    async def create_proposal(self, sponsor: User, data: ProposalCreate) -> SponsorshipProposal:
        event_id = ensure_valid_id(data.event_id, "event")
        event = await self.get_or_404(Event, event_id, "Event")

        if not event.is_public:
            raise InvalidStateError("Cannot submit proposal to an unpublished or unapproved event", event.status.value)

        existing = await self.db.execute(
            select(SponsorshipProposal.id).where(
                SponsorshipProposal.event_id == event.id,
                SponsorshipProposal.sponsor_id == str(sponsor.id),
                SponsorshipProposal.status != ProposalStatus.REJECTED,
            )
        )
        if existing.first() is not None:
            raise ConflictError(DUPLICATE_PROPOSAL_MESSAGE)

        proposal = SponsorshipProposal(
            event_id=event.id,
            sponsor_id=str(sponsor.id),
            proposed_amount=data.proposed_amount,
            proposed_benefits=data.proposed_benefits,
            message=data.message,
            status=ProposalStatus.PENDING,
        )
        self.db.add(proposal)
        try:
            await self.db.flush()
        except IntegrityError:
            # a concurrent submit won the unique index
            await self.db.rollback()
            raise ConflictError(DUPLICATE_PROPOSAL_MESSAGE)

        self.notifications.notify(
            event.organizer_id,
            "New Sponsorship Proposal",
            f'{sponsor.name} submitted a proposal of {data.proposed_amount:g} for "{event.title}"',
            NotificationType.PROPOSAL,
            RelatedEntityType.PROPOSAL,
            proposal.id,
        )
        await self.db.commit()

        logger.info(f"Proposal {proposal.id} submitted by sponsor {sponsor.id} for event {event.id}")
        return await self.reload(proposal)

    async def list_for_sponsor(self, sponsor: User, status: Optional[ProposalStatus] = None) -> List[SponsorshipProposal]:
        query = select(SponsorshipProposal).where(SponsorshipProposal.sponsor_id == str(sponsor.id))
        if status:
            query = query.where(SponsorshipProposal.status == status)
        result = await self.db.execute(query.order_by(SponsorshipProposal.created_at.desc()))
        return list(result.scalars().all())

    # ==================== Organizer side ====================

    async def list_for_event(
        self, event_id: str, organizer: User, status: Optional[ProposalStatus] = None
    ) -> List[SponsorshipProposal]:
        event = await self.get_or_404(Event, event_id, "Event")
        if str(event.organizer_id) != str(organizer.id):
            raise AuthorizationError("You can only view proposals for your own events")

        query = select(SponsorshipProposal).where(SponsorshipProposal.event_id == event.id)
        if status:
            query = query.where(SponsorshipProposal.status == status)
        result = await self.db.execute(query.order_by(SponsorshipProposal.created_at.desc()))
        return list(result.scalars().all())

    async def list_for_organizer(self, organizer: User, status: Optional[ProposalStatus] = None) -> List[SponsorshipProposal]:
        """Proposals received across all of the organizer's events"""
        query = (
            select(SponsorshipProposal)
            .join(Event, SponsorshipProposal.event_id == Event.id)
            .where(Event.organizer_id == str(organizer.id))
        )
        if status:
            query = query.where(SponsorshipProposal.status == status)
        result = await self.db.execute(query.order_by(SponsorshipProposal.created_at.desc()))
        return list(result.scalars().all())

    async def get_visible_proposal(self, proposal_id: str, user: User) -> SponsorshipProposal:
        proposal = await self.get_proposal(proposal_id)
        allowed = (
            user.role == UserRole.ADMIN
            or str(proposal.sponsor_id) == str(user.id)
            or str(proposal.event.organizer_id) == str(user.id)
        )
        if not allowed:
            raise AuthorizationError("You do not have access to this proposal")
        return proposal

    async def accept(self, proposal_id: str, organizer: User) -> Tuple[SponsorshipProposal, Collaboration]:
        proposal = await self._get_for_event_owner(proposal_id, organizer, "accept")
        if proposal.status not in OPEN_PROPOSAL_STATUSES:
            raise InvalidStateError(
                f"Cannot accept a proposal with status: {proposal.status.value}",
                proposal.status.value,
            )

        old_status = proposal.status.value
        proposal.status = ProposalStatus.ACCEPTED
        collaboration = Collaboration(
            event_id=proposal.event_id,
            organizer_id=str(organizer.id),
            sponsor_id=proposal.sponsor_id,
            proposal_id=proposal.id,
            status=CollaborationStatus.PENDING,
        )
        self.db.add(collaboration)
        await self.db.flush()

        self.notifications.notify(
            proposal.sponsor_id,
            "Proposal Accepted",
            f'Your proposal for "{proposal.event.title}" has been accepted. A collaboration has been created.',
            NotificationType.PROPOSAL,
            RelatedEntityType.COLLABORATION,
            collaboration.id,
        )
        await self.db.commit()

        logger.log_status_change("Proposal", proposal.id, old_status, ProposalStatus.ACCEPTED.value,
                                 collaboration_id=collaboration.id)
        return proposal, collaboration

    async def reject(self, proposal_id: str, organizer: User, response_note: Optional[str] = None) -> SponsorshipProposal:
        proposal = await self._get_for_event_owner(proposal_id, organizer, "reject")
        if proposal.status not in OPEN_PROPOSAL_STATUSES:
            raise InvalidStateError(
                f"Cannot reject a proposal with status: {proposal.status.value}",
                proposal.status.value,
            )

        old_status = proposal.status.value
        proposal.status = ProposalStatus.REJECTED
        if response_note:
            proposal.response_note = response_note

        self.notifications.notify(
            proposal.sponsor_id,
            "Proposal Rejected",
            f'Your proposal for "{proposal.event.title}" has been rejected.'
            + (f" Note: {response_note}" if response_note else ""),
            NotificationType.PROPOSAL,
            RelatedEntityType.PROPOSAL,
            proposal.id,
        )
        await self.db.commit()

        logger.log_status_change("Proposal", proposal.id, old_status, ProposalStatus.REJECTED.value)
        return proposal

    async def negotiate(self, proposal_id: str, organizer: User, response_note: Optional[str] = None) -> SponsorshipProposal:
        proposal = await self._get_for_event_owner(proposal_id, organizer, "negotiate")
        if proposal.status != ProposalStatus.PENDING:
            raise InvalidStateError(
                f"Only pending proposals can move to negotiation. Current status: {proposal.status.value}",
                proposal.status.value,
            )

        proposal.status = ProposalStatus.NEGOTIATION
        if response_note:
            proposal.response_note = response_note

        self.notifications.notify(
            proposal.sponsor_id,
            "Proposal Under Negotiation",
            f'The organizer of "{proposal.event.title}" wants to negotiate your proposal.'
            + (f" Note: {response_note}" if response_note else ""),
            NotificationType.PROPOSAL,
            RelatedEntityType.PROPOSAL,
            proposal.id,
        )
        await self.db.commit()

        logger.log_status_change("Proposal", proposal.id, ProposalStatus.PENDING.value, ProposalStatus.NEGOTIATION.value)
        return proposal
