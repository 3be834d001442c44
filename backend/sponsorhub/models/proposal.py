from sqlalchemy import Column, DateTime, Enum as SQLEnum, Text, Float, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sponsorhub.core.database import Base
from sponsorhub.core.types import GUID, generate_uuid


class ProposalStatus(str, enum.Enum):
    """Sponsorship proposal status"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NEGOTIATION = "negotiation"


# Statuses an organizer can still decide on
OPEN_PROPOSAL_STATUSES = (ProposalStatus.PENDING, ProposalStatus.NEGOTIATION)


class SponsorshipProposal(Base):
    """A sponsor's bid against a published event"""
    __tablename__ = "sponsorship_proposals"
    __table_args__ = (
        Index("ix_proposals_event_sponsor", "event_id", "sponsor_id"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    sponsor_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    proposed_amount = Column(Float, nullable=False)
    proposed_benefits = Column(JSON, default=list, nullable=False)
    message = Column(Text, nullable=True)
    response_note = Column(Text, nullable=True)

    status = Column(SQLEnum(ProposalStatus), default=ProposalStatus.PENDING, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", lazy="selectin")
    sponsor = relationship("User", foreign_keys=[sponsor_id], lazy="selectin")

    def __repr__(self):
        return f"<SponsorshipProposal {self.id} ({self.status})>"


# One live proposal per sponsor per event; only a rejection frees the slot
Index(
    "uq_proposals_event_sponsor_live",
    SponsorshipProposal.event_id,
    SponsorshipProposal.sponsor_id,
    unique=True,
    sqlite_where=SponsorshipProposal.status != ProposalStatus.REJECTED,
    postgresql_where=SponsorshipProposal.status != ProposalStatus.REJECTED,
)
