from sqlalchemy import Column, DateTime, Enum as SQLEnum, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sponsorhub.core.database import Base
from sponsorhub.core.types import GUID, generate_uuid


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RequestInitiator(str, enum.Enum):
    SPONSOR = "sponsor"
    ORGANIZER = "organizer"


class SponsorshipRequest(Base):
    """Lightweight connection request between a sponsor and an event organizer"""
    __tablename__ = "sponsorship_requests"
    __table_args__ = (
        UniqueConstraint("sponsor_id", "organizer_id", "event_id", name="uq_sponsorship_request_triple"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    sponsor_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    organizer_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)

    status = Column(SQLEnum(RequestStatus), default=RequestStatus.PENDING, nullable=False)
    initiated_by = Column(SQLEnum(RequestInitiator), default=RequestInitiator.SPONSOR, nullable=False)
    message = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    sponsor = relationship("User", foreign_keys=[sponsor_id], lazy="selectin")
    organizer = relationship("User", foreign_keys=[organizer_id], lazy="selectin")
    event = relationship("Event", lazy="selectin")

    def __repr__(self):
        return f"<SponsorshipRequest {self.sponsor_id} -> {self.organizer_id} ({self.status})>"
