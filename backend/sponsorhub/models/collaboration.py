from sqlalchemy import Column, DateTime, Enum as SQLEnum, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sponsorhub.core.database import Base
from sponsorhub.core.types import GUID, generate_uuid


class CollaborationStatus(str, enum.Enum):
    """Collaboration lifecycle: pending -> active -> completed | terminated"""
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    TERMINATED = "terminated"


class Collaboration(Base):
    """Partnership created when an organizer accepts a proposal (1:1 with the proposal)"""
    __tablename__ = "collaborations"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    organizer_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sponsor_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    proposal_id = Column(GUID, ForeignKey("sponsorship_proposals.id", ondelete="CASCADE"), nullable=False, unique=True)

    status = Column(SQLEnum(CollaborationStatus), default=CollaborationStatus.PENDING, nullable=False, index=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    termination_reason = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", lazy="selectin")
    organizer = relationship("User", foreign_keys=[organizer_id], lazy="selectin")
    sponsor = relationship("User", foreign_keys=[sponsor_id], lazy="selectin")
    proposal = relationship("SponsorshipProposal", lazy="selectin")

    def is_participant(self, user_id: str) -> bool:
        return str(user_id) in (str(self.organizer_id), str(self.sponsor_id))

    def other_party_id(self, user_id: str) -> str:
        """Id of the participant who is not ``user_id``"""
        if str(user_id) == str(self.organizer_id):
            return str(self.sponsor_id)
        return str(self.organizer_id)

    def __repr__(self):
        return f"<Collaboration {self.id} ({self.status})>"
