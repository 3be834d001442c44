from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Text, Float, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sponsorhub.core.database import Base
from sponsorhub.core.types import GUID, generate_uuid


class EventStatus(str, enum.Enum):
    """Event lifecycle status"""
    DRAFT = "draft"
    PUBLISHED = "published"
    CLOSED = "closed"


class EventMode(str, enum.Enum):
    """How the event is held"""
    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"


def empty_sponsorship_needs() -> dict:
    return {"tiers": [], "categories": [], "custom_benefits": []}


class Event(Base):
    """
    Event published by an organizer.

    Publicly visible only when status is published AND an admin has approved it.
    """
    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_status_approved", "status", "is_approved"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=True, index=True)

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)

    amount_required = Column(Float, default=0, nullable=False)
    location = Column(String(255), nullable=True)
    event_mode = Column(SQLEnum(EventMode), default=EventMode.OFFLINE, nullable=False)

    # {"tiers": [{"name", "amount", "benefits"}], "categories": [...], "custom_benefits": [...]}
    sponsorship_needs = Column(JSON, default=empty_sponsorship_needs, nullable=False)

    organizer_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(SQLEnum(EventStatus), default=EventStatus.DRAFT, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    organizer = relationship("User", lazy="selectin")

    @property
    def is_public(self) -> bool:
        return self.status == EventStatus.PUBLISHED and bool(self.is_approved)

    def __repr__(self):
        return f"<Event {self.title} ({self.status})>"
