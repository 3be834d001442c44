from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Text, ForeignKey, Index
from datetime import datetime
import enum

from sponsorhub.core.database import Base
from sponsorhub.core.types import GUID, generate_uuid


class NotificationType(str, enum.Enum):
    SYSTEM = "system"
    PROPOSAL = "proposal"
    COLLABORATION = "collaboration"


class RelatedEntityType(str, enum.Enum):
    EVENT = "event"
    PROPOSAL = "proposal"
    COLLABORATION = "collaboration"


class Notification(Base):
    """Per-user feed entry; expires after NOTIFICATION_RETENTION_DAYS"""
    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_read", "user_id", "is_read"),
        Index("ix_notifications_user_created", "user_id", "created_at"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(SQLEnum(NotificationType), default=NotificationType.SYSTEM, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)

    related_entity_type = Column(SQLEnum(RelatedEntityType), nullable=True)
    related_entity_id = Column(GUID, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Notification {self.title} -> {self.user_id}>"
