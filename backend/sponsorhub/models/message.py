from sqlalchemy import Column, Boolean, DateTime, Text, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime

from sponsorhub.core.database import Base
from sponsorhub.core.types import GUID, generate_uuid


class Message(Base):
    """Chat message exchanged inside a collaboration"""
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_collaboration_created", "collaboration_id", "created_at"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    collaboration_id = Column(GUID, ForeignKey("collaborations.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    content = Column(Text, nullable=False)
    attachments = Column(JSON, default=list, nullable=False)  # [{file_name, file_url, file_type}]
    is_read = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    sender = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<Message {self.id} in {self.collaboration_id}>"
