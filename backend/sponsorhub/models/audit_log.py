from sqlalchemy import Column, String, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime

from sponsorhub.core.database import Base
from sponsorhub.core.types import GUID, generate_uuid


class AuditLog(Base):
    """Audit log for tracking admin moderation actions"""
    __tablename__ = "audit_logs"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    admin_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Action details
    action = Column(String(100), nullable=False)  # e.g. 'user_deactivated', 'event_rejected'
    target_type = Column(String(50), nullable=False)  # 'user' or 'event'
    target_id = Column(GUID, nullable=True)

    details = Column(JSON, nullable=True)

    # Request metadata
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    admin = relationship("User", foreign_keys=[admin_id], lazy="selectin")

    def __repr__(self):
        return f"<AuditLog {self.action} by {self.admin_id}>"
