from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, ForeignKey, BigInteger
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from sponsorhub.core.database import Base
from sponsorhub.core.types import GUID, generate_uuid


class DocumentType(str, enum.Enum):
    """Business purpose of an uploaded document"""
    AGREEMENT = "agreement"
    INVOICE = "invoice"
    DECK = "deck"
    OTHER = "other"


class Document(Base):
    """File shared inside a collaboration, stored on local disk"""
    __tablename__ = "documents"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    collaboration_id = Column(GUID, ForeignKey("collaborations.id", ondelete="CASCADE"), nullable=False, index=True)
    uploaded_by_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    file_name = Column(String(255), nullable=False)  # original name shown to users
    file_type = Column(String(150), nullable=False)  # MIME type
    file_size = Column(BigInteger, nullable=False)  # bytes
    file_path = Column(String(500), nullable=False)  # relative to UPLOAD_PATH
    document_type = Column(SQLEnum(DocumentType), default=DocumentType.OTHER, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    uploaded_by = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<Document {self.file_name}>"
