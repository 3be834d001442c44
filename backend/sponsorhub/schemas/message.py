from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from sponsorhub.schemas.auth import UserSummary

MAX_MESSAGE_LENGTH = 5000


class Attachment(BaseModel):
    file_name: str
    file_url: str
    file_type: Optional[str] = None


class MessageCreate(BaseModel):
    content: str
    attachments: List[Attachment] = []

    @field_validator('content')
    @classmethod
    def validate_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message content is required")
        if len(v) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Message cannot exceed {MAX_MESSAGE_LENGTH} characters")
        return v


class MessageResponse(BaseModel):
    id: str
    collaboration_id: str
    sender_id: str
    content: str
    attachments: List[Attachment] = []
    is_read: bool
    sender: Optional[UserSummary] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UnreadCount(BaseModel):
    unread_count: int
