from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from sponsorhub.models.notification import NotificationType, RelatedEntityType


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    title: str
    message: str
    type: NotificationType
    is_read: bool
    related_entity_type: Optional[RelatedEntityType] = None
    related_entity_id: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class OffsetPagination(BaseModel):
    total: int
    limit: int
    skip: int


class NotificationListResponse(BaseModel):
    success: bool = True
    data: List[NotificationResponse]
    pagination: OffsetPagination
    unread_count: int


class ReadAllResult(BaseModel):
    modified_count: int
