from pydantic import BaseModel
from typing import Generic, List, Optional, TypeVar
from datetime import datetime, timezone

T = TypeVar("T")


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store every timestamp as naive UTC, matching datetime.utcnow() defaults"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class APIResponse(BaseModel, Generic[T]):
    """Standard response envelope: {success, message?, data?}"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for page/limit list endpoints"""
    success: bool = True
    message: Optional[str] = None
    data: List[T]
    pagination: PaginationMeta


class MessageResponse(BaseModel):
    success: bool = True
    message: str
