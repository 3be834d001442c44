from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime

from sponsorhub.schemas.auth import UserSummary
from sponsorhub.schemas.event import EventResponse


# ==================== User Management Schemas ====================

class AdminUserStatusUpdate(BaseModel):
    is_active: bool


# ==================== Event Moderation Schemas ====================

class AdminEventReject(BaseModel):
    reason: str = Field(..., max_length=1000)

    @field_validator('reason')
    @classmethod
    def require_reason(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Rejection reason is required")
        return v


class RejectedEventResponse(EventResponse):
    rejection_reason: str


# ==================== Analytics Schemas ====================

class RoleStats(BaseModel):
    total: int
    active: int
    verified: int


class UserOverview(BaseModel):
    total: int
    by_role: Dict[str, RoleStats]


class EventStatusStats(BaseModel):
    total: int
    approved: int


class EventOverview(BaseModel):
    total: int
    by_status: Dict[str, EventStatusStats]
    total_approved: int


class StatusCounts(BaseModel):
    total: int
    by_status: Dict[str, int]


class AnalyticsOverview(BaseModel):
    """Platform-wide KPI snapshot"""
    users: UserOverview
    events: EventOverview
    proposals: StatusCounts
    collaborations: StatusCounts
    generated_at: datetime


class UserTrend(BaseModel):
    period: str  # e.g. "March 2026"
    year: int
    month: int
    total: int
    organizers: int
    sponsors: int
    admins: int


class EventTrend(BaseModel):
    period: str
    year: int
    month: int
    total: int
    draft: int
    published: int
    approved: int


class AnalyticsTrends(BaseModel):
    """New users/events per month over the trailing window"""
    user_trends: List[UserTrend]
    event_trends: List[EventTrend]
    period_start: datetime
    generated_at: datetime


# ==================== Audit Log Schemas ====================

class AuditLogResponse(BaseModel):
    id: str
    admin_id: Optional[str] = None
    admin: Optional[UserSummary] = None
    action: str
    target_type: str
    target_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
