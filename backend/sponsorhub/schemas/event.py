from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime

from sponsorhub.models.event import EventMode, EventStatus
from sponsorhub.schemas.auth import UserSummary
from sponsorhub.schemas.common import to_naive_utc


class SponsorshipTier(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(0, ge=0)
    benefits: List[str] = []


class SponsorshipNeeds(BaseModel):
    tiers: List[SponsorshipTier] = []
    categories: List[str] = []
    custom_benefits: List[str] = []


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    start_date: datetime
    end_date: datetime
    date: Optional[datetime] = None
    amount_required: float = Field(0, ge=0)
    location: Optional[str] = Field(None, max_length=255)
    event_mode: EventMode = EventMode.OFFLINE
    sponsorship_needs: SponsorshipNeeds = Field(default_factory=SponsorshipNeeds)

    @field_validator('start_date', 'end_date', 'date')
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)

    @model_validator(mode='after')
    def check_date_order(self):
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class EventUpdate(BaseModel):
    """Partial update; date order is re-checked against stored values"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    date: Optional[datetime] = None
    amount_required: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=255)
    event_mode: Optional[EventMode] = None
    sponsorship_needs: Optional[SponsorshipNeeds] = None

    @field_validator('start_date', 'end_date', 'date')
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class EventApproval(BaseModel):
    is_approved: bool


class SponsorshipRequirementsUpdate(BaseModel):
    sponsorship_needs: SponsorshipNeeds
    amount_required: Optional[float] = Field(None, ge=0)


class EventSummary(BaseModel):
    """Compact event shape embedded in proposals and collaborations"""
    id: str
    title: str
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None
    event_mode: EventMode
    status: EventStatus
    organizer_id: str

    class Config:
        from_attributes = True


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    category: Optional[str] = None
    start_date: datetime
    end_date: datetime
    date: datetime
    amount_required: float
    location: Optional[str] = None
    event_mode: EventMode
    sponsorship_needs: SponsorshipNeeds
    organizer_id: str
    organizer: Optional[UserSummary] = None
    status: EventStatus
    is_approved: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
