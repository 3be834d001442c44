from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from sponsorhub.models.collaboration import CollaborationStatus
from sponsorhub.models.proposal import ProposalStatus
from sponsorhub.schemas.auth import UserSummary
from sponsorhub.schemas.common import to_naive_utc
from sponsorhub.schemas.event import EventSummary


class CollaborationUpdate(BaseModel):
    """Participants may only edit notes and the planned end date"""
    notes: Optional[str] = Field(None, max_length=5000)
    end_date: Optional[datetime] = None

    @field_validator('end_date')
    @classmethod
    def normalize_end_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class CollaborationTerminate(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000)


class ProposalSummary(BaseModel):
    id: str
    proposed_amount: float
    proposed_benefits: List[str] = []
    status: ProposalStatus

    class Config:
        from_attributes = True


class CollaborationResponse(BaseModel):
    id: str
    event_id: str
    organizer_id: str
    sponsor_id: str
    proposal_id: str
    status: CollaborationStatus
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    notes: Optional[str] = None
    termination_reason: Optional[str] = None
    event: Optional[EventSummary] = None
    organizer: Optional[UserSummary] = None
    sponsor: Optional[UserSummary] = None
    proposal: Optional[ProposalSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
