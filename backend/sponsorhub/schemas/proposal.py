from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from sponsorhub.models.proposal import ProposalStatus
from sponsorhub.models.collaboration import CollaborationStatus
from sponsorhub.schemas.auth import UserSummary
from sponsorhub.schemas.event import EventSummary


class ProposalCreate(BaseModel):
    event_id: str
    proposed_amount: float = Field(..., ge=0)
    proposed_benefits: List[str] = []
    message: Optional[str] = Field(None, max_length=2000)


class ProposalDecision(BaseModel):
    """Optional note sent back to the sponsor on reject / negotiate"""
    response_note: Optional[str] = Field(None, max_length=2000)


class CollaborationRef(BaseModel):
    id: str
    status: CollaborationStatus

    class Config:
        from_attributes = True


class ProposalResponse(BaseModel):
    id: str
    event_id: str
    sponsor_id: str
    proposed_amount: float
    proposed_benefits: List[str] = []
    message: Optional[str] = None
    response_note: Optional[str] = None
    status: ProposalStatus
    event: Optional[EventSummary] = None
    sponsor: Optional[UserSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProposalAcceptResponse(ProposalResponse):
    collaboration: Optional[CollaborationRef] = None
