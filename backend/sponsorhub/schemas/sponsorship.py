from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from sponsorhub.models.sponsorship_request import RequestStatus, RequestInitiator
from sponsorhub.schemas.auth import UserSummary
from sponsorhub.schemas.event import EventSummary


class SponsorRequestCreate(BaseModel):
    """Sponsor reaching out to an event organizer"""
    event_id: str
    organizer_id: str
    message: Optional[str] = Field(None, max_length=2000)


class SponsorInviteCreate(BaseModel):
    """Organizer inviting a sponsor to an event"""
    event_id: str
    sponsor_id: str
    message: Optional[str] = Field(None, max_length=2000)


class SponsorshipRequestResponse(BaseModel):
    id: str
    sponsor_id: str
    organizer_id: str
    event_id: str
    status: RequestStatus
    initiated_by: RequestInitiator
    message: Optional[str] = None
    sponsor: Optional[UserSummary] = None
    organizer: Optional[UserSummary] = None
    event: Optional[EventSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrganizerContact(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    organization_name: Optional[str] = None
    designation: Optional[str] = None

    class Config:
        from_attributes = True


class SponsorDirectoryEntry(BaseModel):
    id: str
    name: str
    email: str
    organization_name: Optional[str] = None
    bio: Optional[str] = None
    logo: Optional[str] = None

    class Config:
        from_attributes = True
