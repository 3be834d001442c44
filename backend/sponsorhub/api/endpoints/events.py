from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from sponsorhub.core.database import get_db
from sponsorhub.models.event import EventMode
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import (
    get_current_admin,
    get_current_organizer,
    get_optional_user,
)
from sponsorhub.schemas.common import APIResponse, MessageResponse
from sponsorhub.schemas.event import (
    EventApproval,
    EventCreate,
    EventResponse,
    EventUpdate,
    SponsorshipRequirementsUpdate,
)
from sponsorhub.services.event_service import EventService

router = APIRouter()


def _event_data(event) -> EventResponse:
    return EventResponse.model_validate(event)


@router.get("", response_model=APIResponse[List[EventResponse]])
async def list_events(
    category: Optional[str] = Query(None),
    event_mode: Optional[EventMode] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db)
):
    """Browse published, approved events"""
    events = await EventService(db).list_public(category, event_mode, search)
    return {"success": True, "data": [_event_data(e) for e in events]}


@router.get("/my", response_model=APIResponse[List[EventResponse]])
async def list_my_events(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    events = await EventService(db).list_for_organizer(current_user)
    return {"success": True, "data": [_event_data(e) for e in events]}


@router.get("/{event_id}", response_model=APIResponse[EventResponse])
async def get_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user)
):
    event = await EventService(db).get_visible_event(event_id, current_user)
    return {"success": True, "data": _event_data(event)}


@router.post("", response_model=APIResponse[EventResponse], status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    """Create a new event (always starts as an unapproved draft)"""
    event = await EventService(db).create_event(current_user, event_data)
    return {"success": True, "message": "Event created successfully", "data": _event_data(event)}


@router.put("/{event_id}", response_model=APIResponse[EventResponse])
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    event = await EventService(db).update_event(event_id, current_user, event_data)
    return {"success": True, "message": "Event updated successfully", "data": _event_data(event)}


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    await EventService(db).delete_event(event_id, current_user)
    return {"success": True, "message": "Event deleted successfully"}


@router.patch("/{event_id}/publish", response_model=APIResponse[EventResponse])
async def publish_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    event = await EventService(db).publish_event(event_id, current_user)
    return {"success": True, "message": "Event published successfully", "data": _event_data(event)}


@router.patch("/{event_id}/close", response_model=APIResponse[EventResponse])
async def close_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    event = await EventService(db).close_event(event_id, current_user)
    return {"success": True, "message": "Event closed successfully", "data": _event_data(event)}


@router.post("/{event_id}/approve", response_model=APIResponse[EventResponse])
async def set_event_approval(
    event_id: str,
    approval: EventApproval,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    event = await EventService(db).set_approval(event_id, approval.is_approved)
    verb = "approved" if approval.is_approved else "unapproved"
    return {"success": True, "message": f"Event {verb} successfully", "data": _event_data(event)}


@router.put("/{event_id}/sponsorship-requirements", response_model=APIResponse[EventResponse])
async def update_sponsorship_requirements(
    event_id: str,
    requirements: SponsorshipRequirementsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    event = await EventService(db).update_requirements(event_id, current_user, requirements)
    return {
        "success": True,
        "message": "Sponsorship requirements updated successfully",
        "data": _event_data(event),
    }
