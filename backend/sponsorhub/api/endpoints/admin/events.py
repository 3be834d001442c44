"""
Admin event moderation endpoints.
"""
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from sponsorhub.api.endpoints.admin.audit import log_admin_action
from sponsorhub.core.database import get_db
from sponsorhub.models.event import EventMode, EventStatus
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import get_current_admin
from sponsorhub.schemas.admin import AdminEventReject, RejectedEventResponse
from sponsorhub.schemas.common import APIResponse, PaginatedResponse
from sponsorhub.schemas.event import EventResponse
from sponsorhub.services.event_service import EventService
from sponsorhub.utils.pagination import MAX_PAGE_SIZE

router = APIRouter()


@router.get("", response_model=PaginatedResponse[EventResponse])
async def list_events(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    status: Optional[EventStatus] = None,
    is_approved: Optional[bool] = None,
    event_mode: Optional[EventMode] = None,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """List every event regardless of status, with filters"""
    events, pagination = await EventService(db).list_all(
        page, limit, status=status, is_approved=is_approved, event_mode=event_mode, search=search
    )
    return {
        "success": True,
        "data": [EventResponse.model_validate(e) for e in events],
        "pagination": pagination,
    }


@router.patch("/{event_id}/approve", response_model=APIResponse[EventResponse])
async def approve_event(
    event_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    event = await EventService(db).approve_published(event_id)

    await log_admin_action(
        db=db,
        admin_id=str(current_admin.id),
        action="event_approved",
        target_type="event",
        target_id=str(event.id),
        details={"title": event.title},
        request=request
    )

    return {
        "success": True,
        "message": "Event approved successfully",
        "data": EventResponse.model_validate(event),
    }


@router.patch("/{event_id}/reject", response_model=APIResponse[RejectedEventResponse])
async def reject_event(
    event_id: str,
    rejection: AdminEventReject,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Send an event back to draft; the organizer is notified with the reason"""
    event = await EventService(db).reject(event_id, rejection.reason)

    await log_admin_action(
        db=db,
        admin_id=str(current_admin.id),
        action="event_rejected",
        target_type="event",
        target_id=str(event.id),
        details={"title": event.title, "reason": rejection.reason},
        request=request
    )

    data = RejectedEventResponse(
        **EventResponse.model_validate(event).model_dump(),
        rejection_reason=rejection.reason,
    )
    return {"success": True, "message": "Event rejected", "data": data}
