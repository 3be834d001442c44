"""
Sponsorship request endpoints - lightweight connection requests that either
side can open before a formal proposal exists.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from sponsorhub.core.database import get_db
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import (
    get_current_organizer,
    get_current_sponsor,
    get_current_user,
)
from sponsorhub.schemas.common import APIResponse
from sponsorhub.schemas.sponsorship import (
    OrganizerContact,
    SponsorDirectoryEntry,
    SponsorInviteCreate,
    SponsorRequestCreate,
    SponsorshipRequestResponse,
)
from sponsorhub.services.sponsorship_service import SponsorshipService

router = APIRouter()


def _requests_data(requests) -> List[SponsorshipRequestResponse]:
    return [SponsorshipRequestResponse.model_validate(r) for r in requests]


@router.get("/event/{event_id}/organizers", response_model=APIResponse[List[OrganizerContact]])
async def get_event_organizers(
    event_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    organizers = await SponsorshipService(db).event_organizers(event_id)
    return {"success": True, "data": [OrganizerContact.model_validate(o) for o in organizers]}


@router.post("/request", response_model=APIResponse[SponsorshipRequestResponse],
             status_code=status.HTTP_201_CREATED)
async def request_sponsorship(
    request_data: SponsorRequestCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_sponsor)
):
    request = await SponsorshipService(db).request_sponsorship(current_user, request_data)
    return {
        "success": True,
        "message": "Sponsorship request sent",
        "data": SponsorshipRequestResponse.model_validate(request),
    }


@router.post("/request/invite", response_model=APIResponse[SponsorshipRequestResponse],
             status_code=status.HTTP_201_CREATED)
async def invite_sponsor(
    invite_data: SponsorInviteCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    request = await SponsorshipService(db).invite_sponsor(current_user, invite_data)
    return {
        "success": True,
        "message": "Invitation sent to sponsor",
        "data": SponsorshipRequestResponse.model_validate(request),
    }


@router.get("/organizer/requests", response_model=APIResponse[List[SponsorshipRequestResponse]])
async def list_organizer_requests(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    requests = await SponsorshipService(db).list_for_organizer(current_user)
    return {"success": True, "data": _requests_data(requests)}


@router.get("/sponsor/requests", response_model=APIResponse[List[SponsorshipRequestResponse]])
async def list_sponsor_requests(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_sponsor)
):
    requests = await SponsorshipService(db).list_for_sponsor(current_user)
    return {"success": True, "data": _requests_data(requests)}


@router.get("/sponsors", response_model=APIResponse[List[SponsorDirectoryEntry]])
async def list_sponsors(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    """Directory of active sponsors an organizer can invite"""
    sponsors = await SponsorshipService(db).list_active_sponsors()
    return {"success": True, "data": [SponsorDirectoryEntry.model_validate(s) for s in sponsors]}


@router.patch("/request/{request_id}/accept", response_model=APIResponse[SponsorshipRequestResponse])
async def accept_request(
    request_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    request = await SponsorshipService(db).respond(request_id, current_user, accept=True)
    return {
        "success": True,
        "message": "Request accepted",
        "data": SponsorshipRequestResponse.model_validate(request),
    }


@router.patch("/request/{request_id}/reject", response_model=APIResponse[SponsorshipRequestResponse])
async def reject_request(
    request_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    request = await SponsorshipService(db).respond(request_id, current_user, accept=False)
    return {
        "success": True,
        "message": "Request rejected",
        "data": SponsorshipRequestResponse.model_validate(request),
    }
