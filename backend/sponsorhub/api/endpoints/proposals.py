from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from sponsorhub.core.database import get_db
from sponsorhub.models.proposal import ProposalStatus
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import (
    get_current_organizer,
    get_current_sponsor,
    get_current_user,
)
from sponsorhub.schemas.common import APIResponse
from sponsorhub.schemas.proposal import (
    CollaborationRef,
    ProposalAcceptResponse,
    ProposalCreate,
    ProposalDecision,
    ProposalResponse,
)
from sponsorhub.services.proposal_service import ProposalService

router = APIRouter()


@router.post("", response_model=APIResponse[ProposalResponse], status_code=status.HTTP_201_CREATED)
async def create_proposal(
    proposal_data: ProposalCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_sponsor)
):
    """Submit a sponsorship proposal for a published, approved event"""
    proposal = await ProposalService(db).create_proposal(current_user, proposal_data)
    return {
        "success": True,
        "message": "Proposal submitted successfully",
        "data": ProposalResponse.model_validate(proposal),
    }


@router.get("", response_model=APIResponse[List[ProposalResponse]])
async def list_event_proposals(
    event_id: str = Query(..., description="Event to list proposals for"),
    status: Optional[ProposalStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    proposals = await ProposalService(db).list_for_event(event_id, current_user, status)
    return {"success": True, "data": [ProposalResponse.model_validate(p) for p in proposals]}


@router.get("/my-proposals", response_model=APIResponse[List[ProposalResponse]])
async def list_my_proposals(
    status: Optional[ProposalStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_sponsor)
):
    proposals = await ProposalService(db).list_for_sponsor(current_user, status)
    return {"success": True, "data": [ProposalResponse.model_validate(p) for p in proposals]}


@router.get("/{proposal_id}", response_model=APIResponse[ProposalResponse])
async def get_proposal(
    proposal_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    proposal = await ProposalService(db).get_visible_proposal(proposal_id, current_user)
    return {"success": True, "data": ProposalResponse.model_validate(proposal)}


@router.patch("/{proposal_id}/accept", response_model=APIResponse[ProposalAcceptResponse])
async def accept_proposal(
    proposal_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    """Accept a proposal - opens a pending collaboration with the sponsor"""
    proposal, collaboration = await ProposalService(db).accept(proposal_id, current_user)
    data = ProposalAcceptResponse.model_validate(proposal).model_copy(
        update={"collaboration": CollaborationRef.model_validate(collaboration)}
    )
    return {"success": True, "message": "Proposal accepted. Collaboration created.", "data": data}


@router.patch("/{proposal_id}/reject", response_model=APIResponse[ProposalResponse])
async def reject_proposal(
    proposal_id: str,
    decision: Optional[ProposalDecision] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    note = decision.response_note if decision else None
    proposal = await ProposalService(db).reject(proposal_id, current_user, note)
    return {
        "success": True,
        "message": "Proposal rejected",
        "data": ProposalResponse.model_validate(proposal),
    }


@router.patch("/{proposal_id}/negotiate", response_model=APIResponse[ProposalResponse])
async def negotiate_proposal(
    proposal_id: str,
    decision: Optional[ProposalDecision] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    note = decision.response_note if decision else None
    proposal = await ProposalService(db).negotiate(proposal_id, current_user, note)
    return {
        "success": True,
        "message": "Proposal moved to negotiation",
        "data": ProposalResponse.model_validate(proposal),
    }
