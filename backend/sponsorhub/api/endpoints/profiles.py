"""
Organizer and sponsor self-service profile endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from sponsorhub.core.database import get_db
from sponsorhub.models.proposal import ProposalStatus
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import get_current_organizer, get_current_sponsor
from sponsorhub.schemas.auth import UserResponse
from sponsorhub.schemas.common import APIResponse
from sponsorhub.schemas.profile import OrganizerProfileUpdate, SponsorProfileUpdate
from sponsorhub.schemas.proposal import ProposalResponse
from sponsorhub.services.proposal_service import ProposalService

organizer_router = APIRouter()
sponsor_router = APIRouter()


async def _apply_profile_update(db: AsyncSession, user: User, changes: dict) -> User:
    for field, value in changes.items():
        setattr(user, field, value)
    await db.commit()
    return user


# ==================== Organizer ====================

@organizer_router.get("/profile", response_model=APIResponse[UserResponse])
async def get_organizer_profile(current_user: User = Depends(get_current_organizer)):
    return {"success": True, "data": UserResponse.model_validate(current_user)}


@organizer_router.put("/profile", response_model=APIResponse[UserResponse])
async def update_organizer_profile(
    profile: OrganizerProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    user = await _apply_profile_update(db, current_user, profile.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "Profile updated successfully",
        "data": UserResponse.model_validate(user),
    }


@organizer_router.get("/proposals", response_model=APIResponse[List[ProposalResponse]])
async def get_received_proposals(
    status: Optional[ProposalStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    """Proposals received across all of the organizer's events"""
    proposals = await ProposalService(db).list_for_organizer(current_user, status)
    return {"success": True, "data": [ProposalResponse.model_validate(p) for p in proposals]}


# ==================== Sponsor ====================

@sponsor_router.get("/profile", response_model=APIResponse[UserResponse])
async def get_sponsor_profile(current_user: User = Depends(get_current_sponsor)):
    return {"success": True, "data": UserResponse.model_validate(current_user)}


@sponsor_router.put("/profile", response_model=APIResponse[UserResponse])
async def update_sponsor_profile(
    profile: SponsorProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_sponsor)
):
    user = await _apply_profile_update(db, current_user, profile.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "Profile updated successfully",
        "data": UserResponse.model_validate(user),
    }


@sponsor_router.get("/proposals", response_model=APIResponse[List[ProposalResponse]])
async def get_sent_proposals(
    status: Optional[ProposalStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_sponsor)
):
    proposals = await ProposalService(db).list_for_sponsor(current_user, status)
    return {"success": True, "data": [ProposalResponse.model_validate(p) for p in proposals]}
