from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from sponsorhub.core.database import get_db
from sponsorhub.models.collaboration import CollaborationStatus
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import get_current_organizer, get_current_user
from sponsorhub.schemas.collaboration import (
    CollaborationResponse,
    CollaborationTerminate,
    CollaborationUpdate,
)
from sponsorhub.schemas.common import APIResponse
from sponsorhub.services.collaboration_service import CollaborationService

router = APIRouter()


@router.get("", response_model=APIResponse[List[CollaborationResponse]])
async def list_collaborations(
    status: Optional[CollaborationStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Participants see their own collaborations, admins see all"""
    collaborations = await CollaborationService(db).list_for_user(current_user, status)
    return {"success": True, "data": [CollaborationResponse.model_validate(c) for c in collaborations]}


@router.get("/{collaboration_id}", response_model=APIResponse[CollaborationResponse])
async def get_collaboration(
    collaboration_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    collaboration = await CollaborationService(db).get_visible(collaboration_id, current_user)
    return {"success": True, "data": CollaborationResponse.model_validate(collaboration)}


@router.put("/{collaboration_id}", response_model=APIResponse[CollaborationResponse])
async def update_collaboration(
    collaboration_id: str,
    update_data: CollaborationUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    collaboration = await CollaborationService(db).update(collaboration_id, current_user, update_data)
    return {
        "success": True,
        "message": "Collaboration updated successfully",
        "data": CollaborationResponse.model_validate(collaboration),
    }


@router.patch("/{collaboration_id}/activate", response_model=APIResponse[CollaborationResponse])
async def activate_collaboration(
    collaboration_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    collaboration = await CollaborationService(db).activate(collaboration_id, current_user)
    return {
        "success": True,
        "message": "Collaboration activated",
        "data": CollaborationResponse.model_validate(collaboration),
    }


@router.patch("/{collaboration_id}/complete", response_model=APIResponse[CollaborationResponse])
async def complete_collaboration(
    collaboration_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    collaboration = await CollaborationService(db).complete(collaboration_id, current_user)
    return {
        "success": True,
        "message": "Collaboration completed",
        "data": CollaborationResponse.model_validate(collaboration),
    }


@router.patch("/{collaboration_id}/terminate", response_model=APIResponse[CollaborationResponse])
async def terminate_collaboration(
    collaboration_id: str,
    body: Optional[CollaborationTerminate] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_organizer)
):
    reason = body.reason if body else None
    collaboration = await CollaborationService(db).terminate(collaboration_id, current_user, reason)
    return {
        "success": True,
        "message": "Collaboration terminated",
        "data": CollaborationResponse.model_validate(collaboration),
    }
