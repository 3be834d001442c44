from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sponsorhub.core.database import get_db
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import get_current_user
from sponsorhub.schemas.common import APIResponse, PaginatedResponse
from sponsorhub.schemas.message import MessageCreate, MessageResponse, UnreadCount
from sponsorhub.services.message_service import MessageService
from sponsorhub.utils.pagination import MAX_PAGE_SIZE

router = APIRouter()


@router.get("/{collaboration_id}/unread-count", response_model=APIResponse[UnreadCount])
async def get_unread_count(
    collaboration_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    count = await MessageService(db).unread_count(collaboration_id, current_user)
    return {"success": True, "data": {"unread_count": count}}


@router.get("/{collaboration_id}", response_model=PaginatedResponse[MessageResponse])
async def list_messages(
    collaboration_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    messages, pagination = await MessageService(db).list_messages(collaboration_id, current_user, page, limit)
    return {
        "success": True,
        "data": [MessageResponse.model_validate(m) for m in messages],
        "pagination": pagination,
    }


@router.post("/{collaboration_id}", response_model=APIResponse[MessageResponse],
             status_code=status.HTTP_201_CREATED)
async def send_message(
    collaboration_id: str,
    message_data: MessageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    message = await MessageService(db).send(collaboration_id, current_user, message_data)
    return {
        "success": True,
        "message": "Message sent",
        "data": MessageResponse.model_validate(message),
    }


@router.patch("/{message_id}/read", response_model=APIResponse[MessageResponse])
async def mark_message_read(
    message_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    message = await MessageService(db).mark_read(message_id, current_user)
    return {"success": True, "message": "Message marked as read", "data": MessageResponse.model_validate(message)}
