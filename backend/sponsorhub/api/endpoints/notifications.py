from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sponsorhub.core.database import get_db
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import get_current_user
from sponsorhub.schemas.common import APIResponse, MessageResponse
from sponsorhub.schemas.message import UnreadCount
from sponsorhub.schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
    ReadAllResult,
)
from sponsorhub.services.notification_service import NotificationService
from sponsorhub.utils.pagination import MAX_PAGE_SIZE

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    skip: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    service = NotificationService(db)
    notifications, total = await service.list_for_user(current_user.id, limit=limit, skip=skip)
    unread = await service.unread_count(current_user.id)
    return {
        "success": True,
        "data": [NotificationResponse.model_validate(n) for n in notifications],
        "pagination": {"total": total, "limit": limit, "skip": skip},
        "unread_count": unread,
    }


@router.get("/unread-count", response_model=APIResponse[UnreadCount])
async def get_unread_count(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    count = await NotificationService(db).unread_count(current_user.id)
    return {"success": True, "data": {"unread_count": count}}


@router.put("/read-all", response_model=APIResponse[ReadAllResult])
async def mark_all_read(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    modified = await NotificationService(db).mark_all_read(current_user.id)
    return {
        "success": True,
        "message": "All notifications marked as read",
        "data": {"modified_count": modified},
    }


@router.put("/{notification_id}/read", response_model=APIResponse[NotificationResponse])
async def mark_notification_read(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    notification = await NotificationService(db).mark_read(notification_id, current_user.id)
    return {
        "success": True,
        "message": "Notification marked as read",
        "data": NotificationResponse.model_validate(notification),
    }


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await NotificationService(db).delete(notification_id, current_user.id)
    return {"success": True, "message": "Notification deleted"}
