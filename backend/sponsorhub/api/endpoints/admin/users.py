"""
Admin User Management endpoints.
"""
from fastapi import APIRouter, Depends, Query, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, and_
from typing import Optional

from sponsorhub.api.endpoints.admin.audit import log_admin_action
from sponsorhub.core.database import get_db
from sponsorhub.core.exceptions import ResourceNotFoundError
from sponsorhub.models.user import User, UserRole
from sponsorhub.modules.auth.dependencies import get_current_admin
from sponsorhub.schemas.admin import AdminUserStatusUpdate
from sponsorhub.schemas.auth import UserResponse
from sponsorhub.schemas.common import APIResponse, PaginatedResponse
from sponsorhub.utils.ids import ensure_valid_id
from sponsorhub.utils.pagination import paginate, MAX_PAGE_SIZE

router = APIRouter()


async def _get_user_or_404(db: AsyncSession, user_id: str) -> User:
    user_id = ensure_valid_id(user_id, "user")
    user = (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
    if not user:
        raise ResourceNotFoundError("User", user_id)
    return user


@router.get("", response_model=PaginatedResponse[UserResponse])
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    is_verified: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """List all users with filtering and pagination"""
    query = select(User)

    # Apply filters
    conditions = []
    if search:
        search_term = f"%{search}%"
        conditions.append(or_(
            User.name.ilike(search_term),
            User.email.ilike(search_term),
            User.organization_name.ilike(search_term),
        ))

    if role:
        conditions.append(User.role == role)

    if is_active is not None:
        conditions.append(User.is_active.is_(is_active))

    if is_verified is not None:
        conditions.append(User.is_verified.is_(is_verified))

    if conditions:
        query = query.where(and_(*conditions))

    users, pagination = await paginate(db, query.order_by(User.created_at.desc()), page, limit)
    return {
        "success": True,
        "data": [UserResponse.model_validate(u) for u in users],
        "pagination": pagination,
    }


@router.get("/{user_id}", response_model=APIResponse[UserResponse])
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    user = await _get_user_or_404(db, user_id)
    return {"success": True, "data": UserResponse.model_validate(user)}


@router.patch("/{user_id}/status", response_model=APIResponse[UserResponse])
async def update_user_status(
    user_id: str,
    status_update: AdminUserStatusUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Activate or deactivate a user"""
    user = await _get_user_or_404(db, user_id)

    if str(user.id) == str(current_admin.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot modify your own status"
        )

    old_value = user.is_active
    user.is_active = status_update.is_active
    await db.commit()

    await log_admin_action(
        db=db,
        admin_id=str(current_admin.id),
        action="user_activated" if user.is_active else "user_deactivated",
        target_type="user",
        target_id=str(user.id),
        details={"is_active": {"old": old_value, "new": user.is_active}},
        request=request
    )

    verb = "activated" if user.is_active else "deactivated"
    return {
        "success": True,
        "message": f"User {verb} successfully",
        "data": UserResponse.model_validate(user),
    }


@router.delete("/{user_id}", response_model=APIResponse[UserResponse])
async def delete_user(
    user_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Soft delete a user (deactivates the account, keeps its history)"""
    user = await _get_user_or_404(db, user_id)

    if str(user.id) == str(current_admin.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot delete your own account"
        )

    if user.role == UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot delete another admin account"
        )

    user.is_active = False
    await db.commit()

    await log_admin_action(
        db=db,
        admin_id=str(current_admin.id),
        action="user_deleted",
        target_type="user",
        target_id=str(user.id),
        details={"email": user.email},
        request=request
    )

    return {
        "success": True,
        "message": "User deleted successfully",
        "data": UserResponse.model_validate(user),
    }
