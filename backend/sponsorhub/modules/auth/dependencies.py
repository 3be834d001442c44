from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Callable, Optional
import uuid

from sponsorhub.core.database import get_db
from sponsorhub.core.logging_config import set_user_id
from sponsorhub.core.security import decode_token
from sponsorhub.models.user import User, UserRole

# auto_error=False so a missing header yields 401 (not FastAPI's default 403)
security = HTTPBearer(auto_error=False)


async def _resolve_user(token: str, db: AsyncSession) -> User:
    payload = decode_token(token)

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload"
        )

    try:
        uuid.UUID(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID format"
        )

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    return user


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided. Use Authorization: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await _resolve_user(credentials.credentials, db)

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated. Please contact support."
        )

    request.state.user_id = str(user.id)
    set_user_id(str(user.id))
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Get current user if a valid token is present, otherwise None"""
    if not credentials or not credentials.credentials:
        return None

    try:
        user = await _resolve_user(credentials.credentials, db)
    except HTTPException:
        return None

    return user if user.is_active else None


def require_roles(*roles: UserRole) -> Callable:
    """
    Build a dependency that only lets the given roles through.

    Usage:
        @router.post("/", dependencies=[Depends(require_roles(UserRole.ORGANIZER))])
        async def create_event(...):
            ...
    """
    allowed = ", ".join(role.value for role in roles)

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role(s): {allowed}. Your role: {current_user.role.value}"
            )
        return current_user

    return role_checker


get_current_organizer = require_roles(UserRole.ORGANIZER)
get_current_sponsor = require_roles(UserRole.SPONSOR)
get_current_admin = require_roles(UserRole.ADMIN)
