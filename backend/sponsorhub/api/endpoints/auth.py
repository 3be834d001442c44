from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime

from sponsorhub.core.config import settings
from sponsorhub.core.database import get_db
from sponsorhub.core.logging_config import logger
from sponsorhub.core.rate_limiter import limiter, LOGIN_LIMIT, REGISTER_LIMIT
from sponsorhub.core.security import (
    create_access_token,
    create_token_pair,
    decode_token,
    get_password_hash,
    verify_password,
)
from sponsorhub.core.types import is_valid_uuid
from sponsorhub.models.user import User, UserRole
from sponsorhub.modules.auth.dependencies import get_current_user
from sponsorhub.schemas.auth import (
    AccessTokenData,
    AuthData,
    RefreshTokenRequest,
    UserLogin,
    UserRegister,
    UserResponse,
)
from sponsorhub.schemas.common import APIResponse, MessageResponse

router = APIRouter()


def _auth_payload(user: User) -> dict:
    return {"user": UserResponse.model_validate(user), **create_token_pair(user)}


@router.post("/register", response_model=APIResponse[AuthData], status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_LIMIT)
async def register(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register a new organizer or sponsor (rate limited: 3/min)"""
    client_ip = request.client.host if request.client else "unknown"

    if user_data.role == UserRole.ADMIN and not settings.ALLOW_ADMIN_SIGNUP:
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason="Admin self-registration disabled",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin accounts cannot be self-registered"
        )

    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none():
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason="Email already registered",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists"
        )

    user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        role=user_data.role,
        phone=user_data.phone,
        organization_name=user_data.organization_name,
        designation=user_data.designation,
        website=user_data.website,
        bio=user_data.bio,
        is_active=True,
        is_verified=False,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.log_auth_event(
        event="register",
        success=True,
        user_email=user.email,
        user_id=str(user.id),
        role=user.role.value,
        client_ip=client_ip
    )

    return {
        "success": True,
        "message": "User registered successfully",
        "data": _auth_payload(user),
    }


@router.post("/login", response_model=APIResponse[AuthData])
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login with email and password (rate limited: 5/min)"""
    client_ip = request.client.host if request.client else "unknown"

    result = await db.execute(select(User).where(User.email == credentials.email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if not user.is_active:
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Account deactivated",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated. Please contact support."
        )

    user.last_login = datetime.utcnow()
    await db.commit()

    logger.log_auth_event(event="login", success=True, user_email=user.email, client_ip=client_ip)

    return {
        "success": True,
        "message": "Login successful",
        "data": _auth_payload(user),
    }


@router.post("/refresh", response_model=APIResponse[AccessTokenData])
async def refresh_token(
    body: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db)
):
    """Exchange a refresh token for a new access token"""
    payload = decode_token(body.refresh_token)

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    user_id = payload.get("sub")
    if not user_id or not is_valid_uuid(user_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload"
        )

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive"
        )

    token = create_access_token({"sub": str(user.id), "email": user.email, "role": user.role.value})
    return {"success": True, "data": {"token": token}}


@router.post("/logout", response_model=MessageResponse)
async def logout():
    """Stateless JWT logout - the client discards its tokens"""
    return {"success": True, "message": "Logout successful"}


@router.get("/profile", response_model=APIResponse[UserResponse])
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile"""
    return {"success": True, "data": UserResponse.model_validate(current_user)}
