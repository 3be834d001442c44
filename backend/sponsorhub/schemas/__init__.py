from sponsorhub.schemas.common import APIResponse, PaginatedResponse, PaginationMeta, MessageResponse
from sponsorhub.schemas.auth import (
    UserRegister, UserLogin, RefreshTokenRequest, UserSummary, UserResponse, AuthData, AccessTokenData,
)

__all__ = [
    "APIResponse",
    "PaginatedResponse",
    "PaginationMeta",
    "MessageResponse",
    "UserRegister",
    "UserLogin",
    "RefreshTokenRequest",
    "UserSummary",
    "UserResponse",
    "AuthData",
    "AccessTokenData",
]
