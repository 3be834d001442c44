from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from sponsorhub.models.user import UserRole


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.ORGANIZER
    phone: Optional[str] = Field(None, max_length=20)
    organization_name: Optional[str] = Field(None, max_length=200)
    designation: Optional[str] = Field(None, max_length=100)
    website: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = Field(None, max_length=1000)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator('email')
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class UserSummary(BaseModel):
    """Compact user shape embedded in other resources"""
    id: str
    name: str
    email: str
    role: UserRole
    organization_name: Optional[str] = None
    logo: Optional[str] = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    organization_name: Optional[str] = None
    designation: Optional[str] = None
    website: Optional[str] = None
    bio: Optional[str] = None
    logo: Optional[str] = None
    is_active: bool
    is_verified: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuthData(BaseModel):
    user: UserResponse
    token: str
    refresh_token: str


class AccessTokenData(BaseModel):
    token: str
