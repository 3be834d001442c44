from pydantic import BaseModel, Field, field_validator
from typing import Optional


class SponsorProfileUpdate(BaseModel):
    """Fields a sponsor may edit on their own profile"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    organization_name: Optional[str] = Field(None, max_length=200)
    website: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = Field(None, max_length=1000)
    logo: Optional[str] = Field(None, max_length=500)

    @field_validator('name')
    @classmethod
    def require_name(cls, v: Optional[str]) -> str:
        # May be omitted, but never cleared
        v = v.strip() if v is not None else ""
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator('phone', 'organization_name', 'website', 'bio', 'logo')
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class OrganizerProfileUpdate(SponsorProfileUpdate):
    designation: Optional[str] = Field(None, max_length=100)

    @field_validator('designation')
    @classmethod
    def strip_designation(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v
