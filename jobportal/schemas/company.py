"""
Pydantic schemas for company endpoints.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from jobportal.schemas.base import CamelModel


class CompanyCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    founded_year: Optional[int] = Field(None, ge=1800, le=2100)


class CompanyResponse(CamelModel):
    id: int
    user_id: int
    name: str
    email: str
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    founded_year: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CompanyStatusUpdate(CamelModel):
    """Admin moderation body. The reason is only used for the outgoing email."""
    status: str = Field(..., description="pending, approved or rejected")
    rejection_reason: Optional[str] = Field(None, max_length=2000)


class CompanyStatusResponse(BaseModel):
    message: str
    company: CompanyResponse
