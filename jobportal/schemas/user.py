"""
Pydantic schemas for admin user management and profiles.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

from jobportal.schemas.auth import UserResponse
from jobportal.schemas.base import CamelModel


class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    email: Optional[EmailStr] = None
    company_name: Optional[str] = None
    is_active: Optional[bool] = None
    role: Optional[str] = None


class UserMutationResponse(BaseModel):
    message: str
    user: UserResponse


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    resume: Optional[str] = Field(None, description="Stored path of the resume file")
    skills: Optional[List[str]] = None


class ProfileResponse(CamelModel):
    id: int
    user_id: int
    name: str
    email: str
    resume: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    updated_at: Optional[datetime] = None


class ProfileEnvelope(BaseModel):
    exists: bool
    profile: Optional[ProfileResponse] = None


class ProfileMutationResponse(BaseModel):
    message: str
    profile: ProfileResponse
