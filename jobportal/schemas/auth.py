"""
Pydantic schemas for authentication endpoints.
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from jobportal.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """Request schema for account registration. Admin accounts cannot self-register."""
    name: str = Field(..., min_length=2, max_length=200, description="Display name")
    email: EmailStr = Field(..., description="Login email address")
    password: str = Field(..., description="Password (min 8 characters)")
    role: Literal["jobseeker", "company"] = Field(default="jobseeker")
    company_name: Optional[str] = Field(default=None, max_length=200)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        password_bytes = v.encode("utf-8")
        if len(password_bytes) > 72:
            raise ValueError("Password too long (bcrypt limit 72 bytes)")
        if len(password_bytes) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v

    @model_validator(mode="after")
    def require_company_name(self):
        if self.role == "company" and not (self.company_name or "").strip():
            raise ValueError("Company name is required for company accounts")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "password": "SecurePass123",
                "role": "jobseeker"
            }
        }


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: str
    company_name: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    password: str


class TokenCheckResponse(BaseModel):
    valid: bool
