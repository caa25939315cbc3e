"""
Pydantic schemas for job endpoints.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from jobportal.db.models.job import JOB_TYPES
from jobportal.schemas.base import CamelModel

JOB_TYPE_PATTERN = f"^({'|'.join(JOB_TYPES)})$"


class JobBase(CamelModel):
    """Base job schema with common fields."""
    title: str = Field(..., description="Job title", min_length=1, max_length=255)
    job_type: str = Field(
        default="Full-time",
        description="Employment type",
        pattern=JOB_TYPE_PATTERN
    )
    location: Optional[str] = Field(None, description="Job location")
    salary: Optional[str] = Field(None, description="Salary range, free text")
    description: Optional[str] = Field(None, description="Job description")
    responsibilities: List[str] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    apply_method: Optional[Dict[str, Any]] = Field(None, description="How candidates apply")
    application_deadline: Optional[datetime] = Field(None, description="Last day to apply")


class JobCreate(JobBase):
    """Schema for posting a new job."""
    pass


class JobUpdate(CamelModel):
    """Schema for updating an existing job. Only provided fields change."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    job_type: Optional[str] = Field(None, pattern=JOB_TYPE_PATTERN)
    location: Optional[str] = None
    salary: Optional[str] = None
    description: Optional[str] = None
    responsibilities: Optional[List[str]] = None
    requirements: Optional[List[str]] = None
    apply_method: Optional[Dict[str, Any]] = None
    application_deadline: Optional[datetime] = None
    status: Optional[str] = None


class JobStatusUpdate(CamelModel):
    status: str = Field(..., description="pending, active or closed")


class JobResponse(JobBase):
    """Schema for job response."""
    id: int
    company_id: int
    company_name: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobSummary(CamelModel):
    """Job fields shown alongside an application."""
    id: int
    title: str
    company_id: int
    company_name: str
    location: Optional[str] = None
    job_type: Optional[str] = None
    status: str


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class JobListResponse(BaseModel):
    jobs: List[JobResponse]
    pagination: Pagination


class JobMutationResponse(BaseModel):
    message: str
    job: JobResponse
