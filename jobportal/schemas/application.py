"""
Pydantic schemas for application endpoints.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from jobportal.schemas.base import CamelModel
from jobportal.schemas.job import JobSummary


class ApplicationCreate(CamelModel):
    job_id: Optional[int] = Field(None, description="Job being applied to")
    cv: Optional[str] = Field(None, description="Stored path of a CV for this application")
    cover_letter: Optional[str] = None


class ApplicationUpdate(CamelModel):
    """
    Partial update. Every field is optional; which ones actually apply is
    decided by the caller's role, not by this schema.
    """
    status: Optional[str] = None
    notes: Optional[str] = None
    notification_read: Optional[bool] = None
    name: Optional[str] = None
    email: Optional[str] = None
    resume: Optional[str] = None
    cv: Optional[str] = None
    cover_letter: Optional[str] = None


class StatusHistoryEntry(CamelModel):
    status: str
    date: datetime
    notes: Optional[str] = None


class ApplicationResponse(CamelModel):
    id: int
    job_id: int
    user_id: int
    name: str
    email: str
    resume: Optional[str] = None
    cv: Optional[str] = None
    cover_letter: Optional[str] = None
    status: str
    notes: Optional[str] = None
    notification_read: bool
    status_history: List[StatusHistoryEntry] = Field(default_factory=list)
    job: Optional[JobSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationMutationResponse(BaseModel):
    message: str
    application: ApplicationResponse
