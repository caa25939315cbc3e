"""
Job posting endpoints.

Anyone may browse jobs. Approved companies post and manage their own jobs;
admins may edit or remove any job.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_current_caller, get_db, get_optional_caller
from jobportal.schemas.base import MessageResponse
from jobportal.schemas.job import (
    JobCreate,
    JobListResponse,
    JobMutationResponse,
    JobResponse,
    JobUpdate,
    Pagination,
)
from jobportal.services import job_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=JobListResponse)
def list_jobs(
    company_id: Optional[int] = Query(None, alias="companyId", description="Filter by company"),
    job_type: Optional[str] = Query(None, alias="jobType", description="Filter by employment type"),
    status: str = Query("active", description="Filter by status, or 'all'"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    caller: Optional[Caller] = Depends(get_optional_caller),
    db: Session = Depends(get_db),
):
    """
    List jobs, newest first.

    Signed-in company users only see their own company's postings.
    """
    jobs, pagination = job_service.list_jobs(
        db,
        caller,
        company_id=company_id,
        job_type=job_type,
        status=status,
        page=page,
        limit=limit,
    )
    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in jobs],
        pagination=Pagination(**pagination),
    )


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    return JobResponse.model_validate(job_service.get_job(db, job_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobMutationResponse)
def create_job(
    job_data: JobCreate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """Post a job for the caller's approved company. New jobs are active immediately."""
    job = job_service.create_job(db, caller, job_data.model_dump())
    return JobMutationResponse(message="Job created successfully", job=JobResponse.model_validate(job))


@router.patch("/{job_id}", response_model=JobMutationResponse)
def update_job(
    job_id: int,
    job_data: JobUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """Update a job. Only provided fields are changed."""
    changes = job_data.model_dump(exclude_unset=True)
    job = job_service.update_job(db, caller, job_id, changes)
    return JobMutationResponse(message="Job updated successfully", job=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: int,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """Delete a job together with its applications."""
    job_service.delete_job(db, caller, job_id)
    return MessageResponse(message="Job deleted successfully")
