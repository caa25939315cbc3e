"""
Admin endpoints: user management and job moderation.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_current_caller, get_db
from jobportal.schemas.auth import UserResponse
from jobportal.schemas.base import MessageResponse
from jobportal.schemas.job import JobMutationResponse, JobResponse, JobStatusUpdate
from jobportal.schemas.user import UserMutationResponse, UserUpdate
from jobportal.services import job_service, user_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/users", response_model=List[UserResponse])
def list_users(
    role: Optional[str] = Query(None, description="Filter by role"),
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    return [UserResponse.model_validate(u) for u in user_service.list_users(db, caller, role=role)]


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: int, caller: Caller = Depends(get_current_caller), db: Session = Depends(get_db)):
    return UserResponse.model_validate(user_service.get_user(db, caller, user_id))


@router.patch("/users/{user_id}", response_model=UserMutationResponse)
def update_user(
    user_id: int,
    payload: UserUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """Update a non-admin account. Admin accounts cannot be changed here."""
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        changes["email"] = changes["email"].strip().lower()
    user = user_service.update_user(db, caller, user_id, changes)
    return UserMutationResponse(message="User updated successfully", user=UserResponse.model_validate(user))


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, caller: Caller = Depends(get_current_caller), db: Session = Depends(get_db)):
    user_service.delete_user(db, caller, user_id)
    return MessageResponse(message="User deleted successfully")


@router.patch("/jobs/{job_id}/status", response_model=JobMutationResponse)
def set_job_status(
    job_id: int,
    payload: JobStatusUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    job = job_service.set_job_status(db, caller, job_id, payload.status)
    return JobMutationResponse(message="Job status updated successfully", job=JobResponse.model_validate(job))
