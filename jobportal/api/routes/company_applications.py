"""
Company view of the applications received for its jobs.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_current_caller, get_db
from jobportal.schemas.application import ApplicationResponse
from jobportal.services.application_service import list_company_applications

router = APIRouter(prefix="/company", tags=["Company"])


@router.get("/applications", response_model=List[ApplicationResponse])
def company_applications(
    status: Optional[str] = Query(None, description="Filter by status, or 'all'"),
    job_id: Optional[int] = Query(None, alias="jobId", description="Only this job's applications"),
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    applications = list_company_applications(db, caller, status=status, job_id=job_id)
    return [ApplicationResponse.model_validate(a) for a in applications]
