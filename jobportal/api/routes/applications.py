"""
Application endpoints.

Submission is for job seekers. Reads and updates go through the status
workflow, which decides per role what a caller may see and change.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_current_caller, get_db
from jobportal.schemas.application import (
    ApplicationCreate,
    ApplicationMutationResponse,
    ApplicationResponse,
    ApplicationUpdate,
)
from jobportal.services.application_service import (
    list_company_applications,
    list_my_applications,
    submit_application,
)
from jobportal.services.application_workflow import get_application, update_application
from jobportal.services.email_service import EmailSender, get_email_sender

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=List[ApplicationResponse])
def list_applications(
    status: Optional[str] = Query(None, description="Filter by status, or 'all'"),
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """
    Job seekers get their own applications; companies and admins get the
    applications they are allowed to review.
    """
    if caller.role == "jobseeker":
        applications = list_my_applications(db, caller, status=status)
    else:
        applications = list_company_applications(db, caller, status=status)
    return [ApplicationResponse.model_validate(a) for a in applications]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationMutationResponse)
def create_application(
    payload: ApplicationCreate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    application = submit_application(
        db,
        caller,
        payload.job_id,
        mailer,
        cv=payload.cv,
        cover_letter=payload.cover_letter,
    )
    return ApplicationMutationResponse(
        message="Application submitted successfully",
        application=ApplicationResponse.model_validate(application),
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
def read_application(
    application_id: int,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    application = get_application(db, application_id, caller)
    return ApplicationResponse.model_validate(application)


@router.patch("/{application_id}", response_model=ApplicationMutationResponse)
def patch_application(
    application_id: int,
    payload: ApplicationUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    """
    Partially update an application.

    Fields the caller's role may not write are ignored. An explicit null
    clears an optional field. A status change records history, notifies
    the applicant and attempts an email.
    """
    changes = payload.model_dump(exclude_unset=True)
    result = update_application(db, application_id, changes, caller, mailer)
    return ApplicationMutationResponse(
        message="Application updated successfully",
        application=ApplicationResponse.model_validate(result.application),
    )
