"""
Company profile endpoints and admin moderation.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_current_caller, get_db
from jobportal.core.errors import NotFoundError
from jobportal.schemas.company import (
    CompanyCreate,
    CompanyResponse,
    CompanyStatusResponse,
    CompanyStatusUpdate,
)
from jobportal.services.company_service import (
    create_company_profile,
    get_caller_company,
    get_company,
    list_companies,
    moderate_company,
)
from jobportal.services.email_service import EmailSender, get_email_sender

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("", response_model=List[CompanyResponse])
def get_companies(
    status: Optional[str] = Query(None, description="pending, approved, rejected or all"),
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """Admin-only list of company profiles."""
    return [CompanyResponse.model_validate(c) for c in list_companies(db, caller, status=status)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CompanyResponse)
def create_company(
    payload: CompanyCreate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    company = create_company_profile(db, caller, payload.model_dump())
    return CompanyResponse.model_validate(company)


@router.get("/me", response_model=CompanyResponse)
def my_company(caller: Caller = Depends(get_current_caller), db: Session = Depends(get_db)):
    company = get_caller_company(db, caller)
    if company is None:
        raise NotFoundError("Company profile not found")
    return CompanyResponse.model_validate(company)


@router.get("/{company_id}", response_model=CompanyResponse)
def read_company(
    company_id: int,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    return CompanyResponse.model_validate(get_company(db, caller, company_id))


@router.patch("/{company_id}", response_model=CompanyStatusResponse)
def update_company_status(
    company_id: int,
    payload: CompanyStatusUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    """
    Approve, reject or reset a company profile to pending.

    The owner is emailed on approval and rejection; ``rejectionReason`` is
    included in the rejection email only.
    """
    company = moderate_company(
        db,
        caller,
        company_id,
        payload.status,
        mailer,
        rejection_reason=payload.rejection_reason,
    )
    return CompanyStatusResponse(
        message=f"Company {company.status} successfully" if company.status != "pending" else "Company status updated",
        company=CompanyResponse.model_validate(company),
    )
