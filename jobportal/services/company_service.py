"""
Company profiles and admin moderation.

Moderation only changes ``Company.status``. The owner is told by email;
a rejection reason travels in that email and is not stored anywhere.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller
from jobportal.core.errors import NotFoundError, ValidationError
from jobportal.core.policies import AccessContext, enforce
from jobportal.db.models.company import Company, COMPANY_STATUSES
from jobportal.db.models.user import User
from jobportal.services.email_service import EmailOutcome, EmailSender
from jobportal.services.email_templates import company_approved_email, company_rejected_email

logger = logging.getLogger(__name__)


def get_caller_company(db: Session, caller: Optional[Caller]) -> Optional[Company]:
    """The company profile owned by ``caller``, whatever its status."""
    if caller is None or caller.role != "company":
        return None
    return db.query(Company).filter(Company.user_id == caller.id).first()


def get_company(db: Session, caller: Caller, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise NotFoundError("Company not found")
    enforce(caller, "company", "read", AccessContext(target=company))
    return company


def list_companies(db: Session, caller: Caller, status: Optional[str] = None) -> List[Company]:
    enforce(caller, "company", "list")
    query = db.query(Company)
    if status and status != "all":
        query = query.filter(Company.status == status)
    return query.order_by(Company.created_at.desc(), Company.id.desc()).all()


def create_company_profile(db: Session, caller: Caller, data: dict) -> Company:
    """Create the caller's company profile. New profiles wait for admin approval."""
    enforce(caller, "company", "create")

    if get_caller_company(db, caller) is not None:
        raise ValidationError("You already have a company profile")

    company = Company(user_id=caller.id, status="pending", **data)
    db.add(company)
    db.commit()
    db.refresh(company)

    logger.info(f"Company profile created: company_id={company.id}, user_id={caller.id}")
    return company


def _notify_owner(db: Session, company: Company, status: str, rejection_reason: Optional[str], mailer: EmailSender) -> Optional[EmailOutcome]:
    try:
        owner = db.get(User, company.user_id)
    except Exception as e:
        logger.error(f"Error finding owner for company_id={company.id}: {e}")
        return None

    if not owner or not owner.email:
        return None

    if status == "approved":
        message = company_approved_email(owner.email, company.name)
    elif status == "rejected":
        message = company_rejected_email(owner.email, company.name, rejection_reason)
    else:
        return None

    try:
        return mailer.send(message)
    except Exception as e:
        logger.error(f"Error sending moderation email for company_id={company.id}: {e}", exc_info=True)
        return EmailOutcome.failed(str(e))


def moderate_company(
    db: Session,
    caller: Caller,
    company_id: int,
    status: str,
    mailer: EmailSender,
    rejection_reason: Optional[str] = None,
) -> Company:
    """
    Move a company between pending, approved and rejected.

    Any state can be reached from any other; re-approval after a rejection is
    allowed. The status write is committed before the owner is emailed, and
    email problems never fail the request.

    Raises:
        AuthorizationError: Caller is not an admin
        ValidationError: Unknown status value
        NotFoundError: No such company
    """
    enforce(caller, "company", "moderate")

    if status not in COMPANY_STATUSES:
        raise ValidationError("Invalid status value")

    company = db.get(Company, company_id)
    if not company:
        raise NotFoundError("Company not found")

    previous = company.status
    company.status = status
    db.commit()
    db.refresh(company)

    logger.info(f"Company status updated: company_id={company.id}, {previous} -> {status}, admin_id={caller.id}")

    outcome = _notify_owner(db, company, status, rejection_reason, mailer)
    if outcome is not None:
        logger.debug(f"Company moderation email outcome: company_id={company.id}, status={outcome.status.value}")

    return company
