"""
Application submission and listing.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from jobportal.core.auth_dependency import Caller
from jobportal.core.config import NOTIFICATION_EMAIL
from jobportal.core.errors import AuthorizationError, NotFoundError, ValidationError
from jobportal.core.policies import AccessContext, enforce
from jobportal.core.timeutils import as_utc, utcnow
from jobportal.db.models.application import Application
from jobportal.db.models.job import Job
from jobportal.db.models.profile import Profile
from jobportal.services.company_service import get_caller_company
from jobportal.services.email_service import EmailSender
from jobportal.services.email_templates import application_submitted_email

logger = logging.getLogger(__name__)

DUPLICATE_APPLICATION_MESSAGE = "You have already applied for this job"


def submit_application(
    db: Session,
    caller: Caller,
    job_id: Optional[int],
    mailer: EmailSender,
    cv: Optional[str] = None,
    cover_letter: Optional[str] = None,
) -> Application:
    """
    Create a pending application from the caller's profile.

    The applicant's name and email come from their Profile rather than the
    session so the application matches their portfolio. A resume on the
    profile or a ``cv`` with the submission is required.

    Raises:
        ValidationError: Missing job id, job closed or past deadline, duplicate
            application, no profile, or no document
        NotFoundError: Job does not exist
    """
    enforce(caller, "application", "create")

    if not job_id:
        raise ValidationError("Job ID is required")

    job = db.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")

    if job.status != "active":
        raise ValidationError("This job is no longer accepting applications")

    deadline = as_utc(job.application_deadline)
    if deadline is not None and deadline < utcnow():
        raise ValidationError("The application deadline for this job has passed")

    existing = db.query(Application).filter(
        Application.job_id == job_id,
        Application.user_id == caller.id,
    ).first()
    if existing:
        raise ValidationError(DUPLICATE_APPLICATION_MESSAGE)

    profile = db.query(Profile).filter(Profile.user_id == caller.id).first()
    if not profile:
        raise ValidationError("Please complete your profile before applying")

    resume = profile.resume or None
    cv = cv or None
    if not resume and not cv:
        raise ValidationError("Either a resume or a CV is required to apply")

    application = Application(
        job_id=job.id,
        user_id=caller.id,
        name=profile.name,
        email=profile.email,
        resume=resume,
        cv=cv,
        cover_letter=cover_letter or None,
        status="pending",
        notification_read=False,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent submission for the same job
        db.rollback()
        raise ValidationError(DUPLICATE_APPLICATION_MESSAGE)
    db.refresh(application)

    logger.info(f"Application submitted: application_id={application.id}, job_id={job.id}, user_id={caller.id}")

    if NOTIFICATION_EMAIL:
        outcome = mailer.send(application_submitted_email(profile.email, job.title, job.company_name))
        logger.debug(f"Submission email outcome: application_id={application.id}, status={outcome.status.value}")

    return application


def list_my_applications(db: Session, caller: Caller, status: Optional[str] = None) -> List[Application]:
    """The caller's own applications with their jobs, newest first."""
    query = (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.user_id == caller.id)
    )
    if status and status != "all":
        query = query.filter(Application.status == status)
    return query.order_by(Application.created_at.desc(), Application.id.desc()).all()


def list_company_applications(
    db: Session,
    caller: Caller,
    status: Optional[str] = None,
    job_id: Optional[int] = None,
) -> List[Application]:
    """
    Applications to the caller's company's jobs, newest first.

    Raises:
        AuthorizationError: No approved company profile, or ``job_id`` belongs
            to another company
    """
    company = get_caller_company(db, caller)
    enforce(caller, "application", "list", AccessContext(company=company))

    query = db.query(Application).options(joinedload(Application.job))

    # Admins see every company's applications
    job_ids = None
    if caller.role != "admin":
        job_ids = [row.id for row in db.query(Job.id).filter(Job.company_id == company.id).all()]
        if job_id is not None and job_id not in job_ids:
            logger.warning(f"Company user_id={caller.id} requested applications for foreign job_id={job_id}")
            raise AuthorizationError("You can only view applications for jobs posted by your company")
        if not job_ids:
            return []
        query = query.filter(Application.job_id.in_(job_ids))

    if status and status != "all":
        query = query.filter(Application.status == status)

    if job_id is not None:
        query = query.filter(Application.job_id == job_id)

    return query.order_by(Application.created_at.desc(), Application.id.desc()).all()
