"""
Application status workflow.

A status change on an application fans out in a fixed order:

1. the new status is validated against the known set,
2. a history entry is appended and the applicant's ``notification_read``
   flag is reset,
3. an in-app notification is staged for the applicant,
4. all of the above is committed in one transaction,
5. an email is attempted.

Steps 1-4 succeed or fail together. Step 5 is best effort: its outcome is
reported on the result but can never undo or fail the committed change.

Which fields a caller may touch depends only on their role (see
``EDITABLE_FIELDS``). Anything else in the request body is dropped before
the update set is built.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from jobportal.core.auth_dependency import Caller
from jobportal.core.errors import NotFoundError, StorageError, ValidationError
from jobportal.core.logging_config import sanitize_log_data
from jobportal.core.policies import AccessContext, enforce
from jobportal.core.timeutils import utcnow
from jobportal.db.models.application import Application, ApplicationStatusHistory, APPLICATION_STATUSES
from jobportal.db.models.notification import Notification
from jobportal.services.company_service import get_caller_company
from jobportal.services.email_service import EmailOutcome, EmailSender
from jobportal.services.email_templates import application_status_email
from jobportal.services.notification_service import create_notification

logger = logging.getLogger(__name__)

STATUS_MESSAGES: Dict[str, str] = {
    "reviewed": "Your application has been reviewed",
    "shortlisted": "Congratulations! You've been shortlisted",
    "interview": "Congratulations! You've been selected for an interview",
    "hired": "Congratulations! You've been hired",
    "rejected": "Thank you for your interest, but your application was not selected",
}

EDITABLE_FIELDS: Dict[str, Tuple[str, ...]] = {
    "company": ("status", "notes"),
    "jobseeker": ("notification_read",),
    "admin": (
        "status",
        "notes",
        "notification_read",
        "name",
        "email",
        "resume",
        "cv",
        "cover_letter",
    ),
}

# Columns that cannot be cleared with an explicit null
REQUIRED_FIELDS = ("status", "notification_read", "name", "email")


@dataclass
class WorkflowResult:
    application: Application
    status_changed: bool
    notification: Optional[Notification] = None
    email: Optional[EmailOutcome] = None


def status_message(status: str) -> str:
    return STATUS_MESSAGES.get(status, f"Your application status has been updated to {status}")


def scoped_changes(role: str, changes: dict) -> dict:
    """Keep only the fields ``role`` may write."""
    allowed = EDITABLE_FIELDS.get(role, ())
    return {field: value for field, value in changes.items() if field in allowed}


def load_application(db: Session, application_id: int) -> Application:
    """Fetch an application together with its job (title, company name, company id)."""
    application = (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.id == application_id)
        .first()
    )
    if not application:
        raise NotFoundError("Application not found")
    return application


def _authorize(db: Session, caller: Caller, application: Application, operation: str) -> None:
    context = AccessContext(company=get_caller_company(db, caller), target=application)
    enforce(caller, "application", operation, context)


def get_application(db: Session, application_id: int, caller: Caller) -> Application:
    """
    Read one application.

    When the applicant opens their own application, its pending status
    notification counts as seen.
    """
    application = load_application(db, application_id)
    _authorize(db, caller, application, "read")

    if caller.role == "jobseeker" and not application.notification_read:
        application.notification_read = True
        db.commit()
        db.refresh(application)

    return application


def _send_status_email(application: Application, status: str, notes: Optional[str], mailer: EmailSender) -> EmailOutcome:
    job = application.job
    message = application_status_email(
        to=application.email,
        applicant_name=application.name,
        status=status,
        status_title=status_message(status),
        job_title=job.title,
        company_name=job.company_name,
        notes=notes,
    )
    try:
        return mailer.send(message)
    except Exception as e:
        logger.error(f"Error sending status email for application_id={application.id}: {e}", exc_info=True)
        return EmailOutcome.failed(str(e))


def update_application(
    db: Session,
    application_id: int,
    changes: dict,
    caller: Caller,
    mailer: EmailSender,
) -> WorkflowResult:
    """
    Apply a role-scoped partial update to an application.

    Args:
        db: Database session
        application_id: Application to update
        changes: Partial update as sent by the caller (snake_case field names)
        caller: Authenticated caller
        mailer: Email sender used for the best-effort status email

    Returns:
        WorkflowResult with the refreshed application, whether the status
        changed, the staged notification and the email outcome

    Raises:
        ValidationError: Empty body, unknown status value or a null for a
            required field
        NotFoundError: No such application
        AuthorizationError: Caller may not update this application
        StorageError: The write failed; nothing was persisted
    """
    if not changes:
        raise ValidationError("Please provide data to update")

    application = load_application(db, application_id)
    _authorize(db, caller, application, "update")

    update_set = scoped_changes(caller.role, changes)

    cleared = sorted(field for field in REQUIRED_FIELDS if field in update_set and update_set[field] is None)
    if cleared:
        raise ValidationError(f"These fields cannot be empty: {', '.join(cleared)}")

    if "status" in update_set and update_set["status"] not in APPLICATION_STATUSES:
        raise ValidationError(f"Invalid application status: {update_set['status']}")

    new_status = update_set.get("status")
    status_changed = new_status is not None and new_status != application.status
    notes = update_set.get("notes") or None
    notification = None

    try:
        if status_changed:
            db.add(ApplicationStatusHistory(
                application_id=application.id,
                status=new_status,
                date=utcnow(),
                notes=notes,
            ))
            notification = create_notification(
                db,
                user_id=application.user_id,
                type="application_status",
                title=f"Application Status Update: {status_message(new_status)}",
                message=(
                    f"Your application for {application.job.title} at {application.job.company_name} "
                    f"has been updated to \"{new_status}\"."
                ),
                related_id=application.id,
            )

        for field, value in update_set.items():
            setattr(application, field, value)

        if status_changed:
            # The applicant has not seen this change yet
            application.notification_read = False

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update application_id={application_id}: {e}", exc_info=True)
        raise StorageError("Failed to update application") from e

    db.refresh(application)

    if status_changed:
        logger.info(
            f"Application status changed: application_id={application.id}, status={new_status}, "
            f"by user_id={caller.id} ({caller.role})"
        )
    else:
        logger.info(f"Application updated: application_id={application.id}, changes={sanitize_log_data(update_set)}")

    email = None
    if status_changed:
        email = _send_status_email(application, new_status, notes, mailer)

    return WorkflowResult(
        application=application,
        status_changed=status_changed,
        notification=notification,
        email=email,
    )
