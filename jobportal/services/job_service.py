"""
Job postings.

Reads of a single job, job listings and job creation get one retry on
transient storage errors. Other writes fail straight through.
"""
import logging
import math
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller
from jobportal.core.config import JOB_CREATE_RETRY_DELAY_SECONDS, STORAGE_RETRY_DELAY_SECONDS
from jobportal.core.errors import NotFoundError, StorageError, ValidationError
from jobportal.core.logging_config import sanitize_log_data
from jobportal.core.policies import AccessContext, enforce
from jobportal.core.retry import run_with_retry
from jobportal.db.models.job import Job, JOB_STATUSES
from jobportal.services.company_service import get_caller_company

logger = logging.getLogger(__name__)

# Never writable through a job update
PROTECTED_FIELDS = ("id", "company_id", "company_name", "created_at", "updated_at")

# Columns an update may change but never clear
REQUIRED_FIELDS = ("title", "job_type", "responsibilities", "requirements", "status")


def list_jobs(
    db: Session,
    caller: Optional[Caller],
    company_id: Optional[int] = None,
    job_type: Optional[str] = None,
    status: str = "active",
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Job], Dict[str, int]]:
    """
    List jobs, newest first, with pagination info.

    Company callers only ever see their own company's jobs, whatever
    ``company_id`` says. ``status="all"`` disables the status filter.
    """
    query = db.query(Job)

    if caller is not None and caller.role == "company":
        company = get_caller_company(db, caller)
        if company is None:
            return [], {"total": 0, "page": page, "limit": limit, "pages": 0}
        query = query.filter(Job.company_id == company.id)
    elif company_id is not None:
        query = query.filter(Job.company_id == company_id)

    if job_type:
        query = query.filter(Job.job_type == job_type)

    if status != "all":
        query = query.filter(Job.status == status)

    def fetch():
        jobs = (
            query.order_by(Job.created_at.desc(), Job.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return jobs, query.count()

    jobs, total = run_with_retry(fetch, "job listing", STORAGE_RETRY_DELAY_SECONDS, db=db)

    return jobs, {
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if limit else 0,
    }


def get_job(db: Session, job_id: int) -> Job:
    job = run_with_retry(lambda: db.get(Job, job_id), "job fetch", STORAGE_RETRY_DELAY_SECONDS, db=db)
    if not job:
        raise NotFoundError("Job not found")
    return job


def create_job(db: Session, caller: Caller, data: dict) -> Job:
    """
    Post a job for the caller's approved company.

    ``company_id`` and ``company_name`` are taken from the company profile,
    and new jobs go live immediately.
    """
    company = get_caller_company(db, caller)
    enforce(caller, "job", "create", AccessContext(company=company))

    fields = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
    fields["status"] = "active"

    def insert():
        job = Job(company_id=company.id, company_name=company.name, **fields)
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    job = run_with_retry(insert, "job creation", JOB_CREATE_RETRY_DELAY_SECONDS, db=db)

    logger.info(f"Job created: job_id={job.id}, company_id={company.id}, title={job.title!r}")
    return job


def _load_for_write(db: Session, caller: Caller, job_id: int, operation: str) -> Job:
    job = db.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")
    enforce(caller, "job", operation, AccessContext(company=get_caller_company(db, caller), target=job))
    return job


def update_job(db: Session, caller: Caller, job_id: int, changes: dict) -> Job:
    job = _load_for_write(db, caller, job_id, "update")

    cleared = sorted(field for field in REQUIRED_FIELDS if field in changes and changes[field] is None)
    if cleared:
        raise ValidationError(f"These fields cannot be empty: {', '.join(cleared)}")

    if "status" in changes and changes["status"] not in JOB_STATUSES:
        raise ValidationError("Invalid job status")

    for field, value in changes.items():
        if field in PROTECTED_FIELDS:
            continue
        setattr(job, field, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update job_id={job_id}: {e}", exc_info=True)
        raise StorageError("Failed to update job") from e

    db.refresh(job)
    logger.info(f"Job updated: job_id={job.id}, changes={sanitize_log_data(changes)}, user_id={caller.id}")
    return job


def delete_job(db: Session, caller: Caller, job_id: int) -> None:
    job = _load_for_write(db, caller, job_id, "delete")
    try:
        db.delete(job)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete job_id={job_id}: {e}", exc_info=True)
        raise StorageError("Failed to delete job") from e
    logger.info(f"Job deleted: job_id={job_id}, user_id={caller.id}")


def set_job_status(db: Session, caller: Caller, job_id: int, status: str) -> Job:
    """Admin moderation of a job's status."""
    enforce(caller, "job", "moderate")
    if status not in JOB_STATUSES:
        raise ValidationError("Invalid job status")

    job = db.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")

    job.status = status
    db.commit()
    db.refresh(job)
    logger.info(f"Job status set: job_id={job.id}, status={status}, admin_id={caller.id}")
    return job
