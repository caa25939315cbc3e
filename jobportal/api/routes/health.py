"""
Health check endpoint for deployment monitoring.
"""
from fastapi import APIRouter
from sqlalchemy import text

from jobportal.core.timeutils import utcnow
from jobportal.db.session import SessionLocal

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check():
    """
    Health check endpoint for deployment monitoring.

    Always answers 200; ``status`` is "degraded" when the database is unreachable.
    """
    status = "healthy"

    # Check database connectivity
    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {str(e)}"
        status = "degraded"

    return {
        "status": status,
        "timestamp": utcnow().isoformat(),
        "database": db_status,
        "version": "1.0.0",
    }
