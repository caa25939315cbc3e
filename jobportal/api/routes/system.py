"""
Admin-only view of the database connection.
"""
import logging
import os
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_db, require_admin
from jobportal.core.timeutils import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/db-status")
def db_status(caller: Caller = Depends(require_admin), db: Session = Depends(get_db)):
    healthy = True
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        healthy = False

    bind = db.get_bind()
    return {
        "status": "success",
        "data": {
            "dialect": bind.dialect.name,
            "pool": bind.pool.status(),
            "currentHealth": healthy,
            "environment": os.getenv("ENVIRONMENT", "development"),
            "timestamp": utcnow().isoformat(),
        },
    }
