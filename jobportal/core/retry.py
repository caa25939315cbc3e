"""
Single bounded retry for transient storage failures.

Only the fetch-single-job, list-jobs and create-job paths use this. An
operation is attempted, and on a recognized network-level failure it is
attempted exactly once more after a fixed delay.
"""
import logging
import time
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from jobportal.core.errors import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_EXCEPTIONS = (OperationalError, DisconnectionError, InterfaceError, ConnectionError)
TRANSIENT_MESSAGES = (
    "econnrefused",
    "connection refused",
    "could not connect",
    "server closed the connection",
    "connection reset",
    "timed out",
)


def is_transient_error(error: Exception) -> bool:
    if isinstance(error, TRANSIENT_EXCEPTIONS):
        return True
    message = str(error).lower()
    return any(signature in message for signature in TRANSIENT_MESSAGES)


def run_with_retry(
    operation: Callable[[], T],
    description: str,
    delay: float,
    db: Optional[Session] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Run ``operation``; retry once after ``delay`` seconds if it fails transiently.
    
    Args:
        operation: Zero-argument callable doing the storage work
        description: Human-readable name used in log lines
        delay: Seconds to wait before the single retry
        db: Session to roll back between attempts
        sleep: Replaces time.sleep, for tests
        
    Returns:
        Whatever ``operation`` returns
        
    Raises:
        StorageError: If both attempts fail with transient errors
        Exception: Non-transient errors are re-raised unchanged
    """
    try:
        return operation()
    except Exception as error:
        if not is_transient_error(error):
            raise
        logger.warning(f"Database connection issue during {description}, retrying in {delay}s: {error}")
        if db is not None:
            db.rollback()
        (sleep or time.sleep)(delay)
        try:
            return operation()
        except Exception as retry_error:
            logger.error(f"Failed on retry during {description}: {retry_error}")
            if db is not None:
                db.rollback()
            raise StorageError("Database connection failed. Please try again later.") from error
