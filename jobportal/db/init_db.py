import logging

from jobportal.db.session import engine
from jobportal.db.base import Base

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create any missing tables. Used when Alembic migrations are not enabled."""
    # Register every model on Base.metadata
    import jobportal.db.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")
