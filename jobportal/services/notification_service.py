"""
Per-user notification feed.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from jobportal.db.models.notification import Notification

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def create_notification(
    db: Session,
    user_id: int,
    type: str,
    title: str,
    message: str,
    related_id: Optional[int] = None,
) -> Notification:
    """
    Stage a new unread notification.

    Not committed here: the caller's transaction decides whether it lands.
    """
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        read=False,
        related_id=related_id,
    )
    db.add(notification)
    return notification


def list_notifications(
    db: Session,
    user_id: int,
    read: Optional[bool] = None,
    limit: int = DEFAULT_LIMIT,
) -> List[Notification]:
    """Newest first, at most ``limit`` rows."""
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if read is not None:
        query = query.filter(Notification.read == read)
    return (
        query.order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def count_unread(db: Session, user_id: int) -> int:
    # Counted separately so it stays right when the listed page is truncated
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.read.is_(False))
        .count()
    )


def mark_as_read(db: Session, user_id: int, notification_id: int) -> int:
    """
    Mark one of the caller's notifications read.

    The update is scoped to ``user_id``, so another user's id simply matches
    nothing. Returns the number of rows changed.
    """
    updated = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user_id)
        .update({Notification.read: True}, synchronize_session=False)
    )
    db.commit()
    logger.debug(f"Notification marked read: user_id={user_id}, id={notification_id}, updated={updated}")
    return updated


def mark_all_as_read(db: Session, user_id: int) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.read.is_(False))
        .update({Notification.read: True}, synchronize_session=False)
    )
    db.commit()
    logger.info(f"All notifications marked read: user_id={user_id}, updated={updated}")
    return updated
