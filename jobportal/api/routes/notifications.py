"""
Notification feed for the signed-in user.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_current_caller, get_db
from jobportal.core.errors import ValidationError
from jobportal.schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
    NotificationUpdate,
    NotificationUpdateResponse,
)
from jobportal.services.notification_service import (
    count_unread,
    list_notifications,
    mark_all_as_read,
    mark_as_read,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
def get_notifications(
    read: Optional[bool] = Query(None, description="Only read or only unread"),
    limit: int = Query(10, ge=1, le=100),
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    notifications = list_notifications(db, caller.id, read=read, limit=limit)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=count_unread(db, caller.id),
    )


@router.patch("", response_model=NotificationUpdateResponse)
def update_notifications(
    payload: NotificationUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """Mark one notification (``id``) or all of them (``markAllAsRead``) as read."""
    if payload.mark_all_as_read:
        mark_all_as_read(db, caller.id)
        message = "All notifications marked as read"
    elif payload.id is not None:
        mark_as_read(db, caller.id, payload.id)
        message = "Notification marked as read"
    else:
        raise ValidationError("Invalid request. Specify id or markAllAsRead")

    return NotificationUpdateResponse(message=message, unread_count=count_unread(db, caller.id))
