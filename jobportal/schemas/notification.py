"""
Pydantic schemas for the notification feed.
"""
from datetime import datetime
from typing import List, Optional

from jobportal.schemas.base import CamelModel


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    type: str
    title: str
    message: str
    read: bool
    related_id: Optional[int] = None
    created_at: Optional[datetime] = None


class NotificationListResponse(CamelModel):
    notifications: List[NotificationResponse]
    unread_count: int


class NotificationUpdate(CamelModel):
    """Either ``id`` of one notification or ``markAllAsRead: true``."""
    id: Optional[int] = None
    mark_all_as_read: Optional[bool] = None


class NotificationUpdateResponse(CamelModel):
    message: str
    unread_count: int
