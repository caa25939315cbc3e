"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from jobportal.db.models.user import User
from jobportal.db.models.company import Company
from jobportal.db.models.job import Job
from jobportal.db.models.profile import Profile
from jobportal.db.models.application import Application, ApplicationStatusHistory
from jobportal.db.models.notification import Notification
from jobportal.db.models.password_reset import PasswordResetToken

__all__ = [
    "User",
    "Company",
    "Job",
    "Profile",
    "Application",
    "ApplicationStatusHistory",
    "Notification",
    "PasswordResetToken",
]
