"""
Job seeker profiles.

A profile's email always mirrors the account email; it is what applications
copy when they are submitted.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller
from jobportal.core.errors import ValidationError
from jobportal.db.models.profile import Profile

logger = logging.getLogger(__name__)


def get_profile(db: Session, caller: Caller) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.user_id == caller.id).first()


def save_profile(db: Session, caller: Caller, data: dict) -> Profile:
    """Create or update the caller's profile."""
    data = {key: value for key, value in data.items() if key in ("name", "resume", "skills")}
    if "skills" in data and data["skills"] is None:
        data["skills"] = []
    profile = get_profile(db, caller)

    if profile is None:
        if not data.get("name"):
            raise ValidationError("Name is required")
        profile = Profile(
            user_id=caller.id,
            email=caller.email,
            skills=data.pop("skills", []),
            **data,
        )
        db.add(profile)
        action = "created"
    else:
        if "name" in data and not data["name"]:
            raise ValidationError("Name is required")
        for field, value in data.items():
            setattr(profile, field, value)
        profile.email = caller.email
        action = "updated"

    db.commit()
    db.refresh(profile)
    logger.info(f"Profile {action}: user_id={caller.id}")
    return profile
