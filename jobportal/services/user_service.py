"""
Admin user management.

Admin accounts are immutable through this module no matter who asks, and no
account can be promoted to admin here.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller
from jobportal.core.errors import AuthorizationError, NotFoundError, ValidationError
from jobportal.core.logging_config import sanitize_log_data
from jobportal.core.policies import AccessContext, authorize, enforce
from jobportal.db.models.user import User

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "email", "company_name", "is_active", "role")


def list_users(db: Session, caller: Caller, role: Optional[str] = None) -> List[User]:
    enforce(caller, "user", "list")
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(db: Session, caller: Caller, user_id: int) -> User:
    enforce(caller, "user", "read")
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def _load_target(db: Session, caller: Caller, user_id: int, operation: str, denied_message: str) -> User:
    enforce(caller, "user", operation)
    target = db.get(User, user_id)
    if not target:
        raise NotFoundError("User not found")
    decision = authorize(caller, "user", operation, AccessContext(target=target))
    if not decision.allowed:
        logger.warning(f"Admin user_id={caller.id} tried to {operation} admin user_id={user_id}")
        raise AuthorizationError(denied_message)
    return target


def update_user(db: Session, caller: Caller, user_id: int, changes: dict) -> User:
    """
    Update a non-admin account.

    Raises:
        ValidationError: Attempt to set role to admin, or an unknown role
        AuthorizationError: Caller is not an admin, or the target is an admin
        NotFoundError: No such user
    """
    if changes.get("role") == "admin":
        raise ValidationError("Cannot change user role to admin through this endpoint")
    if "role" in changes and changes["role"] not in ("company", "jobseeker"):
        raise ValidationError("Invalid role")

    target = _load_target(db, caller, user_id, "update", "Cannot modify admin users")

    if "email" in changes and changes["email"] != target.email:
        taken = db.query(User).filter(User.email == changes["email"], User.id != target.id).first()
        if taken:
            raise ValidationError("Email already registered")

    for field, value in changes.items():
        if field in UPDATABLE_FIELDS:
            setattr(target, field, value)

    db.commit()
    db.refresh(target)
    logger.info(f"User updated: user_id={target.id}, changes={sanitize_log_data(changes)}, admin_id={caller.id}")
    return target


def delete_user(db: Session, caller: Caller, user_id: int) -> None:
    target = _load_target(db, caller, user_id, "delete", "Cannot delete admin users")
    db.delete(target)
    db.commit()
    logger.info(f"User deleted: user_id={user_id}, admin_id={caller.id}")
