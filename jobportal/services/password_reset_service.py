"""
Password reset tokens.

Each user has at most one live token; asking again replaces it. A token is
good for PASSWORD_RESET_TTL_HOURS and is deleted as soon as it is used.
"""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from jobportal.core.config import PASSWORD_RESET_TTL_HOURS
from jobportal.core.errors import ValidationError
from jobportal.core.security import check_password_strength, generate_reset_token, hash_password
from jobportal.core.timeutils import as_utc, utcnow
from jobportal.db.models.password_reset import PasswordResetToken
from jobportal.db.models.user import User
from jobportal.services.email_service import EmailSender
from jobportal.services.email_templates import password_reset_email, password_reset_success_email

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If an account exists with this email, you will receive a reset link"
INVALID_TOKEN_MESSAGE = "Invalid or expired reset token"


def request_password_reset(db: Session, email: str, mailer: EmailSender) -> Optional[PasswordResetToken]:
    """
    Issue (or replace) a reset token for ``email`` and mail the link.

    Returns None for unknown addresses; the caller must answer identically in
    both cases so addresses cannot be enumerated.
    """
    user = db.query(User).filter(User.email == email.lower().strip()).first()
    if not user:
        logger.info("Password reset requested for unknown email")
        return None

    expires_at = utcnow() + timedelta(hours=PASSWORD_RESET_TTL_HOURS)
    reset = db.query(PasswordResetToken).filter(PasswordResetToken.user_id == user.id).first()
    if reset is None:
        reset = PasswordResetToken(user_id=user.id)
        db.add(reset)
    reset.token = generate_reset_token()
    reset.expires_at = expires_at
    db.commit()
    db.refresh(reset)

    logger.info(f"Password reset token issued: user_id={user.id}")

    mailer.send(password_reset_email(user.email, user.name, reset.token, PASSWORD_RESET_TTL_HOURS))
    return reset


def verify_reset_token(db: Session, token: str) -> Optional[PasswordResetToken]:
    """The matching unexpired token, or None."""
    if not token:
        return None
    reset = db.query(PasswordResetToken).filter(PasswordResetToken.token == token).first()
    if reset is None or as_utc(reset.expires_at) <= utcnow():
        return None
    return reset


def reset_password(db: Session, token: str, new_password: str, mailer: EmailSender) -> User:
    """
    Set a new password using a reset token, consuming the token.

    Raises:
        ValidationError: Unknown or expired token, or a weak password
    """
    reset = verify_reset_token(db, token)
    if reset is None:
        raise ValidationError(INVALID_TOKEN_MESSAGE)

    weakness = check_password_strength(new_password)
    if weakness:
        raise ValidationError(weakness)

    user = db.get(User, reset.user_id)
    if user is None:
        db.delete(reset)
        db.commit()
        raise ValidationError(INVALID_TOKEN_MESSAGE)

    user.password_hash = hash_password(new_password)
    db.delete(reset)
    db.commit()
    db.refresh(user)

    logger.info(f"Password reset completed: user_id={user.id}")

    mailer.send(password_reset_success_email(user.email, user.name))
    return user
