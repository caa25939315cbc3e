"""
Account registration and credential checks.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.core.errors import AuthenticationError, ValidationError
from jobportal.core.security import check_password_strength, hash_password, verify_password
from jobportal.db.models.user import User
from jobportal.services.email_service import EmailSender
from jobportal.services.email_templates import welcome_email

logger = logging.getLogger(__name__)

SELF_SERVICE_ROLES = ("jobseeker", "company")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: str,
    mailer: EmailSender,
    company_name: Optional[str] = None,
) -> User:
    """
    Create a job seeker or company account and send the welcome email.

    Raises:
        ValidationError: Admin or unknown role, weak password, or the email
            is already registered
    """
    if role not in SELF_SERVICE_ROLES:
        raise ValidationError("Invalid role")

    weakness = check_password_strength(password)
    if weakness:
        raise ValidationError(weakness)

    email = normalize_email(email)
    if db.query(User).filter(User.email == email).first():
        raise ValidationError("User already exists")

    user = User(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=role,
        company_name=company_name.strip() if role == "company" and company_name else None,
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("User already exists")
    db.refresh(user)

    logger.info(f"User registered: user_id={user.id}, role={role}")

    mailer.send(welcome_email(user.email, user.name, role))
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Check credentials.

    Raises:
        AuthenticationError: Unknown email, wrong password, or deactivated account
    """
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login failed: invalid credentials")
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        logger.info(f"Login refused for deactivated user_id={user.id}")
        raise AuthenticationError("Account is deactivated")
    return user
