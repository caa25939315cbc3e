"""
Request-scoped dependencies: database session and caller identity.

The bearer token names a user id; the user's role and contact details are
loaded from the store on every request, and everything downstream trusts
that role.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from jobportal.core.errors import AuthenticationError, AuthorizationError
from jobportal.core.security import decode_access_token
from jobportal.db.session import SessionLocal
from jobportal.db.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


@dataclass(frozen=True)
class Caller:
    id: int
    role: str
    email: str
    name: str

    @classmethod
    def from_user(cls, user: User) -> "Caller":
        return cls(id=user.id, role=user.role, email=user.email, name=user.name)


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _resolve_caller(token: Optional[str], db: Session) -> Optional[Caller]:
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except JWTError:
        return None

    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        return None

    user = db.get(User, user_id)
    if not user or not user.is_active:
        return None
    return Caller.from_user(user)


def get_optional_caller(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[Caller]:
    """Caller identity if a valid token was sent, otherwise None."""
    return _resolve_caller(token, db)


def get_current_caller(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Caller:
    """Caller identity; rejects the request before any data access when missing."""
    caller = _resolve_caller(token, db)
    if caller is None:
        raise AuthenticationError("You must be logged in to perform this action")
    return caller


def require_admin(caller: Caller = Depends(get_current_caller)) -> Caller:
    if caller.role != "admin":
        raise AuthorizationError("Admin access required")
    return caller
