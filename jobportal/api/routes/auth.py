"""
Authentication endpoints: registration, login and password reset.
"""
import logging
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_current_caller, get_db
from jobportal.core.errors import NotFoundError, ValidationError
from jobportal.core.rate_limit import rate_limited
from jobportal.core.security import create_access_token
from jobportal.db.models.user import User
from jobportal.schemas.auth import (
    ForgotPasswordRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenCheckResponse,
    TokenResponse,
    UserResponse,
)
from jobportal.schemas.base import MessageResponse
from jobportal.services.auth_service import authenticate, register_user
from jobportal.services.email_service import EmailSender, get_email_sender
from jobportal.services.password_reset_service import (
    INVALID_TOKEN_MESSAGE,
    RESET_REQUESTED_MESSAGE,
    request_password_reset,
    reset_password,
    verify_reset_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    """
    Create a job seeker or company account.

    Company accounts still need a company profile approved by an admin
    before they can post jobs.
    """
    user = register_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        mailer=mailer,
        company_name=payload.company_name,
    )
    return RegisterResponse(message="Registration successful", user=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    # Swagger sends "username", but we treat it as email
    user = authenticate(db, form_data.username, form_data.password)
    token = create_access_token({"sub": str(user.id), "role": user.role})
    logger.info(f"Login: user_id={user.id}")
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserResponse)
def me(caller: Caller = Depends(get_current_caller), db: Session = Depends(get_db)):
    user = db.get(User, caller.id)
    if not user:
        raise NotFoundError("User not found")
    return UserResponse.model_validate(user)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    dependencies=[Depends(rate_limited("forgot_password"))],
)
def forgot_password(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    """Email a reset link. The answer is the same whether or not the account exists."""
    request_password_reset(db, payload.email, mailer)
    return MessageResponse(message=RESET_REQUESTED_MESSAGE)


@router.get("/reset-password/{token}", response_model=TokenCheckResponse)
def check_reset_token(token: str, db: Session = Depends(get_db)):
    if verify_reset_token(db, token) is None:
        raise ValidationError(INVALID_TOKEN_MESSAGE)
    return TokenCheckResponse(valid=True)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    dependencies=[Depends(rate_limited("reset_password"))],
)
def perform_reset(
    payload: ResetPasswordRequest,
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
):
    reset_password(db, payload.token, payload.password, mailer)
    return MessageResponse(message="Password has been reset successfully")
