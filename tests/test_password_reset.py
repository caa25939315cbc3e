"""
Tests for password reset tokens and endpoints.
"""
from datetime import timedelta

import pytest

from jobportal.core.errors import ValidationError
from jobportal.core.security import verify_password
from jobportal.core.timeutils import utcnow
from jobportal.db.models.password_reset import PasswordResetToken
from jobportal.db.models.user import User
from jobportal.services.password_reset_service import (
    INVALID_TOKEN_MESSAGE,
    RESET_REQUESTED_MESSAGE,
    request_password_reset,
    reset_password,
    verify_reset_token,
)


def test_request_issues_token_and_mails_link(db, world, mailer):
    reset = request_password_reset(db, "Jane@Example.com ", mailer)

    assert reset.user_id == world.seeker.id
    assert len(reset.token) == 64
    assert len(mailer.sent) == 1
    assert f"/auth/reset-password/{reset.token}" in mailer.sent[0].html


def test_unknown_email_is_silent(db, world, mailer):
    assert request_password_reset(db, "nobody@example.com", mailer) is None
    assert mailer.sent == []


def test_second_request_replaces_token(db, world, mailer):
    first = request_password_reset(db, "jane@example.com", mailer).token
    second = request_password_reset(db, "jane@example.com", mailer).token

    assert first != second
    assert db.query(PasswordResetToken).count() == 1
    assert verify_reset_token(db, first) is None


def test_expired_token_is_invalid(db, world, mailer):
    reset = request_password_reset(db, "jane@example.com", mailer)
    reset.expires_at = utcnow() - timedelta(minutes=1)
    db.commit()

    assert verify_reset_token(db, reset.token) is None
    with pytest.raises(ValidationError) as exc_info:
        reset_password(db, reset.token, "NewPassword1", mailer)
    assert exc_info.value.message == INVALID_TOKEN_MESSAGE


def test_reset_changes_password_and_consumes_token(db, world, mailer):
    token = request_password_reset(db, "jane@example.com", mailer).token

    user = reset_password(db, token, "BrandNew123", mailer)

    assert verify_password("BrandNew123", user.password_hash)
    assert db.query(PasswordResetToken).count() == 0
    assert mailer.sent[-1].subject == "Password Reset Successful"

    with pytest.raises(ValidationError):
        reset_password(db, token, "Another123", mailer)


def test_weak_password_keeps_token(db, world, mailer):
    token = request_password_reset(db, "jane@example.com", mailer).token

    with pytest.raises(ValidationError) as exc_info:
        reset_password(db, token, "alllowercase1", mailer)
    assert exc_info.value.message == "Password must contain at least one uppercase letter"
    assert verify_reset_token(db, token) is not None


def test_forgot_password_endpoint_does_not_leak_accounts(client, world):
    known = client.post("/auth/forgot-password", json={"email": "jane@example.com"})
    unknown = client.post("/auth/forgot-password", json={"email": "ghost@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"message": RESET_REQUESTED_MESSAGE}


def test_forgot_password_is_rate_limited(client, world):
    for _ in range(5):
        assert client.post("/auth/forgot-password", json={"email": "ghost@example.com"}).status_code == 200
    assert client.post("/auth/forgot-password", json={"email": "ghost@example.com"}).status_code == 429


def test_reset_endpoints(client, db, world, mailer):
    client.post("/auth/forgot-password", json={"email": "jane@example.com"})
    token = db.query(PasswordResetToken).one().token

    assert client.get(f"/auth/reset-password/{token}").json() == {"valid": True}
    assert client.get("/auth/reset-password/not-a-token").status_code == 400

    response = client.post("/auth/reset-password", json={"token": token, "password": "Changed123"})
    assert response.status_code == 200

    db.expire_all()
    assert verify_password("Changed123", db.get(User, world.seeker.id).password_hash)
