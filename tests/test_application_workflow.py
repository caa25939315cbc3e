"""
Tests for the application status workflow: history, notification fan-out,
role-scoped fields and best-effort email.
"""
import pytest
from sqlalchemy.exc import OperationalError

from jobportal.core.errors import AuthorizationError, NotFoundError, StorageError, ValidationError
from jobportal.db.models.application import Application
from jobportal.db.models.notification import Notification
from jobportal.services.application_workflow import (
    get_application,
    scoped_changes,
    status_message,
    update_application,
)
from jobportal.services.email_service import EmailOutcome, EmailStatus

from conftest import RecordingMailer, caller_for, history_for


def notifications_for(db, user_id):
    return db.query(Notification).filter(Notification.user_id == user_id).order_by(Notification.id).all()


def test_status_change_fans_out(db, world, mailer):
    """Company moves an application to reviewed: history, notification and email."""
    result = update_application(
        db,
        world.application.id,
        {"status": "reviewed", "notes": "Strong profile"},
        caller_for(world.acme_owner),
        mailer,
    )

    assert result.status_changed is True
    assert result.application.status == "reviewed"
    assert result.application.notes == "Strong profile"
    assert result.application.notification_read is False

    history = history_for(db, world.application.id)
    assert [(h.status, h.notes) for h in history] == [("reviewed", "Strong profile")]

    notifications = notifications_for(db, world.seeker.id)
    assert len(notifications) == 1
    notification = notifications[0]
    assert notification.type == "application_status"
    assert notification.title == "Application Status Update: Your application has been reviewed"
    assert notification.message == (
        'Your application for Backend Engineer at Acme Corp has been updated to "reviewed".'
    )
    assert notification.related_id == world.application.id
    assert notification.read is False

    assert len(mailer.sent) == 1
    email = mailer.sent[0]
    assert email.to == "jane@example.com"
    assert email.subject == "Application Update: Your application has been reviewed for Backend Engineer"
    assert "Strong profile" in email.html
    assert result.email.status == EmailStatus.SENT


def test_same_status_does_not_fan_out(db, world, mailer):
    result = update_application(
        db,
        world.application.id,
        {"status": "pending", "notes": "Will look next week"},
        caller_for(world.acme_owner),
        mailer,
    )

    assert result.status_changed is False
    assert result.application.notes == "Will look next week"
    assert history_for(db, world.application.id) == []
    assert notifications_for(db, world.seeker.id) == []
    assert mailer.sent == []
    assert result.email is None


def test_history_grows_by_one_per_change_in_order(db, world, mailer):
    company = caller_for(world.acme_owner)
    for status in ("reviewed", "interview", "hired"):
        update_application(db, world.application.id, {"status": status}, company, mailer)

    history = history_for(db, world.application.id)
    assert [h.status for h in history] == ["reviewed", "interview", "hired"]
    dates = [h.date for h in history]
    assert dates == sorted(dates)
    assert history[-1].status == db.get(Application, world.application.id).status

    assert len(notifications_for(db, world.seeker.id)) == 3
    assert "The employer will contact you soon with next steps." in mailer.sent[-1].html


def test_foreign_company_is_rejected_without_side_effects(db, world, mailer):
    with pytest.raises(AuthorizationError):
        update_application(
            db,
            world.application.id,
            {"status": "rejected"},
            caller_for(world.globex_owner),
            mailer,
        )

    db.expire_all()
    assert db.get(Application, world.application.id).status == "pending"
    assert history_for(db, world.application.id) == []
    assert notifications_for(db, world.seeker.id) == []
    assert mailer.sent == []


def test_unapproved_company_is_rejected(db, world, mailer):
    with pytest.raises(AuthorizationError):
        update_application(
            db,
            world.application.id,
            {"status": "reviewed"},
            caller_for(world.pending_owner),
            mailer,
        )


def test_applicant_cannot_change_status(db, world, mailer):
    """Only notification_read is writable by the applicant; status is dropped."""
    result = update_application(
        db,
        world.application.id,
        {"status": "hired", "notes": "hire me", "notification_read": True},
        caller_for(world.seeker),
        mailer,
    )

    assert result.status_changed is False
    assert result.application.status == "pending"
    assert result.application.notes is None
    assert result.application.notification_read is True
    assert history_for(db, world.application.id) == []
    assert mailer.sent == []


def test_other_applicant_is_rejected(db, world, mailer):
    with pytest.raises(AuthorizationError):
        update_application(
            db,
            world.application.id,
            {"notification_read": True},
            caller_for(world.other_seeker),
            mailer,
        )


def test_company_cannot_edit_applicant_fields(db, world, mailer):
    result = update_application(
        db,
        world.application.id,
        {"email": "attacker@example.com", "name": "Someone Else", "notes": "ok"},
        caller_for(world.acme_owner),
        mailer,
    )

    assert result.application.email == "jane@example.com"
    assert result.application.name == "Jane Doe"
    assert result.application.notes == "ok"


def test_admin_may_change_status_of_any_application(db, world, mailer):
    result = update_application(
        db,
        world.application.id,
        {"status": "shortlisted", "name": "Jane A. Doe"},
        caller_for(world.admin),
        mailer,
    )

    assert result.application.status == "shortlisted"
    assert result.application.name == "Jane A. Doe"
    assert [h.status for h in history_for(db, world.application.id)] == ["shortlisted"]


def test_invalid_status_is_rejected(db, world, mailer):
    with pytest.raises(ValidationError) as exc_info:
        update_application(
            db,
            world.application.id,
            {"status": "promoted"},
            caller_for(world.acme_owner),
            mailer,
        )

    assert "promoted" in exc_info.value.message
    assert history_for(db, world.application.id) == []


def test_empty_update_is_rejected(db, world, mailer):
    with pytest.raises(ValidationError) as exc_info:
        update_application(db, world.application.id, {}, caller_for(world.acme_owner), mailer)
    assert exc_info.value.message == "Please provide data to update"


def test_missing_application(db, world, mailer):
    with pytest.raises(NotFoundError):
        update_application(db, 9999, {"status": "reviewed"}, caller_for(world.admin), mailer)


def test_email_failure_does_not_undo_status_change(db, world):
    failing = RecordingMailer(outcome=EmailOutcome.failed("provider rejected the request"))

    result = update_application(
        db,
        world.application.id,
        {"status": "rejected"},
        caller_for(world.acme_owner),
        failing,
    )

    assert result.email.status == EmailStatus.FAILED
    db.expire_all()
    assert db.get(Application, world.application.id).status == "rejected"
    assert [h.status for h in history_for(db, world.application.id)] == ["rejected"]
    assert len(notifications_for(db, world.seeker.id)) == 1


def test_email_exception_is_contained(db, world):
    exploding = RecordingMailer(error=RuntimeError("connection reset by provider"))

    result = update_application(
        db,
        world.application.id,
        {"status": "interview"},
        caller_for(world.acme_owner),
        exploding,
    )

    assert result.email.status == EmailStatus.FAILED
    assert result.application.status == "interview"


def test_storage_failure_persists_nothing(db, world, mailer, monkeypatch):
    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "commit", broken_commit)

    with pytest.raises(StorageError):
        update_application(
            db,
            world.application.id,
            {"status": "reviewed"},
            caller_for(world.acme_owner),
            mailer,
        )

    monkeypatch.undo()
    db.expire_all()
    assert db.get(Application, world.application.id).status == "pending"
    assert history_for(db, world.application.id) == []
    assert notifications_for(db, world.seeker.id) == []
    assert mailer.sent == []


def test_applicant_read_marks_notification_seen(db, world):
    application = get_application(db, world.application.id, caller_for(world.seeker))
    assert application.notification_read is True


def test_company_read_leaves_notification_flag(db, world):
    application = get_application(db, world.application.id, caller_for(world.acme_owner))
    assert application.notification_read is False


def test_status_messages():
    assert status_message("hired") == "Congratulations! You've been hired"
    assert status_message("accepted") == "Your application status has been updated to accepted"


def test_scoped_changes_by_role():
    body = {"status": "hired", "notes": "n", "notification_read": True, "role": "admin", "user_id": 5}
    assert scoped_changes("company", body) == {"status": "hired", "notes": "n"}
    assert scoped_changes("jobseeker", body) == {"notification_read": True}
    assert scoped_changes("unknown", body) == {}
    assert "role" not in scoped_changes("admin", body)


def test_admin_clears_optional_field_with_null(db, world, mailer):
    admin = caller_for(world.admin)
    update_application(db, world.application.id, {"notes": "Strong referral"}, admin, mailer)

    result = update_application(db, world.application.id, {"notes": None, "cover_letter": None}, admin, mailer)

    assert result.status_changed is False
    db.expire_all()
    application = db.get(Application, world.application.id)
    assert application.notes is None
    assert application.cover_letter is None


def test_null_for_required_field_is_rejected(db, world, mailer):
    with pytest.raises(ValidationError) as exc_info:
        update_application(
            db,
            world.application.id,
            {"status": None, "email": None},
            caller_for(world.admin),
            mailer,
        )

    assert exc_info.value.message == "These fields cannot be empty: email, status"
    db.expire_all()
    application = db.get(Application, world.application.id)
    assert application.status == "pending"
    assert application.email
