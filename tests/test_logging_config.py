"""
Tests for log redaction of request data.
"""
import logging

from jobportal.core.logging_config import sanitize_log_data
from jobportal.services import job_service

from conftest import caller_for


def test_secret_keys_are_redacted():
    data = {"name": "Ada", "password": "hunter22", "resetToken": "abc", "RESEND_API_KEY": "re_123"}

    sanitized = sanitize_log_data(data)

    assert sanitized == {
        "name": "Ada",
        "password": "***REDACTED***",
        "resetToken": "***REDACTED***",
        "RESEND_API_KEY": "***REDACTED***",
    }
    assert data["password"] == "hunter22"


def test_job_update_logs_changes(db, world, caplog):
    caplog.set_level(logging.INFO, logger="jobportal.services.job_service")

    job_service.update_job(db, caller_for(world.acme_owner), world.acme_job.id, {"location": "Lisbon"})

    assert "'location': 'Lisbon'" in caplog.text
