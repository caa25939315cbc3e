"""
Transactional email via Resend.

Email is a best-effort side channel: ``EmailSender.send`` is attempted once,
never retries, and never raises. Callers get an ``EmailOutcome`` instead so
the "sent / skipped / failed" result stays visible in code and logs without
being able to fail the primary operation.
"""
import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import resend

from jobportal.core.config import RESEND_API_KEY

logger = logging.getLogger(__name__)


class EmailStatus(str, enum.Enum):
    SKIPPED = "skipped"
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class EmailOutcome:
    status: EmailStatus
    reason: Optional[str] = None
    message_id: Optional[str] = None

    @classmethod
    def skipped(cls, reason: str) -> "EmailOutcome":
        return cls(EmailStatus.SKIPPED, reason=reason)

    @classmethod
    def sent(cls, message_id: Optional[str] = None) -> "EmailOutcome":
        return cls(EmailStatus.SENT, message_id=message_id)

    @classmethod
    def failed(cls, reason: str) -> "EmailOutcome":
        return cls(EmailStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == EmailStatus.SENT


@dataclass(frozen=True)
class EmailMessage:
    sender: str
    to: Union[str, List[str]]
    subject: str
    html: str

    def to_params(self) -> dict:
        return {
            "from": self.sender,
            "to": self.to if isinstance(self.to, list) else [self.to],
            "subject": self.subject,
            "html": self.html,
        }


class EmailSender:
    """Thin wrapper around ``resend.Emails.send``."""

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def send(self, message: EmailMessage) -> EmailOutcome:
        if not self.enabled:
            logger.debug(f"Email skipped (no provider credentials): subject={message.subject!r}")
            return EmailOutcome.skipped("Email provider not configured")

        try:
            resend.api_key = self.api_key
            response = resend.Emails.send(message.to_params())
        except Exception as e:
            # Best-effort channel: record and move on
            logger.error(f"Error sending email to {message.to}: {e}", exc_info=True)
            return EmailOutcome.failed(str(e))

        message_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        logger.info(f"Email sent: to={message.to}, subject={message.subject!r}, id={message_id}")
        return EmailOutcome.sent(message_id)


_default_sender: Optional[EmailSender] = None


def get_email_sender() -> EmailSender:
    """FastAPI dependency returning the process-wide sender."""
    global _default_sender
    if _default_sender is None:
        if not RESEND_API_KEY:
            logger.warning("RESEND_API_KEY not configured - outgoing email disabled")
        _default_sender = EmailSender(RESEND_API_KEY)
    return _default_sender
