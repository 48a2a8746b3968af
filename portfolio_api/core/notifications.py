"""
Operator notifications for new contact submissions.

Mail goes out through an HTTP mail relay (SendGrid v3 ``mail/send`` payload).
Sending is best-effort: ``MailNotifier.notify`` never raises, it reports the
outcome as a ``NotificationResult`` for the caller to surface.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from portfolio_api.core.config import Settings
from portfolio_api.models.contact import ContactSubmission

logger = logging.getLogger(__name__)


class NotificationResult(BaseModel):
    """Outcome of a notification attempt"""
    sent: bool
    error: Optional[str] = None


def build_notification_body(submission: ContactSubmission) -> str:
    return "\n".join([
        "New contact form submission",
        "",
        f"Name: {submission.name}",
        f"Email: {submission.email}",
        f"Subject: {submission.subject}",
        f"Submitted at: {submission.createdAt.isoformat()}",
        f"IP address: {submission.ipAddress or 'unknown'}",
        f"User agent: {submission.userAgent or 'unknown'}",
        "",
        "Message:",
        submission.message,
    ])


class MailNotifier:
    def __init__(self, api_url: str, api_key: Optional[str], notify_email: Optional[str],
                 from_email: Optional[str] = None, timeout: float = 15.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_url = api_url
        self.api_key = api_key
        self.notify_email = notify_email
        self.from_email = from_email or notify_email
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailNotifier":
        return cls(
            api_url=settings.mail_api_url,
            api_key=settings.mail_api_key,
            notify_email=settings.notify_email,
            from_email=settings.mail_from,
            timeout=settings.mail_timeout,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.notify_email)

    def build_payload(self, submission: ContactSubmission) -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": self.notify_email}]}],
            "from": {"email": self.from_email},
            "reply_to": {"email": submission.email, "name": submission.name},
            "subject": f"New contact form submission: {submission.subject}",
            "content": [{"type": "text/plain", "value": build_notification_body(submission)}],
        }

    async def notify(self, submission: ContactSubmission) -> NotificationResult:
        if not self.configured:
            logger.warning("Mail relay not configured, skipping notification")
            return NotificationResult(sent=False, error="not configured")

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json=self.build_payload(submission),
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    timeout=self.timeout
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ Notification for contact {submission.id} failed: {str(e)}")
            return NotificationResult(sent=False, error=str(e))

        if not response.is_success:
            logger.error(
                f"❌ Mail relay rejected notification for contact {submission.id}: "
                f"{response.status_code} {response.text[:200]}"
            )
            return NotificationResult(sent=False, error=f"mail relay returned {response.status_code}")

        logger.info(f"📧 Notification sent for contact {submission.id}")
        return NotificationResult(sent=True)
