"""SendGrid email channel implementation."""

import asyncio
import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Email, Mail, To

from app.infrastructure.channels.base import ChannelError, ChannelReceipt, NotificationChannel
from app.settings import settings

logger = logging.getLogger(__name__)


class SendGridEmailChannel(NotificationChannel):
    """Email channel backed by SendGrid."""

    name = "email"

    def __init__(self, api_key: str | None = None, from_email: str | None = None):
        """Initialize SendGrid client.

        Args:
            api_key: SendGrid API key (defaults to settings.sendgrid_api_key)
            from_email: Sender address (defaults to settings.sendgrid_from_email)
        """
        self.api_key = api_key or settings.sendgrid_api_key
        self.from_email = from_email or settings.sendgrid_from_email

        if not self.api_key:
            raise ChannelError("SendGrid API key must be provided or set in SENDGRID_API_KEY")
        self.client = SendGridAPIClient(self.api_key)

    async def send(self, to: str, body: str, subject: str | None = None) -> ChannelReceipt:
        """Send a plain-text email via SendGrid.

        The request runs in a worker thread that keeps going if the caller
        stops waiting, so a timed-out send may still be delivered.
        """
        message = Mail(
            from_email=Email(self.from_email),
            to_emails=To(to),
            subject=subject or "",
            plain_text_content=body,
        )

        try:
            response = await asyncio.to_thread(self.client.send, message)
        except Exception as e:
            # python-http-client raises its own HTTPError hierarchy
            raise ChannelError(f"SendGrid email send failed: {str(e)}") from e

        if response.status_code >= 400:
            raise ChannelError(f"SendGrid email send failed with status {response.status_code}")

        logger.info(
            "Email sent",
            extra={"to": to, "subject": subject, "status_code": response.status_code},
        )
        return ChannelReceipt(
            message_id=response.headers.get("X-Message-Id"),
            status="accepted",
            channel=self.name,
            to=to,
            provider="sendgrid",
            raw_response={"status_code": response.status_code},
        )
