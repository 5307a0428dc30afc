"""Twilio SMS channel implementation."""

import asyncio
import logging
from typing import Any

from twilio.base.exceptions import TwilioException
from twilio.http.http_client import TwilioHttpClient
from twilio.request_validator import RequestValidator
from twilio.rest import Client as TwilioClient

from app.infrastructure.channels.base import ChannelError, ChannelReceipt, NotificationChannel
from app.settings import settings

logger = logging.getLogger(__name__)


class TwilioSmsChannel(NotificationChannel):
    """Twilio SMS channel."""

    name = "sms"

    def __init__(
        self,
        account_sid: str | None = None,
        auth_token: str | None = None,
        from_number: str | None = None,
    ) -> None:
        """Initialize Twilio client.

        Args:
            account_sid: Twilio account SID (defaults to settings)
            auth_token: Twilio auth token (defaults to settings)
            from_number: Sending number (defaults to settings)
        """
        self.account_sid = account_sid or settings.twilio_account_sid
        self.auth_token = auth_token or settings.twilio_auth_token
        self.from_number = from_number or settings.twilio_from_number

        if not self.account_sid or not self.auth_token:
            raise ChannelError("Twilio account SID and auth token must be provided")
        if not self.from_number:
            raise ChannelError("Twilio sending number must be provided")

        self.client = TwilioClient(
            self.account_sid,
            self.auth_token,
            http_client=TwilioHttpClient(timeout=settings.notification_channel_timeout_seconds),
        )

    async def send(self, to: str, body: str, subject: str | None = None) -> ChannelReceipt:
        """Send an SMS message via Twilio.

        The Twilio client is blocking, so the request runs in a worker thread.
        Its HTTP timeout matches the dispatch timeout; a request that times out
        may still have reached Twilio.
        """
        try:
            message = await asyncio.to_thread(
                self.client.messages.create,
                to=to,
                from_=self.from_number,
                body=body,
            )
        except (TwilioException, OSError) as e:
            # OSError covers connection failures raised by requests
            raise ChannelError(f"Twilio SMS send failed: {str(e)}") from e

        logger.info("SMS sent", extra={"to": to, "message_sid": message.sid, "status": message.status})
        return ChannelReceipt(
            message_id=message.sid,
            status=message.status,
            channel=self.name,
            to=to,
            provider="twilio",
            raw_response={
                "sid": message.sid,
                "status": message.status,
                "date_created": message.date_created.isoformat() if message.date_created else None,
            },
        )

    def validate_webhook_signature(self, url: str, params: dict[str, Any], signature: str) -> bool:
        """Validate the X-Twilio-Signature header of an inbound webhook."""
        validator = RequestValidator(self.auth_token)
        return validator.validate(url, params, signature)
