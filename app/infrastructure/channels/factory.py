"""Notification channel factory."""

import logging

from app.domain.models.company_settings import CompanySettings
from app.infrastructure.channels.base import ChannelError, NotificationChannel
from app.infrastructure.channels.sendgrid_channel import SendGridEmailChannel
from app.infrastructure.channels.twilio_channel import TwilioSmsChannel

logger = logging.getLogger(__name__)


class ChannelFactory:
    """Creates channel instances based on company configuration.

    A company's own Twilio credentials are used when enabled and complete;
    otherwise the global credentials from settings apply.
    """

    def get_channel(self, channel: str, company_settings: CompanySettings) -> NotificationChannel:
        """Get a channel for a company.

        Args:
            channel: "sms" or "email"
            company_settings: Parsed company settings blob

        Returns:
            Channel instance

        Raises:
            ChannelError: If the channel is unknown or not configured
        """
        if channel == "sms":
            return self._sms_channel(company_settings)
        if channel == "email":
            return SendGridEmailChannel()
        raise ChannelError(f"Unknown channel: {channel}")

    def _sms_channel(self, company_settings: CompanySettings) -> NotificationChannel:
        twilio = company_settings.twilio_settings
        if twilio.enabled:
            if twilio.account_sid and twilio.auth_token and twilio.phone_number:
                return TwilioSmsChannel(
                    account_sid=twilio.account_sid,
                    auth_token=twilio.auth_token,
                    from_number=twilio.phone_number,
                )
            logger.warning("Company Twilio settings enabled but incomplete, using global credentials")
        return TwilioSmsChannel()


_channel_factory: ChannelFactory | None = None


def get_channel_factory() -> ChannelFactory:
    """Get or create the channel factory singleton."""
    global _channel_factory
    if _channel_factory is None:
        _channel_factory = ChannelFactory()
    return _channel_factory
