"""Tests for the provider channels."""

from unittest.mock import MagicMock

import pytest
from twilio.base.exceptions import TwilioException

from app.infrastructure.channels.base import ChannelError
from app.infrastructure.channels.twilio_channel import TwilioSmsChannel


def _channel():
    channel = TwilioSmsChannel(account_sid="AC123", auth_token="token", from_number="+15550001111")
    channel.client = MagicMock()
    return channel


@pytest.mark.asyncio
async def test_twilio_connection_failure_is_channel_error():
    channel = _channel()
    channel.client.messages.create.side_effect = ConnectionError("connection reset")

    with pytest.raises(ChannelError, match="connection reset"):
        await channel.send("+14165550199", "Your package is here.")


@pytest.mark.asyncio
async def test_twilio_api_error_is_channel_error():
    channel = _channel()
    channel.client.messages.create.side_effect = TwilioException("invalid number")

    with pytest.raises(ChannelError, match="invalid number"):
        await channel.send("+14165550199", "Your package is here.")

