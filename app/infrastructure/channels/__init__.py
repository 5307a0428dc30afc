"""Outbound notification channels (Twilio SMS, SendGrid email)."""

from app.infrastructure.channels.base import ChannelError, ChannelReceipt, NotificationChannel
from app.infrastructure.channels.factory import ChannelFactory, get_channel_factory

__all__ = [
    "ChannelError",
    "ChannelFactory",
    "ChannelReceipt",
    "NotificationChannel",
    "get_channel_factory",
]
