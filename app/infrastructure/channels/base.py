"""Base notification channel interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class ChannelError(Exception):
    """Raised when an external channel rejects or fails a send."""


@dataclass
class ChannelReceipt:
    """Result of a channel send operation."""

    message_id: str | None
    status: str
    channel: str
    to: str
    provider: str
    raw_response: dict | None = None


class NotificationChannel(ABC):
    """Protocol for outbound channel implementations (SMS, email)."""

    name: str

    @abstractmethod
    async def send(self, to: str, body: str, subject: str | None = None) -> ChannelReceipt:
        """Send a message.

        Args:
            to: Recipient phone number (E.164) or email address
            body: Message body
            subject: Email subject; ignored by SMS channels

        Returns:
            ChannelReceipt with provider message ID and status

        Raises:
            ChannelError: If the provider rejects the message
        """
        pass
