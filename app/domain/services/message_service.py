"""Message center service: SMS threads, call logs, search and stats."""

import asyncio
import logging
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timezones import to_naive_utc
from app.domain import analytics
from app.domain.errors import EntityNotFoundError, EntityValidationError, NotificationError
from app.domain.models.company_settings import CompanySettings
from app.domain.services.business_hours_service import is_within_business_hours
from app.domain.services.company_service import load_company_settings
from app.domain.services.contact_resolver import ContactAssociationResolver
from app.infrastructure.channels.base import ChannelError
from app.infrastructure.channels.factory import ChannelFactory
from app.persistence.models.message import CallLog, Message
from app.persistence.repositories.message_repository import CallLogRepository, MessageRepository
from app.settings import settings

logger = logging.getLogger(__name__)

AUTO_RESPONDER = "Auto Responder"
AUTO_REPLY_TEXT = (
    "Thank you for your message. The front desk is currently closed. "
    "We will get back to you during business hours ({start} - {end})."
)

MESSAGE_SEARCH_FIELDS = ("phone_number", "resident_name", "unit_number", "content")
CALL_SEARCH_FIELDS = ("phone_number", "resident_name", "unit_number", "summary", "ai_summary")
CALL_FIELDS = (
    "phone_number",
    "status",
    "duration",
    "summary",
    "ai_summary",
    "transcription",
    "external_call_id",
    "is_read",
    "timestamp",
)
CALL_STATUSES = ("answered", "missed")


def _matches(entity: Any, fields: tuple[str, ...], needle: str) -> bool:
    return any(needle in (getattr(entity, field) or "").lower() for field in fields)


class MessageService:
    """Service for resident SMS conversations and AI-summarized call logs."""

    def __init__(self, session: AsyncSession, channel_factory: ChannelFactory | None = None) -> None:
        self.session = session
        self.channel_factory = channel_factory
        self.message_repo = MessageRepository(session)
        self.call_repo = CallLogRepository(session)
        self.resolver = ContactAssociationResolver(session)

    # Messages

    async def create_message(self, company_id: int, data: dict[str, Any]) -> Message:
        """Store a message, attaching the resident snapshot for its phone number."""
        if not (data.get("phone_number") or "").strip():
            raise EntityValidationError({"phone_number": "Phone number is required"})
        if not (data.get("content") or "").strip():
            raise EntityValidationError({"content": "Message content is required"})
        if data.get("direction") not in ("incoming", "outgoing"):
            raise EntityValidationError({"direction": "Direction must be incoming or outgoing"})

        values = dict(data)
        snapshot = await self.resolver.resolve(company_id, values["phone_number"])
        if snapshot is not None:
            values.update(snapshot.association_fields())
        values["timestamp"] = to_naive_utc(values.get("timestamp") or datetime.utcnow())
        values.setdefault("type", "sms")
        return await self.message_repo.create(company_id, **values)

    async def list_messages(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Message]:
        return await self.message_repo.list_by_company(
            company_id,
            start=to_naive_utc(start) if start else None,
            end=to_naive_utc(end) if end else None,
        )

    async def get_thread(self, company_id: int, phone_number: str) -> list[Message]:
        return await self.message_repo.get_thread(company_id, phone_number)

    async def mark_read(self, company_id: int, message_id: int) -> Message:
        message = await self.message_repo.update(
            company_id, message_id, is_read=True, read_at=datetime.utcnow()
        )
        if message is None:
            raise EntityNotFoundError("message", message_id)
        return message

    async def mark_all_read(self, company_id: int, phone_number: str | None = None) -> int:
        """Mark unread incoming messages as read; returns how many changed."""
        unread = await self.message_repo.list_unread_incoming(company_id, phone_number)
        now = datetime.utcnow()
        for message in unread:
            message.is_read = True
            message.read_at = now
            message.updated_at = now
        if unread:
            await self.session.commit()
        return len(unread)

    async def log_incoming_sms(
        self,
        company_id: int,
        from_number: str,
        body: str,
        external_sid: str | None = None,
    ) -> Message:
        """Store an SMS received from a resident or guest."""
        return await self.create_message(
            company_id,
            {
                "phone_number": from_number,
                "content": body,
                "direction": "incoming",
                "type": "sms",
                "status": "received",
                "is_read": False,
                "external_sid": external_sid,
            },
        )

    async def log_outgoing_sms(
        self,
        company_id: int,
        to_number: str,
        body: str,
        sent_by: str | None = None,
        external_sid: str | None = None,
        status: str = "sent",
        reply_to: int | None = None,
    ) -> Message:
        """Store an SMS sent by the front desk; outgoing messages are born read."""
        return await self.create_message(
            company_id,
            {
                "phone_number": to_number,
                "content": body,
                "direction": "outgoing",
                "type": "sms",
                "status": status,
                "is_read": True,
                "external_sid": external_sid,
                "sent_by": sent_by,
                "reply_to": reply_to,
            },
        )

    async def send_reply(
        self,
        company_id: int,
        to_number: str,
        body: str,
        sent_by: str | None = None,
        reply_to: int | None = None,
        company_settings: CompanySettings | None = None,
    ) -> Message:
        """Send an SMS and log it as outgoing.

        Nothing is logged when the send fails.

        Raises:
            EntityValidationError: If the number or body is empty
            NotificationError: If the SMS channel fails or times out
        """
        errors = {}
        if not (to_number or "").strip():
            errors["phone_number"] = "Phone number is required"
        if not (body or "").strip():
            errors["content"] = "Message content is required"
        if errors:
            raise EntityValidationError(errors)
        if reply_to is not None and await self.message_repo.get_by_id(company_id, reply_to) is None:
            raise EntityNotFoundError("message", reply_to)

        if company_settings is None:
            company_settings = await load_company_settings(self.session, company_id)

        try:
            channel = self.channel_factory.get_channel("sms", company_settings)
            receipt = await asyncio.wait_for(
                channel.send(to_number, body),
                timeout=settings.notification_channel_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error("SMS reply timed out", extra={"company_id": company_id, "to": to_number})
            raise NotificationError("channel_error", "sms channel timed out") from e
        except ChannelError as e:
            logger.error(f"SMS reply failed: {e}", extra={"company_id": company_id, "to": to_number})
            raise NotificationError("channel_error", str(e)) from e

        return await self.log_outgoing_sms(
            company_id,
            to_number,
            body,
            sent_by=sent_by,
            external_sid=receipt.message_id,
            status=receipt.status or "sent",
            reply_to=reply_to,
        )

    async def handle_inbound_sms(
        self,
        company_id: int,
        from_number: str,
        body: str,
        external_sid: str | None = None,
    ) -> Message:
        """Store an inbound SMS and send the after-hours auto-reply if enabled.

        A failed auto-reply is logged; the inbound message stays stored.
        """
        message = await self.log_incoming_sms(company_id, from_number, body, external_sid)

        company_settings = await load_company_settings(self.session, company_id)
        hours = company_settings.business_hours
        if not company_settings.automations.auto_responder or self.channel_factory is None:
            return message
        if is_within_business_hours(hours.start, hours.end, company_settings.timezone):
            return message

        try:
            await self.send_reply(
                company_id,
                from_number,
                AUTO_REPLY_TEXT.format(start=hours.start, end=hours.end),
                sent_by=AUTO_RESPONDER,
                reply_to=message.id,
                company_settings=company_settings,
            )
        except NotificationError as e:
            logger.error(
                f"Auto-reply failed: {e}",
                extra={"company_id": company_id, "message_id": message.id},
            )
        return message

    # Call logs

    async def create_call_log(self, company_id: int, data: dict[str, Any]) -> CallLog:
        """Store a call log, attaching the resident snapshot for its number."""
        values = {key: value for key, value in data.items() if key in CALL_FIELDS}
        if not (values.get("phone_number") or "").strip():
            raise EntityValidationError({"phone_number": "Phone number is required"})
        values["status"] = values.get("status") or "answered"
        if values["status"] not in CALL_STATUSES:
            raise EntityValidationError({"status": "Status must be answered or missed"})
        if values.get("duration") is not None:
            values["duration"] = str(values["duration"])
        values["timestamp"] = to_naive_utc(values.get("timestamp") or datetime.utcnow())

        snapshot = await self.resolver.resolve(company_id, values["phone_number"])
        if snapshot is not None:
            values.update(snapshot.association_fields())
        return await self.call_repo.create(company_id, **values)

    async def log_incoming_call(self, company_id: int, payload: dict[str, Any]) -> CallLog:
        """Store a call reported by the AI call-summary provider.

        Summary, AI summary and transcription are stored exactly as received.
        """
        return await self.create_call_log(
            company_id,
            {
                "phone_number": payload.get("from"),
                "status": payload.get("status") or "answered",
                "duration": payload.get("duration"),
                "timestamp": payload.get("timestamp"),
                "summary": payload.get("summary"),
                "ai_summary": payload.get("ai_summary"),
                "transcription": payload.get("transcription"),
                "external_call_id": payload.get("call_id"),
                "is_read": False,
            },
        )

    async def list_calls(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[CallLog]:
        return await self.call_repo.list_by_company(
            company_id,
            start=to_naive_utc(start) if start else None,
            end=to_naive_utc(end) if end else None,
        )

    async def update_call(self, company_id: int, call_id: int, data: dict[str, Any]) -> CallLog:
        updates = {key: value for key, value in data.items() if key in CALL_FIELDS}
        if "status" in updates and updates["status"] not in CALL_STATUSES:
            raise EntityValidationError({"status": "Status must be answered or missed"})
        call = await self.call_repo.update(company_id, call_id, **updates)
        if call is None:
            raise EntityNotFoundError("call", call_id)
        return call

    # Search and stats

    async def search(self, company_id: int, term: str) -> dict[str, Any]:
        """Case-insensitive search over messages and call logs."""
        needle = (term or "").strip().lower()
        messages = await self.message_repo.list_by_company(company_id)
        calls = await self.call_repo.list_by_company(company_id)
        if needle:
            messages = [m for m in messages if _matches(m, MESSAGE_SEARCH_FIELDS, needle)]
            calls = [c for c in calls if _matches(c, CALL_SEARCH_FIELDS, needle)]
        return {"messages": messages, "calls": calls, "total": len(messages) + len(calls)}

    async def get_message_stats(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, Any]:
        return analytics.message_stats(await self.list_messages(company_id, start, end))

    async def get_call_stats(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, Any]:
        return analytics.call_stats(await self.list_calls(company_id, start, end))
