"""Notification dispatch: compose from a template, send, record on the entity.

Each request moves through composed -> sent -> recorded. A failed send skips
the recording step and leaves the entity untouched. There is no retry and no
deduplication: two identical calls send two messages.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.errors import NotificationError
from app.domain.models.company_settings import CompanySettings
from app.domain.models.snapshots import ContactSnapshot
from app.domain.notifications.catalog import EMAIL, SMS, MessageTemplate, get_template
from app.domain.notifications.renderer import (
    ENTITY_KINDS,
    default_recipient,
    entity_tokens,
    render_text,
)
from app.infrastructure.channels.base import ChannelError, ChannelReceipt
from app.infrastructure.channels.factory import ChannelFactory
from app.persistence.repositories.base import BaseRepository
from app.persistence.repositories.booking_repository import BookingRepository
from app.persistence.repositories.company_repository import CompanyRepository
from app.persistence.repositories.issue_repository import ActivityLogRepository
from app.persistence.repositories.package_repository import PackageRepository
from app.persistence.repositories.visitor_repository import (
    ParkingRequestRepository,
    VisitorRepository,
)
from app.settings import settings

logger = logging.getLogger(__name__)

# Entity kinds that carry notification audit columns
RECORDED_KINDS = ("package", "visitor", "parking_request")


@dataclass(frozen=True)
class EntityRef:
    """Reference to the entity a notification is about."""

    kind: str  # package, visitor, parking_request, booking
    id: int


@dataclass
class ComposedMessage:
    """A rendered notification ready to hand to a channel."""

    ref: EntityRef | None
    template_key: str
    channel: str
    to: str | None
    recipient_name: str | None
    subject: str | None
    body: str


@dataclass
class DispatchResult:
    """Outcome of a single dispatch."""

    success: bool
    ref: EntityRef | None = None
    channel: str | None = None
    to: str | None = None
    content: str | None = None
    message_id: str | None = None
    error: str | None = None
    reason: str | None = None


@dataclass
class BulkDispatchResult:
    """Outcome of a bulk dispatch."""

    requested: int
    succeeded: int
    failed: int
    results: list[DispatchResult] = field(default_factory=list)


class NotificationDispatcher:
    """Sends templated notifications about packages, visitors, parking requests and bookings."""

    def __init__(self, session: AsyncSession, channel_factory: ChannelFactory) -> None:
        self.session = session
        self.channel_factory = channel_factory
        self.company_repo = CompanyRepository(session)
        self.activity_repo = ActivityLogRepository(session)
        self._repos: dict[str, BaseRepository] = {
            "package": PackageRepository(session),
            "visitor": VisitorRepository(session),
            "parking_request": ParkingRequestRepository(session),
            "booking": BookingRepository(session),
        }

    async def dispatch(
        self,
        company_id: int,
        ref: EntityRef,
        template_key: str,
        channel: str,
        recipient: ContactSnapshot | None = None,
        body: str | None = None,
        subject: str | None = None,
        sent_by: str | None = None,
    ) -> DispatchResult:
        """Compose, send and record one notification.

        Args:
            company_id: Company ID
            ref: Entity the notification is about
            template_key: Catalog key
            channel: "sms" or "email"
            recipient: Override of the entity's own contact
            body: Message body for custom templates (general announcement)
            subject: Email subject for custom templates
            sent_by: Staff email recorded in the activity log

        Returns:
            DispatchResult; failures carry ``error`` and ``reason`` and leave
            the entity unmodified
        """
        company_settings = await self._company_settings(company_id)
        try:
            composed = await self._compose(
                company_id, company_settings, ref, template_key, channel, recipient, body, subject
            )
        except NotificationError as e:
            logger.warning(
                f"Notification not composed: {e}",
                extra={"template_key": template_key, "channel": channel, "entity": ref.kind, "entity_id": ref.id},
            )
            return DispatchResult(success=False, ref=ref, channel=channel, error=str(e), reason=e.reason)

        outcome = await self._send(composed, company_settings)
        if isinstance(outcome, DispatchResult):
            return outcome

        record_error = await self._record(company_id, composed, outcome, sent_by)
        return self._success(composed, outcome, record_error)

    async def dispatch_many(
        self,
        company_id: int,
        refs: list[EntityRef],
        template_key: str,
        channel: str,
        body: str | None = None,
        subject: str | None = None,
        sent_by: str | None = None,
    ) -> BulkDispatchResult:
        """Dispatch the same template about several entities.

        Messages are composed one at a time, sent concurrently, then recorded
        one at a time. One failure does not stop the others.
        """
        company_settings = await self._company_settings(company_id)

        results: list[DispatchResult | None] = [None] * len(refs)
        composed_messages: list[tuple[int, ComposedMessage]] = []
        for index, ref in enumerate(refs):
            try:
                composed = await self._compose(
                    company_id, company_settings, ref, template_key, channel, None, body, subject
                )
            except NotificationError as e:
                results[index] = DispatchResult(
                    success=False, ref=ref, channel=channel, error=str(e), reason=e.reason
                )
                continue
            composed_messages.append((index, composed))

        outcomes = await asyncio.gather(
            *(self._send(composed, company_settings) for _, composed in composed_messages),
            return_exceptions=True,
        )

        for (index, composed), outcome in zip(composed_messages, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    f"Notification send failed: {outcome!r}",
                    extra=self._log_extra(composed),
                    exc_info=outcome,
                )
                results[index] = self._failure(composed, f"{composed.channel} channel failed: {outcome}")
                continue
            if isinstance(outcome, DispatchResult):
                results[index] = outcome
                continue
            record_error = await self._record(company_id, composed, outcome, sent_by)
            results[index] = self._success(composed, outcome, record_error)

        succeeded = sum(1 for result in results if result.success)
        logger.info(
            "Bulk notification dispatch finished",
            extra={
                "template_key": template_key,
                "channel": channel,
                "requested": len(refs),
                "succeeded": succeeded,
            },
        )
        return BulkDispatchResult(
            requested=len(refs),
            succeeded=succeeded,
            failed=len(refs) - succeeded,
            results=results,
        )

    async def preview(
        self,
        company_id: int,
        template_key: str,
        channel: str,
        ref: EntityRef | None = None,
        recipient: ContactSnapshot | None = None,
        body: str | None = None,
        subject: str | None = None,
    ) -> ComposedMessage:
        """Compose a notification without sending it.

        Raises:
            NotificationError: If the template, channel or entity is invalid
        """
        company_settings = await self._company_settings(company_id)
        return await self._compose(
            company_id,
            company_settings,
            ref,
            template_key,
            channel,
            recipient,
            body,
            subject,
            require_address=False,
        )

    async def _company_settings(self, company_id: int) -> CompanySettings:
        company = await self.company_repo.get_by_id(None, company_id)
        return CompanySettings.from_blob(company.settings if company else None)

    async def _compose(
        self,
        company_id: int,
        company_settings: CompanySettings,
        ref: EntityRef | None,
        template_key: str,
        channel: str,
        recipient: ContactSnapshot | None,
        body: str | None,
        subject: str | None,
        require_address: bool = True,
    ) -> ComposedMessage:
        template = get_template(template_key)
        if template is None:
            raise NotificationError("template_not_found", f"Template not found: {template_key}")
        if not template.supports(channel):
            raise NotificationError(
                "unsupported_channel", f"Template {template_key} has no {channel} variant"
            )

        tokens: dict[str, Any] = {}
        contact = ContactSnapshot()
        if ref is not None:
            if ref.kind not in ENTITY_KINDS:
                raise NotificationError("entity_not_found", f"Unknown entity kind: {ref.kind}")
            entity = await self._repos[ref.kind].get_by_id(company_id, ref.id)
            if entity is None:
                raise NotificationError("entity_not_found", f"{ref.kind} {ref.id} not found")
            tokens = entity_tokens(ref.kind, entity, company_settings.timezone)
            contact = default_recipient(ref.kind, entity)

        if recipient is not None:
            contact = recipient
        if contact.name:
            tokens["name"] = contact.name

        subject_text, body_text = self._template_text(template, channel, body, subject)

        address = contact.phone if channel == SMS else contact.email
        if require_address and not address:
            raise NotificationError(
                "missing_recipient",
                "Phone number is required for SMS notifications"
                if channel == SMS
                else "Email address is required for email notifications",
            )

        return ComposedMessage(
            ref=ref,
            template_key=template_key,
            channel=channel,
            to=address,
            recipient_name=contact.name,
            subject=render_text(subject_text, tokens) if subject_text is not None else None,
            body=render_text(body_text, tokens),
        )

    @staticmethod
    def _template_text(
        template: MessageTemplate,
        channel: str,
        body: str | None,
        subject: str | None,
    ) -> tuple[str | None, str]:
        if template.custom:
            if not body or not body.strip():
                raise NotificationError("missing_content", "Message content is required")
            if channel == EMAIL and (not subject or not subject.strip()):
                raise NotificationError("missing_content", "Email subject is required")
            return (subject if channel == EMAIL else None), body
        if channel == EMAIL:
            return template.email_subject, template.email_body
        return None, template.sms

    async def _send(
        self,
        composed: ComposedMessage,
        company_settings: CompanySettings,
    ) -> ChannelReceipt | DispatchResult:
        """Hand a composed message to its channel under the configured timeout.

        A timeout only stops waiting: a provider request already in flight may
        still deliver the message.
        """
        try:
            channel = self.channel_factory.get_channel(composed.channel, company_settings)
            return await asyncio.wait_for(
                channel.send(composed.to, composed.body, composed.subject),
                timeout=settings.notification_channel_timeout_seconds,
            )
        except asyncio.TimeoutError:
            error = f"{composed.channel} channel timed out after {settings.notification_channel_timeout_seconds}s"
        except ChannelError as e:
            error = str(e)
        except Exception as e:
            # Transport failures the channel did not wrap
            logger.error(
                f"Notification send failed: {e!r}", extra=self._log_extra(composed), exc_info=True
            )
            return self._failure(composed, f"{composed.channel} channel failed: {e}")

        logger.error(f"Notification send failed: {error}", extra=self._log_extra(composed))
        return self._failure(composed, error)

    async def _record(
        self,
        company_id: int,
        composed: ComposedMessage,
        receipt: ChannelReceipt,
        sent_by: str | None,
    ) -> str | None:
        """Stamp the entity and write the activity log entry.

        Returns:
            Error text if the entity could not be stamped, None otherwise
        """
        ref = composed.ref
        if ref is None:
            return None

        record_error = None
        if ref.kind in RECORDED_KINDS:
            try:
                await self._repos[ref.kind].update(
                    company_id,
                    ref.id,
                    notification_sent=True,
                    notification_method=composed.channel,
                    notification_sent_at=datetime.utcnow(),
                    notification_content=composed.body,
                )
            except SQLAlchemyError as e:
                await self.session.rollback()
                logger.error(
                    f"Notification sent but not recorded: {e}",
                    extra={"entity": ref.kind, "entity_id": ref.id},
                    exc_info=True,
                )
                record_error = f"Notification sent but {ref.kind} {ref.id} was not updated"

        # Independent write; a failure here does not undo the notification
        try:
            await self.activity_repo.create(
                company_id,
                type=f"{ref.kind}_notification",
                description=f"Notification sent to {composed.recipient_name or composed.to} via {composed.channel}",
                entity_type=ref.kind,
                entity_id=ref.id,
                details={
                    "template_key": composed.template_key,
                    "channel": composed.channel,
                    "to": composed.to,
                    "message_id": receipt.message_id,
                    "sent_by": sent_by,
                },
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                f"Failed to write activity log: {e}",
                extra={"entity": ref.kind, "entity_id": ref.id},
                exc_info=True,
            )
        return record_error

    @staticmethod
    def _success(
        composed: ComposedMessage, receipt: ChannelReceipt, record_error: str | None = None
    ) -> DispatchResult:
        return DispatchResult(
            success=True,
            ref=composed.ref,
            channel=composed.channel,
            to=composed.to,
            content=composed.body,
            message_id=receipt.message_id,
            error=record_error,
        )

    @staticmethod
    def _failure(composed: ComposedMessage, error: str) -> DispatchResult:
        return DispatchResult(
            success=False,
            ref=composed.ref,
            channel=composed.channel,
            to=composed.to,
            content=composed.body,
            error=error,
            reason="channel_error",
        )

    @staticmethod
    def _log_extra(composed: ComposedMessage) -> dict[str, Any]:
        return {
            "template_key": composed.template_key,
            "channel": composed.channel,
            "entity": composed.ref.kind if composed.ref else None,
            "entity_id": composed.ref.id if composed.ref else None,
        }
