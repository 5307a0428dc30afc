"""Tests for notification composition, sending and recording."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from app.domain.errors import NotificationError
from app.domain.models.snapshots import ContactSnapshot
from app.domain.services.notification_dispatcher import EntityRef, NotificationDispatcher
from app.domain.services.package_service import PackageService
from app.domain.services.visitor_service import ParkingService
from app.infrastructure.channels.base import ChannelError
from app.persistence.repositories.issue_repository import ActivityLogRepository
from app.settings import settings


async def _package(db_session, company_id, **overrides):
    data = {
        "resident_name": "Ana Silva",
        "unit_number": "4B",
        "recipient_phone": "+14165550199",
        "recipient_email": "ana@example.com",
        "courier": "UPS",
        "description": "Small box",
        "delivered_at": datetime.utcnow() - timedelta(minutes=10),
    }
    data.update(overrides)
    return await PackageService(db_session).create_package(company_id, data)


@pytest.mark.asyncio
async def test_package_arrival_sms(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    result = await dispatcher.dispatch(
        company.id, EntityRef("package", package.id), "package_arrival", "sms", sent_by="desk@example.com"
    )

    assert result.success is True
    assert result.message_id == "MSG1"
    sent = channel_factory.channel.sent
    assert len(sent) == 1
    assert sent[0]["to"] == "+14165550199"
    assert "UPS" in sent[0]["body"]
    assert "4B" in sent[0]["body"]
    assert "{" not in sent[0]["body"]

    stored = await PackageService(db_session).get_package(company.id, package.id)
    assert stored.notification_sent is True
    assert stored.notification_method == "sms"
    assert stored.notification_sent_at is not None
    assert stored.notification_content == sent[0]["body"]

    activity = await ActivityLogRepository(db_session).list(company.id)
    assert len(activity) == 1
    assert activity[0].type == "package_notification"
    assert activity[0].entity_id == package.id


@pytest.mark.asyncio
async def test_package_arrival_email_has_subject(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    result = await dispatcher.dispatch(company.id, EntityRef("package", package.id), "package_arrival", "email")

    assert result.success is True
    sent = channel_factory.channel.sent[0]
    assert sent["to"] == "ana@example.com"
    assert sent["subject"] == "Package Delivery Notification - Unit 4B"
    assert "Dear Ana Silva" in sent["body"]


@pytest.mark.asyncio
async def test_unknown_template_sends_nothing(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    result = await dispatcher.dispatch(company.id, EntityRef("package", package.id), "birthday", "sms")

    assert result.success is False
    assert result.reason == "template_not_found"
    assert channel_factory.channel.sent == []
    stored = await PackageService(db_session).get_package(company.id, package.id)
    assert stored.notification_sent is False


@pytest.mark.asyncio
async def test_unknown_entity(db_session, company, channel_factory):
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    result = await dispatcher.dispatch(company.id, EntityRef("package", 999), "package_arrival", "sms")

    assert result.success is False
    assert result.reason == "entity_not_found"


@pytest.mark.asyncio
async def test_missing_phone_number(db_session, company, channel_factory):
    package = await _package(db_session, company.id, recipient_phone=None)
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    result = await dispatcher.dispatch(company.id, EntityRef("package", package.id), "package_arrival", "sms")

    assert result.success is False
    assert result.reason == "missing_recipient"
    assert channel_factory.channel.sent == []


@pytest.mark.asyncio
async def test_channel_failure_leaves_entity_unchanged(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    channel_factory.channel.error = "Twilio rejected the number"
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    result = await dispatcher.dispatch(company.id, EntityRef("package", package.id), "package_arrival", "sms")

    assert result.success is False
    assert result.reason == "channel_error"
    assert result.error == "Twilio rejected the number"
    stored = await PackageService(db_session).get_package(company.id, package.id)
    assert stored.notification_sent is False
    assert stored.notification_content is None
    assert await ActivityLogRepository(db_session).list(company.id) == []


@pytest.mark.asyncio
async def test_channel_timeout(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    channel_factory.channel.delay = 1
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    with patch.object(settings, "notification_channel_timeout_seconds", 0.01):
        result = await dispatcher.dispatch(
            company.id, EntityRef("package", package.id), "package_arrival", "sms"
        )

    assert result.success is False
    assert result.reason == "channel_error"
    assert "timed out" in result.error
    stored = await PackageService(db_session).get_package(company.id, package.id)
    assert stored.notification_sent is False


@pytest.mark.asyncio
async def test_repeated_dispatch_sends_twice(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    dispatcher = NotificationDispatcher(db_session, channel_factory)
    ref = EntityRef("package", package.id)

    await dispatcher.dispatch(company.id, ref, "package_arrival", "sms")
    await dispatcher.dispatch(company.id, ref, "package_arrival", "sms")

    assert len(channel_factory.channel.sent) == 2


@pytest.mark.asyncio
async def test_recipient_override(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    await dispatcher.dispatch(
        company.id,
        EntityRef("package", package.id),
        "package_arrival",
        "sms",
        recipient=ContactSnapshot(name="Luis Silva", phone="+14165550111"),
    )

    sent = channel_factory.channel.sent[0]
    assert sent["to"] == "+14165550111"
    assert sent["body"].startswith("Hi Luis Silva,")


@pytest.mark.asyncio
async def test_general_announcement_requires_body(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    dispatcher = NotificationDispatcher(db_session, channel_factory)
    ref = EntityRef("package", package.id)

    missing = await dispatcher.dispatch(company.id, ref, "general_announcement", "sms")
    sent = await dispatcher.dispatch(
        company.id, ref, "general_announcement", "sms", body="Water shut-off at noon, {name}."
    )

    assert missing.reason == "missing_content"
    assert sent.success is True
    assert channel_factory.channel.sent[0]["body"] == "Water shut-off at noon, Ana Silva."


@pytest.mark.asyncio
async def test_parking_approval_notification(db_session, company, channel_factory):
    parking = ParkingService(db_session)
    request = await parking.create_request(
        company.id,
        {
            "requester_name": "Sam Lee",
            "requester_phone": "+14165550123",
            "visiting": {"resident_name": "Ana Silva", "unit_number": "4B"},
            "vehicle_info": {"make": "Honda", "license_plate": "ABCD 123"},
            "purpose": "Visiting family",
            "requested_date": datetime(2099, 6, 1).date(),
            "start_time": "10:00",
            "end_time": "14:00",
        },
    )
    request = await parking.approve(company.id, request.id, parking_spot="V-3", access_code="VISAB12")
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    result = await dispatcher.dispatch(
        company.id, EntityRef("parking_request", request.id), "parking_approved", "sms"
    )

    assert result.success is True
    body = channel_factory.channel.sent[0]["body"]
    assert "V-3" in body
    assert "VISAB12" in body
    assert "Jun 01, 2099" in body


@pytest.mark.asyncio
async def test_dispatch_many_counts(db_session, company, channel_factory):
    first = await _package(db_session, company.id)
    second = await _package(db_session, company.id, resident_name="Bo Chen", unit_number="7A")
    no_phone = await _package(db_session, company.id, recipient_phone=None)
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    bulk = await dispatcher.dispatch_many(
        company.id,
        [
            EntityRef("package", first.id),
            EntityRef("package", second.id),
            EntityRef("package", no_phone.id),
            EntityRef("package", 999),
        ],
        "package_reminder",
        "sms",
    )

    assert bulk.requested == 4
    assert bulk.succeeded == 2
    assert bulk.failed == 2
    assert [r.success for r in bulk.results] == [True, True, False, False]
    assert bulk.results[2].reason == "missing_recipient"
    assert bulk.results[3].reason == "entity_not_found"
    assert len(channel_factory.channel.sent) == 2


@pytest.mark.asyncio
async def test_transport_error_returns_failure(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    channel_factory.channel.failures["+14165550199"] = ConnectionError("connection reset")
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    result = await dispatcher.dispatch(company.id, EntityRef("package", package.id), "package_arrival", "sms")

    assert result.success is False
    assert result.reason == "channel_error"
    assert "connection reset" in result.error
    stored = await PackageService(db_session).get_package(company.id, package.id)
    assert stored.notification_sent is False


@pytest.mark.asyncio
async def test_dispatch_many_failed_send_does_not_stop_others(db_session, company, channel_factory):
    delivered = await _package(db_session, company.id)
    rejected = await _package(db_session, company.id, recipient_phone="+14165550123")
    unreachable = await _package(db_session, company.id, recipient_phone="+14165550177")
    channel_factory.channel.failures["+14165550123"] = ChannelError("Twilio rejected the number")
    channel_factory.channel.failures["+14165550177"] = ConnectionError("connection reset")
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    bulk = await dispatcher.dispatch_many(
        company.id,
        [
            EntityRef("package", delivered.id),
            EntityRef("package", rejected.id),
            EntityRef("package", unreachable.id),
        ],
        "package_reminder",
        "sms",
    )

    assert bulk.succeeded == 1
    assert bulk.failed == 2
    assert [r.success for r in bulk.results] == [True, False, False]
    assert bulk.results[1].reason == "channel_error"
    assert bulk.results[2].reason == "channel_error"
    assert [s["to"] for s in channel_factory.channel.sent] == ["+14165550199"]

    packages = PackageService(db_session)
    assert (await packages.get_package(company.id, delivered.id)).notification_sent is True
    assert (await packages.get_package(company.id, rejected.id)).notification_sent is False
    assert (await packages.get_package(company.id, unreachable.id)).notification_sent is False


@pytest.mark.asyncio
async def test_dispatch_many_record_failure_does_not_stop_others(db_session, company, channel_factory):
    company_id = company.id
    first_id = (await _package(db_session, company_id)).id
    second_id = (await _package(db_session, company_id, recipient_phone="+14165550123")).id
    dispatcher = NotificationDispatcher(db_session, channel_factory)
    repo = dispatcher._repos["package"]
    update = repo.update

    async def update_fails_for_first(cid, id, **data):
        if id == first_id:
            raise OperationalError("UPDATE packages", {}, Exception("database is locked"))
        return await update(cid, id, **data)

    with patch.object(repo, "update", new=update_fails_for_first):
        bulk = await dispatcher.dispatch_many(
            company_id,
            [EntityRef("package", first_id), EntityRef("package", second_id)],
            "package_reminder",
            "sms",
        )

    assert bulk.succeeded == 2
    assert "not updated" in bulk.results[0].error
    assert bulk.results[1].error is None
    assert len(channel_factory.channel.sent) == 2
    packages = PackageService(db_session)
    assert (await packages.get_package(company_id, first_id)).notification_sent is False
    assert (await packages.get_package(company_id, second_id)).notification_sent is True


@pytest.mark.asyncio
async def test_preview_sends_nothing(db_session, company, channel_factory):
    package = await _package(db_session, company.id)
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    composed = await dispatcher.preview(
        company.id, "package_arrival", "sms", ref=EntityRef("package", package.id)
    )

    assert "UPS" in composed.body
    assert composed.to == "+14165550199"
    assert channel_factory.channel.sent == []
    stored = await PackageService(db_session).get_package(company.id, package.id)
    assert stored.notification_sent is False


@pytest.mark.asyncio
async def test_preview_unknown_template_raises(db_session, company, channel_factory):
    dispatcher = NotificationDispatcher(db_session, channel_factory)

    with pytest.raises(NotificationError) as exc_info:
        await dispatcher.preview(company.id, "birthday", "sms")

    assert exc_info.value.reason == "template_not_found"
