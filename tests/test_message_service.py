"""Tests for the message center service."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from app.domain.errors import EntityValidationError, NotificationError
from app.domain.services.company_service import CompanyService
from app.domain.services.message_service import AUTO_RESPONDER, MessageService
from app.domain.services.resident_service import ResidentService

RESIDENT_PHONE = "+14165550199"


async def _resident(db_session, company_id):
    return await ResidentService(db_session).create_resident(
        company_id,
        {"name": "Ana Silva", "unit_number": "4B", "email": "ana@example.com", "phone": RESIDENT_PHONE},
    )


@pytest.mark.asyncio
async def test_incoming_sms_attaches_resident(db_session, company):
    resident = await _resident(db_session, company.id)

    message = await MessageService(db_session).log_incoming_sms(company.id, RESIDENT_PHONE, "Is my package in?")

    assert message.direction == "incoming"
    assert message.is_read is False
    assert message.resident_id == resident.id
    assert message.resident_name == "Ana Silva"
    assert message.unit_number == "4B"


@pytest.mark.asyncio
async def test_snapshot_survives_resident_edit(db_session, company):
    resident = await _resident(db_session, company.id)
    service = MessageService(db_session)
    message = await service.log_incoming_sms(company.id, RESIDENT_PHONE, "Hello")

    await ResidentService(db_session).update_resident(company.id, resident.id, {"unit_number": "12C"})
    stored = (await service.get_thread(company.id, RESIDENT_PHONE))[0]

    assert stored.id == message.id
    assert stored.unit_number == "4B"


@pytest.mark.asyncio
async def test_unknown_number_has_no_resident(db_session, company):
    message = await MessageService(db_session).log_incoming_sms(company.id, "+14165559999", "Hi, I'm a guest")

    assert message.resident_id is None
    assert message.resident_name is None


@pytest.mark.asyncio
async def test_empty_message_rejected(db_session, company):
    with pytest.raises(EntityValidationError):
        await MessageService(db_session).create_message(
            company.id, {"phone_number": RESIDENT_PHONE, "content": "  ", "direction": "incoming"}
        )


@pytest.mark.asyncio
async def test_mark_all_read(db_session, company):
    service = MessageService(db_session)
    await service.log_incoming_sms(company.id, RESIDENT_PHONE, "One")
    await service.log_incoming_sms(company.id, RESIDENT_PHONE, "Two")
    await service.log_incoming_sms(company.id, "+14165559999", "Three")

    assert await service.mark_all_read(company.id, RESIDENT_PHONE) == 2
    assert (await service.get_message_stats(company.id))["unread"] == 1
    assert await service.mark_all_read(company.id) == 1
    assert await service.mark_all_read(company.id) == 0


@pytest.mark.asyncio
async def test_send_reply_logs_outgoing(db_session, company, channel_factory):
    service = MessageService(db_session, channel_factory)
    incoming = await service.log_incoming_sms(company.id, RESIDENT_PHONE, "Is the gym open?")

    reply = await service.send_reply(
        company.id, RESIDENT_PHONE, "Yes, until 10pm.", sent_by="desk@example.com", reply_to=incoming.id
    )

    assert channel_factory.channel.sent == [{"to": RESIDENT_PHONE, "body": "Yes, until 10pm.", "subject": None}]
    assert reply.direction == "outgoing"
    assert reply.is_read is True
    assert reply.external_sid == "MSG1"
    assert reply.reply_to == incoming.id
    assert reply.sent_by == "desk@example.com"


@pytest.mark.asyncio
async def test_failed_reply_logs_nothing(db_session, company, channel_factory):
    channel_factory.channel.error = "Twilio is down"
    service = MessageService(db_session, channel_factory)

    with pytest.raises(NotificationError) as exc_info:
        await service.send_reply(company.id, RESIDENT_PHONE, "Hello")

    assert exc_info.value.reason == "channel_error"
    assert await service.list_messages(company.id) == []


@pytest.mark.asyncio
async def test_thread_is_in_time_order(db_session, company):
    service = MessageService(db_session)
    start = datetime.utcnow() - timedelta(hours=1)
    await service.create_message(
        company.id,
        {"phone_number": RESIDENT_PHONE, "content": "Later", "direction": "outgoing", "timestamp": start + timedelta(minutes=10)},
    )
    await service.create_message(
        company.id,
        {"phone_number": RESIDENT_PHONE, "content": "Earlier", "direction": "incoming", "timestamp": start},
    )

    thread = await service.get_thread(company.id, RESIDENT_PHONE)

    assert [m.content for m in thread] == ["Earlier", "Later"]
    assert (await service.get_message_stats(company.id))["avg_response_time"] == 10.0


class TestAutoReply:
    async def _enable(self, db_session, company):
        await CompanyService(db_session).update_company(
            company.id, {"settings": {"automations": {"auto_responder": True}}}
        )

    @pytest.mark.asyncio
    async def test_after_hours_reply(self, db_session, company, channel_factory):
        await self._enable(db_session, company)
        service = MessageService(db_session, channel_factory)

        with patch("app.domain.services.message_service.is_within_business_hours", return_value=False):
            message = await service.handle_inbound_sms(company.id, RESIDENT_PHONE, "Anyone there?")

        thread = await service.get_thread(company.id, RESIDENT_PHONE)
        assert len(thread) == 2
        assert thread[1].sent_by == AUTO_RESPONDER
        assert thread[1].reply_to == message.id
        assert "09:00 - 17:00" in channel_factory.channel.sent[0]["body"]

    @pytest.mark.asyncio
    async def test_no_reply_during_hours(self, db_session, company, channel_factory):
        await self._enable(db_session, company)
        service = MessageService(db_session, channel_factory)

        with patch("app.domain.services.message_service.is_within_business_hours", return_value=True):
            await service.handle_inbound_sms(company.id, RESIDENT_PHONE, "Hello")

        assert channel_factory.channel.sent == []

    @pytest.mark.asyncio
    async def test_failed_auto_reply_keeps_inbound(self, db_session, company, channel_factory):
        await self._enable(db_session, company)
        channel_factory.channel.error = "Twilio is down"
        service = MessageService(db_session, channel_factory)

        with patch("app.domain.services.message_service.is_within_business_hours", return_value=False):
            await service.handle_inbound_sms(company.id, RESIDENT_PHONE, "Hello")

        assert [m.direction for m in await service.list_messages(company.id)] == ["incoming"]


@pytest.mark.asyncio
async def test_call_from_provider_stored_as_received(db_session, company):
    await _resident(db_session, company.id)
    service = MessageService(db_session)

    call = await service.log_incoming_call(
        company.id,
        {
            "from": RESIDENT_PHONE,
            "status": "answered",
            "duration": "2:30",
            "summary": "Asked about parking",
            "ai_summary": "Resident asked for a visitor spot on Friday.",
            "transcription": "Hi, it's Ana from 4B...",
            "call_id": "call_123",
        },
    )

    assert call.resident_name == "Ana Silva"
    assert call.ai_summary == "Resident asked for a visitor spot on Friday."
    assert call.external_call_id == "call_123"
    assert (await service.get_call_stats(company.id))["avg_duration"] == 150.0


@pytest.mark.asyncio
async def test_search_covers_messages_and_calls(db_session, company):
    service = MessageService(db_session)
    await service.log_incoming_sms(company.id, RESIDENT_PHONE, "Leaking faucet in the kitchen")
    await service.create_call_log(
        company.id, {"phone_number": "+14165559999", "summary": "Faucet repair follow-up"}
    )

    found = await service.search(company.id, "FAUCET")

    assert found["total"] == 2
    assert len(found["messages"]) == 1
    assert len(found["calls"]) == 1
