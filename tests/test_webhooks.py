"""Tests for the inbound SMS and call webhooks."""

import pytest

from app.domain.services.message_service import MessageService
from app.domain.services.resident_service import ResidentService

API = "/api/v1"


@pytest.mark.asyncio
async def test_inbound_sms_is_stored(client, db_session, company):
    await ResidentService(db_session).create_resident(
        company.id,
        {"name": "Ana Silva", "unit_number": "4B", "email": "ana@example.com", "phone": "+14165550199"},
    )

    response = await client.post(
        f"{API}/webhooks/sms/inbound",
        data={"From": "+14165550199", "To": "+15550001111", "Body": "Is my package in?", "MessageSid": "SM123"},
    )

    assert response.status_code == 200
    assert "<Response>" in response.text
    messages = await MessageService(db_session).list_messages(company.id)
    assert len(messages) == 1
    assert messages[0].external_sid == "SM123"
    assert messages[0].resident_name == "Ana Silva"


@pytest.mark.asyncio
async def test_inbound_sms_for_unknown_number(client, db_session, company):
    response = await client.post(
        f"{API}/webhooks/sms/inbound",
        data={"From": "+14165550199", "To": "+19999999999", "Body": "Hello", "MessageSid": "SM124"},
    )

    assert response.status_code == 200
    assert await MessageService(db_session).list_messages(company.id) == []


@pytest.mark.asyncio
async def test_call_webhook_by_agent(client, db_session, company):
    response = await client.post(
        f"{API}/webhooks/calls",
        json={
            "agent_id": "agent-maple",
            "from": "+14165550199",
            "status": "missed",
            "duration": "0:45",
            "ai_summary": "Caller asked about visitor parking.",
            "call_id": "call_1",
        },
    )

    assert response.status_code == 200
    assert response.json()["status"] == "stored"
    calls = await MessageService(db_session).list_calls(company.id)
    assert len(calls) == 1
    assert calls[0].status == "missed"
    assert calls[0].ai_summary == "Caller asked about visitor parking."


@pytest.mark.asyncio
async def test_call_webhook_by_called_number(client, db_session, company):
    response = await client.post(
        f"{API}/webhooks/calls",
        json={"to": "+15550001111", "from": "+14165550199", "summary": "General question"},
    )

    assert response.json()["status"] == "stored"


@pytest.mark.asyncio
async def test_call_webhook_unknown_company(client, db_session, company):
    response = await client.post(
        f"{API}/webhooks/calls",
        json={"agent_id": "agent-unknown", "from": "+14165550199"},
    )

    assert response.json() == {"status": "ignored"}
    assert await MessageService(db_session).list_calls(company.id) == []


@pytest.mark.asyncio
async def test_call_webhook_requires_caller(client, company):
    response = await client.post(f"{API}/webhooks/calls", json={"agent_id": "agent-maple"})

    assert response.status_code == 422
