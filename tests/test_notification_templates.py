"""Tests for the notification catalog and token rendering."""

from datetime import datetime
from types import SimpleNamespace

import pytest

from app.domain.notifications.catalog import get_template, list_templates
from app.domain.notifications.renderer import default_recipient, entity_tokens, render_text


def test_catalog_keys():
    keys = {template.key for template in list_templates()}
    assert {
        "package_arrival",
        "package_reminder",
        "package_final_notice",
        "booking_confirmation",
        "parking_approved",
        "parking_denied",
        "visitor_checked_in",
        "general_announcement",
    } <= keys


def test_unknown_template():
    assert get_template("does_not_exist") is None


def test_channel_support():
    assert get_template("package_arrival").supports("sms")
    assert get_template("package_arrival").supports("email")
    assert not get_template("visitor_checked_in").supports("email")
    assert get_template("general_announcement").supports("email")
    assert not get_template("package_arrival").supports("fax")


def test_render_replaces_known_tokens():
    assert render_text("Hi {name}, unit {unit}", {"name": "Ana", "unit": "4B"}) == "Hi Ana, unit 4B"


def test_render_leaves_missing_tokens():
    assert render_text("Hi {name}, spot {spot}", {"name": "Ana", "spot": None}) == "Hi Ana, spot {spot}"


def test_package_tokens_in_company_timezone():
    package = SimpleNamespace(
        resident_name="Ana Silva",
        unit_number="4B",
        courier="UPS",
        description="Small box",
        tracking_number="1Z999",
        received_by="Front Desk",
        delivered_at=datetime(2025, 1, 15, 15, 30),
        recipient_phone="+15551234567",
        recipient_email="ana@example.com",
    )

    tokens = entity_tokens("package", package, "America/Toronto")

    assert tokens["name"] == "Ana Silva"
    assert tokens["courier"] == "UPS"
    assert tokens["delivered_time"] == "Jan 15, 2025 10:30 AM"
    assert tokens["date"] == "Jan 15, 2025"

    recipient = default_recipient("package", package)
    assert recipient.phone == "+15551234567"
    assert recipient.email == "ana@example.com"


def test_parking_request_tokens():
    request = SimpleNamespace(
        requester_name="Sam Lee",
        visiting={"resident_name": "Ana Silva", "unit_number": "4B"},
        requested_date=datetime(2025, 6, 1),
        start_time="14:00",
        parking_spot="V3",
        access_code="VISAB12",
    )

    tokens = entity_tokens("parking_request", request, "America/Toronto")

    assert tokens["date"] == "Jun 01, 2025"
    assert tokens["time"] == "02:00 PM"
    assert tokens["spot"] == "V3"
    assert tokens["code"] == "VISAB12"
    assert tokens["unit"] == "4B"


def test_unknown_entity_kind():
    with pytest.raises(ValueError):
        entity_tokens("invoice", SimpleNamespace(), "UTC")
