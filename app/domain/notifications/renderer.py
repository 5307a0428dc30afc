"""Token substitution for notification templates."""

import re
from datetime import datetime
from typing import Any

from app.core.timezones import to_local
from app.domain.models.snapshots import ContactSnapshot

TOKEN_PATTERN = re.compile(r"\{(\w+)\}")

DATETIME_FORMAT = "%b %d, %Y %I:%M %p"
DATE_FORMAT = "%b %d, %Y"
TIME_FORMAT = "%I:%M %p"

ENTITY_KINDS = ("package", "visitor", "parking_request", "booking")


def render_text(text: str, values: dict[str, Any]) -> str:
    """Replace ``{token}`` placeholders with values.

    Tokens without a value (unknown, None or empty) stay in the text as-is.
    """

    def _substitute(match: re.Match) -> str:
        value = values.get(match.group(1))
        if value is None or value == "":
            return match.group(0)
        return str(value)

    return TOKEN_PATTERN.sub(_substitute, text)


def _format_local(value: datetime | None, fmt: str, timezone_str: str | None) -> str | None:
    if value is None:
        return None
    return to_local(value, timezone_str).strftime(fmt)


def _format_clock(value: str | None) -> str | None:
    """Format an "HH:MM" string the way timestamps are formatted."""
    if not value:
        return None
    try:
        return datetime.strptime(value, "%H:%M").strftime(TIME_FORMAT)
    except ValueError:
        return value


def _visiting_unit(entity: Any) -> str | None:
    return (entity.visiting or {}).get("unit_number")


def entity_tokens(kind: str, entity: Any, timezone_str: str | None) -> dict[str, Any]:
    """Token values drawn from an entity's current fields.

    Timestamps are shown in the company's timezone. Parking request dates are
    calendar days and are shown without conversion.
    """
    if kind == "package":
        return {
            "name": entity.resident_name,
            "unit": entity.unit_number,
            "courier": entity.courier,
            "description": entity.description,
            "tracking": entity.tracking_number,
            "received_by": entity.received_by,
            "delivered_time": _format_local(entity.delivered_at, DATETIME_FORMAT, timezone_str),
            "date": _format_local(entity.delivered_at, DATE_FORMAT, timezone_str),
            "time": _format_local(entity.delivered_at, TIME_FORMAT, timezone_str),
        }
    if kind == "visitor":
        arrival = entity.actual_arrival or entity.expected_arrival
        return {
            "name": entity.name,
            "unit": _visiting_unit(entity),
            "date": _format_local(arrival, DATE_FORMAT, timezone_str),
            "time": _format_local(arrival, TIME_FORMAT, timezone_str),
            "spot": entity.parking_spot,
            "code": entity.access_code,
        }
    if kind == "parking_request":
        return {
            "name": entity.requester_name,
            "unit": _visiting_unit(entity),
            "date": entity.requested_date.strftime(DATE_FORMAT) if entity.requested_date else None,
            "time": _format_clock(entity.start_time),
            "spot": entity.parking_spot,
            "code": entity.access_code,
        }
    if kind == "booking":
        contact = entity.contact_info or {}
        return {
            "name": contact.get("name"),
            "date": _format_local(entity.start_date, DATE_FORMAT, timezone_str),
            "time": _format_local(entity.start_date, TIME_FORMAT, timezone_str),
        }
    raise ValueError(f"Unknown entity kind: {kind}")


def default_recipient(kind: str, entity: Any) -> ContactSnapshot:
    """The contact an entity's notifications go to when the caller names none."""
    if kind == "package":
        return ContactSnapshot(
            name=entity.resident_name,
            phone=entity.recipient_phone,
            email=entity.recipient_email,
        )
    if kind == "visitor":
        return ContactSnapshot(name=entity.name, phone=entity.phone, email=entity.email)
    if kind == "parking_request":
        return ContactSnapshot(
            name=entity.requester_name,
            phone=entity.requester_phone,
            email=entity.requester_email,
        )
    if kind == "booking":
        return ContactSnapshot.model_validate(entity.contact_info or {})
    raise ValueError(f"Unknown entity kind: {kind}")
