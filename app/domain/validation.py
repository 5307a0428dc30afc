"""Input validation for entity writes.

Each validator inspects the fields about to be written and returns a map of
field path to message. Nested fields use dotted paths such as
``emergency_contact.phone``. An empty map means the data may be written.
"""

import re
from datetime import date, datetime
from typing import Any

from app.core.phone import is_valid_phone
from app.core.timezones import to_naive_utc

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

PACKAGE_EXCEPTION_STATUSES = ("returned", "damaged", "lost")


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _nested(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def is_valid_email(email: str | None) -> bool:
    """Check an email address the way the dashboard forms do."""
    return bool(email) and bool(EMAIL_PATTERN.match(email))


def _minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def validate_resident(data: dict[str, Any]) -> dict[str, str]:
    """Validate a resident record.

    Name, unit, email and phone are required. The emergency contact is
    optional, but once any of its fields is filled in all of them are.
    """
    errors: dict[str, str] = {}

    if _blank(data.get("name")):
        errors["name"] = "Full name is required"
    if _blank(data.get("unit_number")):
        errors["unit_number"] = "Unit number is required"

    email = data.get("email")
    if _blank(email):
        errors["email"] = "Email address is required"
    elif not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"

    phone = data.get("phone")
    if _blank(phone):
        errors["phone"] = "Phone number is required"
    elif not is_valid_phone(phone):
        errors["phone"] = "Please enter a valid phone number"

    contact = _nested(data, "emergency_contact")
    if any(not _blank(contact.get(key)) for key in ("name", "phone", "relationship")):
        if _blank(contact.get("name")):
            errors["emergency_contact.name"] = "Emergency contact name is required"
        if _blank(contact.get("phone")):
            errors["emergency_contact.phone"] = "Emergency contact phone is required"
        if _blank(contact.get("relationship")):
            errors["emergency_contact.relationship"] = "Relationship is required"

    return errors


def validate_booking(data: dict[str, Any], now: datetime | None = None) -> dict[str, str]:
    """Validate a booking.

    Args:
        data: Booking fields
        now: Reference time (naive UTC); bookings may not start before it.
            Pass None to skip the past-date check, as edits of existing
            bookings do.

    Returns:
        Field path to message map
    """
    errors: dict[str, str] = {}

    if _blank(data.get("title")):
        errors["title"] = "Title is required"
    if _blank(data.get("amenity_id")):
        errors["amenity_id"] = "Please select an amenity"

    start = data.get("start_date")
    end = data.get("end_date")
    if start is None:
        errors["start_date"] = "Start date is required"
    if end is None:
        errors["end_date"] = "End date is required"

    contact = _nested(data, "contact_info")
    if not _blank(contact.get("email")) and not is_valid_email(contact.get("email")):
        errors["contact_info.email"] = "Please enter a valid email address"

    if start is not None and end is not None:
        start = to_naive_utc(start)
        end = to_naive_utc(end)
        if end <= start:
            errors["end_date"] = "End time must be after start time"
        if now is not None and start < now:
            errors["start_date"] = "Booking cannot be in the past"

    return errors


def validate_package(data: dict[str, Any], now: datetime | None = None) -> dict[str, str]:
    """Validate a package logged at the front desk."""
    errors: dict[str, str] = {}

    if _blank(data.get("resident_name")):
        errors["resident_name"] = "Recipient name is required"
    if _blank(data.get("unit_number")):
        errors["unit_number"] = "Unit number is required"
    if _blank(data.get("courier")):
        errors["courier"] = "Courier is required"
    if _blank(data.get("description")):
        errors["description"] = "Package description is required"

    email = data.get("recipient_email")
    if not _blank(email) and not is_valid_email(email):
        errors["recipient_email"] = "Please enter a valid email address"

    delivered_at = data.get("delivered_at")
    if delivered_at is None:
        errors["delivered_at"] = "Delivery date is required"
    elif to_naive_utc(delivered_at) > (now or datetime.utcnow()):
        errors["delivered_at"] = "Delivery time cannot be in the future"

    return errors


def validate_visitor(data: dict[str, Any]) -> dict[str, str]:
    """Validate a visitor registration."""
    errors: dict[str, str] = {}

    if _blank(data.get("name")):
        errors["name"] = "Visitor name is required"
    if _blank(data.get("phone")):
        errors["phone"] = "Phone number is required"

    visiting = _nested(data, "visiting")
    if _blank(visiting.get("resident_name")):
        errors["visiting.resident_name"] = "Resident name is required"
    if _blank(visiting.get("unit_number")):
        errors["visiting.unit_number"] = "Unit number is required"

    if _blank(data.get("purpose")):
        errors["purpose"] = "Purpose of visit is required"

    email = data.get("email")
    if not _blank(email) and not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"

    arrival = data.get("expected_arrival")
    departure = data.get("expected_departure")
    if arrival is None:
        errors["expected_arrival"] = "Expected arrival date is required"
    elif departure is not None and to_naive_utc(departure) <= to_naive_utc(arrival):
        errors["expected_departure"] = "Departure time must be after arrival time"

    if data.get("parking_required"):
        vehicle = _nested(data, "vehicle_info")
        if _blank(vehicle.get("license_plate")):
            errors["vehicle_info.license_plate"] = "License plate is required when parking is needed"
        if _blank(vehicle.get("make")):
            errors["vehicle_info.make"] = "Vehicle make is required when parking is needed"

    return errors


def validate_parking_request(data: dict[str, Any], today: date | None = None) -> dict[str, str]:
    """Validate a visitor parking request.

    Args:
        data: Parking request fields
        today: The company's current local date; requests for earlier days
            are rejected. None skips the check.

    Returns:
        Field path to message map
    """
    errors: dict[str, str] = {}

    if _blank(data.get("requester_name")):
        errors["requester_name"] = "Requester name is required"
    if _blank(data.get("requester_phone")):
        errors["requester_phone"] = "Phone number is required"

    email = data.get("requester_email")
    if not _blank(email) and not is_valid_email(email):
        errors["requester_email"] = "Please enter a valid email address"

    visiting = _nested(data, "visiting")
    if _blank(visiting.get("resident_name")):
        errors["visiting.resident_name"] = "Resident name is required"
    if _blank(visiting.get("unit_number")):
        errors["visiting.unit_number"] = "Unit number is required"

    vehicle = _nested(data, "vehicle_info")
    if _blank(vehicle.get("make")):
        errors["vehicle_info.make"] = "Vehicle make is required"
    if _blank(vehicle.get("license_plate")):
        errors["vehicle_info.license_plate"] = "License plate is required"

    if _blank(data.get("purpose")):
        errors["purpose"] = "Purpose is required"

    requested_date = data.get("requested_date")
    if requested_date is None:
        errors["requested_date"] = "Requested date is required"
    elif today is not None:
        requested_day = requested_date.date() if isinstance(requested_date, datetime) else requested_date
        if requested_day < today:
            errors["requested_date"] = "Request date cannot be in the past"

    start_time = data.get("start_time")
    end_time = data.get("end_time")
    if _blank(start_time):
        errors["start_time"] = "Start time is required"
    elif not TIME_PATTERN.match(start_time):
        errors["start_time"] = "Start time must be HH:MM"
    if _blank(end_time):
        errors["end_time"] = "End time is required"
    elif not TIME_PATTERN.match(end_time):
        errors["end_time"] = "End time must be HH:MM"

    if "start_time" not in errors and "end_time" not in errors:
        if _minutes(end_time) <= _minutes(start_time):
            errors["end_time"] = "End time must be after start time"

    return errors
