"""Fixed catalog of notification templates.

Bodies carry ``{token}`` placeholders filled from the entity being notified
about. See ``app.domain.notifications.renderer`` for the token set.
"""

from dataclasses import dataclass

SMS = "sms"
EMAIL = "email"
CHANNELS = (SMS, EMAIL)


@dataclass(frozen=True)
class MessageTemplate:
    """A predefined message with an SMS and/or email variant."""

    key: str
    name: str
    sms: str | None = None
    email_subject: str | None = None
    email_body: str | None = None
    custom: bool = False  # body and subject supplied by the caller

    def supports(self, channel: str) -> bool:
        if self.custom:
            return channel in CHANNELS
        if channel == SMS:
            return self.sms is not None
        if channel == EMAIL:
            return self.email_body is not None
        return False


_PACKAGE_ARRIVAL_EMAIL = """Dear {name},

We are pleased to inform you that a package has been delivered for Unit {unit}.

Package Details:
- Courier: {courier}
- Description: {description}
- Delivered: {delivered_time}
- Received by: {received_by}

Please visit the front desk during business hours to collect your package. Remember to bring a valid ID.

If you have any questions, please don't hesitate to contact us.

Best regards,
Building Management"""

_PACKAGE_REMINDER_EMAIL = """Dear {name},

This is a friendly reminder that you have a package waiting for pickup at the front desk.

Package Details:
- Courier: {courier}
- Description: {description}
- Delivered: {delivered_time}

Please collect your package at your earliest convenience during business hours.

Thank you,
Building Management"""

_PACKAGE_FINAL_NOTICE_EMAIL = """Dear {name},

Your package has been waiting for pickup at the front desk for several days.

Package Details:
- Courier: {courier}
- Description: {description}
- Delivered: {delivered_time}

Please collect it immediately or contact building management.

Building Management"""

_BOOKING_CONFIRMATION_EMAIL = """Dear {name},

Your amenity booking has been confirmed for {date} at {time}.

Please arrive on time and follow all facility guidelines.

Building Management"""

_PARKING_APPROVED_EMAIL = """Dear {name},

Your parking request for {date} has been approved.

Parking spot: {spot}
Access code: {code}

Building Management"""

_PARKING_DENIED_EMAIL = """Dear {name},

Your parking request for {date} has been denied. Please contact building management for more information.

Building Management"""


TEMPLATES: dict[str, MessageTemplate] = {
    template.key: template
    for template in (
        MessageTemplate(
            key="package_arrival",
            name="Package Arrival Notification",
            sms=(
                "Hi {name}, your package from {courier} has arrived at the front desk "
                "for Unit {unit}. Please visit us to collect it. Thank you!"
            ),
            email_subject="Package Delivery Notification - Unit {unit}",
            email_body=_PACKAGE_ARRIVAL_EMAIL,
        ),
        MessageTemplate(
            key="package_reminder",
            name="Package Pickup Reminder",
            sms=(
                "Reminder: Your package from {courier} is still waiting for pickup "
                "at the front desk. Unit {unit}."
            ),
            email_subject="Package Pickup Reminder - Unit {unit}",
            email_body=_PACKAGE_REMINDER_EMAIL,
        ),
        MessageTemplate(
            key="package_final_notice",
            name="Package Final Notice",
            sms=(
                "FINAL NOTICE: Your package has been waiting for pickup for several days. "
                "Unit {unit}. Please collect it immediately or contact building management. "
                "Building Management."
            ),
            email_subject="Final Notice: Package Awaiting Pickup - Unit {unit}",
            email_body=_PACKAGE_FINAL_NOTICE_EMAIL,
        ),
        MessageTemplate(
            key="booking_confirmation",
            name="Amenity Booking Confirmed",
            sms=(
                "Your amenity booking has been confirmed for {date} at {time}. "
                "Please arrive on time and follow all facility guidelines."
            ),
            email_subject="Amenity Booking Confirmed - {date}",
            email_body=_BOOKING_CONFIRMATION_EMAIL,
        ),
        MessageTemplate(
            key="parking_approved",
            name="Visitor Parking Approved",
            sms=(
                "Your parking request for {date} has been APPROVED. Parking spot: {spot}, "
                "Access code: {code}. Building Management."
            ),
            email_subject="Parking Request Approved - {date}",
            email_body=_PARKING_APPROVED_EMAIL,
        ),
        MessageTemplate(
            key="parking_denied",
            name="Visitor Parking Denied",
            sms=(
                "Your parking request for {date} has been denied. "
                "Please contact building management for more information."
            ),
            email_subject="Parking Request Update - {date}",
            email_body=_PARKING_DENIED_EMAIL,
        ),
        MessageTemplate(
            key="visitor_checked_in",
            name="Visitor Checked In",
            sms=(
                "Welcome {name}! You have been checked in at the front desk "
                "to visit Unit {unit}. Building Management."
            ),
        ),
        MessageTemplate(
            key="general_announcement",
            name="General Announcement",
            custom=True,
        ),
    )
}


def get_template(key: str) -> MessageTemplate | None:
    """Look up a template by key."""
    return TEMPLATES.get(key)


def list_templates() -> list[MessageTemplate]:
    return list(TEMPLATES.values())
