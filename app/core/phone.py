"""Phone number utilities for resident lookup and validation."""

import logging
import re

logger = logging.getLogger(__name__)

# Same shape the resident form accepts once spaces, dashes and parens are stripped
_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")


def is_valid_phone(phone: str | None) -> bool:
    """Check a phone number the way the resident form does.

    Examples:
        (281) 788-2316  → valid
        +1 281 788 2316 → valid
        0123            → invalid (leading zero)
    """
    if not phone:
        return False
    return bool(_PHONE_PATTERN.match(_PHONE_SEPARATORS.sub("", phone)))


def normalize_phone_for_match(phone: str | None) -> str:
    """Normalize phone to last 10 digits for matching.

    The last 10 digits are used because:
    - US/Canadian phone numbers are 10 digits (area code + 7 digits)
    - This strips country code (+1) and any formatting

    Examples:
        +12817882316 → 2817882316
        (281) 788-2316 → 2817882316

    Args:
        phone: Phone number in any format

    Returns:
        Last 10 digits of the phone number, or "" when there are none
    """
    if not phone:
        return ""
    return "".join(c for c in phone if c.isdigit())[-10:]


def phones_match(left: str | None, right: str | None) -> bool:
    """Compare two phone numbers by their normalized digits."""
    normalized = normalize_phone_for_match(left)
    return bool(normalized) and normalized == normalize_phone_for_match(right)
