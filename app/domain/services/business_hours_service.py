"""Business hours service for checking if the front desk is staffed."""

import logging
from datetime import datetime

import pytz

logger = logging.getLogger(__name__)


def is_within_business_hours(
    start: str | None,
    end: str | None,
    timezone_str: str = "UTC",
    now: datetime | None = None,
) -> bool:
    """Check if a moment falls within the company's daily business hours.

    Args:
        start: Opening time, "HH:MM"
        end: Closing time, "HH:MM"
        timezone_str: Timezone string (e.g., "America/Toronto")
        now: Moment to check (aware, or naive UTC); defaults to the current time

    Returns:
        True if within business hours. Returns True when the hours cannot be
        read so that auto-replies never fire on bad configuration.
    """
    if not start or not end:
        return True

    try:
        tz = pytz.timezone(timezone_str)
        if now is None:
            current = datetime.now(tz)
        elif now.tzinfo is None:
            current = pytz.UTC.localize(now).astimezone(tz)
        else:
            current = now.astimezone(tz)
        current_time = current.time()

        start_time = datetime.strptime(start, "%H:%M").time()
        end_time = datetime.strptime(end, "%H:%M").time()

        if start_time <= end_time:
            # Normal case: start < end (e.g., 9:00 - 17:00)
            return start_time <= current_time <= end_time
        # Overnight case: start > end (e.g., 22:00 - 02:00)
        return current_time >= start_time or current_time <= end_time

    except (pytz.UnknownTimeZoneError, ValueError) as e:
        logger.error(f"Error checking business hours: {e}", exc_info=True)
        return True
