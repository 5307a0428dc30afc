"""Conversions between stored UTC timestamps and a company's local calendar."""

from datetime import date, datetime, time, timedelta

import pytz


def get_timezone(timezone_str: str | None) -> pytz.BaseTzInfo:
    """Resolve a timezone name, falling back to UTC for unknown names."""
    try:
        return pytz.timezone(timezone_str or "UTC")
    except pytz.UnknownTimeZoneError:
        return pytz.UTC


def to_local(value: datetime, timezone_str: str | None) -> datetime:
    """Convert a naive-UTC (or aware) timestamp to the given timezone."""
    if value.tzinfo is None:
        value = pytz.UTC.localize(value)
    return value.astimezone(get_timezone(timezone_str))


def local_date(value: datetime, timezone_str: str | None) -> date:
    """Calendar day of a timestamp as seen in the given timezone."""
    return to_local(value, timezone_str).date()


def local_today(timezone_str: str | None, now: datetime | None = None) -> date:
    """Today's calendar day in the given timezone."""
    return local_date(now or datetime.utcnow(), timezone_str)


def local_day_bounds(day: date, timezone_str: str | None) -> tuple[datetime, datetime]:
    """Naive-UTC [start, end) bounds of a local calendar day."""
    tz = get_timezone(timezone_str)
    start_local = tz.localize(datetime.combine(day, time.min))
    end_local = tz.localize(datetime.combine(day + timedelta(days=1), time.min))
    return (
        start_local.astimezone(pytz.UTC).replace(tzinfo=None),
        end_local.astimezone(pytz.UTC).replace(tzinfo=None),
    )


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an incoming timestamp to the naive-UTC form stored in the database."""
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.UTC).replace(tzinfo=None)
