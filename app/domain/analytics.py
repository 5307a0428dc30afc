"""Derived statistics over entity collections already loaded from the store.

Everything here is a pure function: no I/O, recomputed in full on every call.
Collections are small (one building), so no caching or incremental upkeep.
Timestamps are naive UTC; calendar-day questions take the company timezone.
"""

import math
from collections import Counter, defaultdict
from datetime import date, datetime
from typing import Any, Iterable, Sequence

from app.core.timezones import local_date, local_today


def _round(value: float) -> float:
    return round(value, 1)


def average_response_time_minutes(messages: Iterable[Any]) -> float:
    """Mean delay between an incoming message and the reply that follows it.

    Messages are grouped by phone number and each group is put in timestamp
    order. Every incoming message immediately followed by an outgoing one
    counts as one response. An outgoing message with anything other than an
    incoming message right before it contributes nothing.

    Returns:
        Mean response time in minutes, or 0 when there are no pairs
    """
    conversations: dict[str, list[Any]] = defaultdict(list)
    for message in messages:
        conversations[message.phone_number].append(message)

    total_seconds = 0.0
    pairs = 0
    for conversation in conversations.values():
        ordered = sorted(conversation, key=lambda m: m.timestamp)
        for current, following in zip(ordered, ordered[1:]):
            if current.direction == "incoming" and following.direction == "outgoing":
                total_seconds += (following.timestamp - current.timestamp).total_seconds()
                pairs += 1

    if pairs == 0:
        return 0
    return _round(total_seconds / pairs / 60)


def average_pickup_time_hours(packages: Iterable[Any]) -> float:
    """Mean time from logging a package to its pickup, in hours."""
    picked_up = [
        p for p in packages
        if p.status == "picked_up" and p.picked_up_at and p.created_at
    ]
    if not picked_up:
        return 0
    total_seconds = sum((p.picked_up_at - p.created_at).total_seconds() for p in picked_up)
    return _round(total_seconds / len(picked_up) / 3600)


def top_couriers(packages: Iterable[Any], n: int = 5) -> list[dict[str, Any]]:
    """Most frequent couriers, busiest first; ties keep first-seen order."""
    counts = Counter(p.courier for p in packages if p.courier)
    return [{"courier": courier, "count": count} for courier, count in counts.most_common(n)]


def busiest_day(packages: Iterable[Any], timezone_str: str | None) -> dict[str, Any]:
    """Local calendar day with the most packages logged.

    Returns:
        {"day": date | None, "count": int}; the earliest-seen day wins ties
    """
    counts: dict[date, int] = {}
    for package in packages:
        day = local_date(package.created_at, timezone_str)
        counts[day] = counts.get(day, 0) + 1

    best: dict[str, Any] = {"day": None, "count": 0}
    for day, count in counts.items():
        if count > best["count"]:
            best = {"day": day, "count": count}
    return best


def most_active_unit(packages: Iterable[Any]) -> dict[str, Any]:
    """Unit that received the most packages; the earliest-seen unit wins ties."""
    counts: dict[str, int] = {}
    for package in packages:
        if package.unit_number:
            counts[package.unit_number] = counts.get(package.unit_number, 0) + 1

    best: dict[str, Any] = {"unit": None, "count": 0}
    for unit, count in counts.items():
        if count > best["count"]:
            best = {"unit": unit, "count": count}
    return best


def days_between(start: datetime, end: datetime) -> int:
    """Whole days spanned by a range, rounded up."""
    return math.ceil((end - start).total_seconds() / 86400)


def average_packages_per_day(count: int, start: datetime, end: datetime) -> float:
    days = days_between(start, end)
    if days <= 0:
        return float(count)
    return _round(count / days)


def parse_duration(duration: Any) -> int:
    """Call duration in seconds from "m:ss", a plain number, or a number string.

    Unparseable values count as 0.
    """
    if duration is None or duration == "":
        return 0
    if isinstance(duration, (int, float)):
        return int(duration)

    text = str(duration).strip()
    parts = text.split(":")
    if len(parts) == 2:
        minutes = int(parts[0]) if parts[0].strip().isdigit() else 0
        seconds = int(parts[1]) if parts[1].strip().isdigit() else 0
        return minutes * 60 + seconds
    try:
        return int(float(text))
    except ValueError:
        return 0


def average_call_duration_seconds(calls: Iterable[Any]) -> float:
    """Mean duration over calls that report one."""
    durations = [parse_duration(c.duration) for c in calls if c.duration]
    if not durations:
        return 0
    return _round(sum(durations) / len(durations))


def message_stats(messages: Sequence[Any]) -> dict[str, Any]:
    return {
        "total": len(messages),
        "incoming": sum(1 for m in messages if m.direction == "incoming"),
        "outgoing": sum(1 for m in messages if m.direction == "outgoing"),
        "unread": sum(1 for m in messages if not m.is_read and m.direction == "incoming"),
        "avg_response_time": average_response_time_minutes(messages),
    }


def call_stats(calls: Sequence[Any]) -> dict[str, Any]:
    return {
        "total": len(calls),
        "answered": sum(1 for c in calls if c.status == "answered"),
        "missed": sum(1 for c in calls if c.status == "missed"),
        "avg_duration": average_call_duration_seconds(calls),
    }


def package_stats(packages: Sequence[Any]) -> dict[str, Any]:
    """Package counters shown on the package center."""
    return {
        "total": len(packages),
        "pending": sum(1 for p in packages if p.status == "pending"),
        "picked_up": sum(1 for p in packages if p.status == "picked_up"),
        "notified": sum(1 for p in packages if p.notification_sent),
        "avg_pickup_time": average_pickup_time_hours(packages),
        "top_couriers": top_couriers(packages),
    }


def package_report(
    packages: Sequence[Any],
    start: datetime,
    end: datetime,
    timezone_str: str | None,
) -> dict[str, Any]:
    """Summary, packages and insights for packages logged in [start, end]."""
    in_range = [p for p in packages if start <= p.created_at <= end]
    return {
        "period": {"start": start, "end": end},
        "summary": package_stats(in_range),
        "packages": in_range,
        "insights": {
            "busiest_day": busiest_day(in_range, timezone_str),
            "most_active_unit": most_active_unit(in_range),
            "average_packages_per_day": average_packages_per_day(len(in_range), start, end),
        },
    }


def _is_local_today(value: datetime | None, timezone_str: str | None, today: date) -> bool:
    return value is not None and local_date(value, timezone_str) == today


def dashboard_stats(
    *,
    residents: Sequence[Any],
    bookings: Sequence[Any],
    packages: Sequence[Any],
    messages: Sequence[Any],
    calls: Sequence[Any],
    issues: Sequence[Any],
    visitors: Sequence[Any],
    timezone_str: str | None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Dashboard counters; "today" is the company's local calendar day."""
    today = local_today(timezone_str, now)
    return {
        "total_residents": len(residents),
        "todays_bookings": sum(
            1 for b in bookings if _is_local_today(b.start_date, timezone_str, today)
        ),
        "pending_packages": sum(1 for p in packages if p.status == "pending"),
        "unread_messages": sum(1 for m in messages if not m.is_read and m.direction == "incoming"),
        "missed_calls": sum(1 for c in calls if c.status == "missed"),
        "open_issues": sum(1 for i in issues if i.status == "open"),
        "todays_visitors": sum(
            1 for v in visitors if _is_local_today(v.expected_arrival, timezone_str, today)
        ),
        "response_time": average_response_time_minutes(messages),
    }


def dashboard_highlights(
    *,
    bookings: Sequence[Any],
    packages: Sequence[Any],
    messages: Sequence[Any],
    issues: Sequence[Any],
    visitors: Sequence[Any],
    timezone_str: str | None,
    now: datetime | None = None,
    limit: int = 5,
) -> dict[str, list[Any]]:
    """Short lists shown beside the dashboard counters."""
    today = local_today(timezone_str, now)
    return {
        "todays_bookings": sorted(
            (b for b in bookings if _is_local_today(b.start_date, timezone_str, today)),
            key=lambda b: b.start_date,
        )[:limit],
        "recent_packages": sorted(
            (p for p in packages if p.status == "pending"),
            key=lambda p: p.created_at,
            reverse=True,
        )[:limit],
        "recent_messages": sorted(
            (m for m in messages if not m.is_read and m.direction == "incoming"),
            key=lambda m: m.timestamp,
            reverse=True,
        )[:limit],
        "recent_issues": sorted(
            (i for i in issues if i.status == "open"),
            key=lambda i: i.created_at,
            reverse=True,
        )[:limit],
        "todays_visitors": sorted(
            (v for v in visitors if _is_local_today(v.expected_arrival, timezone_str, today)),
            key=lambda v: v.expected_arrival,
        )[:limit],
    }
