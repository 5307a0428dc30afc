"""Tests for the derived statistics."""

from datetime import date, datetime, timedelta
from types import SimpleNamespace

from app.domain import analytics

BASE = datetime(2025, 3, 10, 14, 0)


def _message(phone, direction, minutes, is_read=True):
    return SimpleNamespace(
        phone_number=phone,
        direction=direction,
        timestamp=BASE + timedelta(minutes=minutes),
        is_read=is_read,
    )


def _package(status="pending", courier="UPS", unit="4B", created=BASE, picked_up=None, notified=False):
    return SimpleNamespace(
        status=status,
        courier=courier,
        unit_number=unit,
        created_at=created,
        picked_up_at=picked_up,
        notification_sent=notified,
    )


class TestResponseTime:
    def test_no_messages(self):
        assert analytics.average_response_time_minutes([]) == 0

    def test_single_pair(self):
        messages = [_message("+15550001", "incoming", 0), _message("+15550001", "outgoing", 10)]
        assert analytics.average_response_time_minutes(messages) == 10.0

    def test_pairs_are_per_phone_number(self):
        messages = [
            _message("+15550001", "incoming", 0),
            _message("+15550002", "outgoing", 1),
            _message("+15550002", "incoming", 2),
            _message("+15550001", "outgoing", 20),
            _message("+15550002", "outgoing", 12),
        ]
        # 20 minutes for the first number, 10 for the second
        assert analytics.average_response_time_minutes(messages) == 15.0

    def test_input_order_does_not_matter(self):
        messages = [_message("+15550001", "outgoing", 5), _message("+15550001", "incoming", 0)]
        assert analytics.average_response_time_minutes(messages) == 5.0

    def test_unanswered_and_unprompted_messages_ignored(self):
        messages = [
            _message("+15550001", "outgoing", 0),
            _message("+15550001", "outgoing", 3),
            _message("+15550001", "incoming", 4),
        ]
        assert analytics.average_response_time_minutes(messages) == 0

    def test_only_adjacent_reply_counts(self):
        messages = [
            _message("+15550001", "incoming", 0),
            _message("+15550001", "incoming", 6),
            _message("+15550001", "outgoing", 8),
        ]
        assert analytics.average_response_time_minutes(messages) == 2.0

    def test_rounded_to_one_decimal(self):
        messages = [
            _message("+15550001", "incoming", 0),
            SimpleNamespace(
                phone_number="+15550001",
                direction="outgoing",
                timestamp=BASE + timedelta(seconds=100),
                is_read=True,
            ),
        ]
        assert analytics.average_response_time_minutes(messages) == 1.7


class TestPackageStats:
    def test_empty(self):
        stats = analytics.package_stats([])
        assert stats == {
            "total": 0,
            "pending": 0,
            "picked_up": 0,
            "notified": 0,
            "avg_pickup_time": 0,
            "top_couriers": [],
        }

    def test_counts_and_pickup_time(self):
        packages = [
            _package(),
            _package(status="picked_up", picked_up=BASE + timedelta(hours=3), notified=True),
            _package(status="picked_up", courier="FedEx", picked_up=BASE + timedelta(hours=1)),
            _package(status="returned", courier="FedEx"),
        ]
        stats = analytics.package_stats(packages)
        assert stats["total"] == 4
        assert stats["pending"] == 1
        assert stats["picked_up"] == 2
        assert stats["notified"] == 1
        assert stats["avg_pickup_time"] == 2.0

    def test_top_couriers_ties_keep_first_seen_order(self):
        packages = [
            _package(courier="Canada Post"),
            _package(courier="UPS"),
            _package(courier="UPS"),
            _package(courier="Canada Post"),
            _package(courier="DHL"),
        ]
        assert analytics.top_couriers(packages) == [
            {"courier": "Canada Post", "count": 2},
            {"courier": "UPS", "count": 2},
            {"courier": "DHL", "count": 1},
        ]

    def test_top_couriers_limited(self):
        packages = [_package(courier=f"Courier {i}") for i in range(8)]
        assert len(analytics.top_couriers(packages)) == 5


class TestPackageReport:
    def test_insights(self):
        start = datetime(2025, 3, 1)
        end = datetime(2025, 3, 11)
        packages = [
            _package(unit="4B", created=datetime(2025, 3, 2, 15)),
            _package(unit="4B", created=datetime(2025, 3, 5, 15)),
            _package(unit="7A", created=datetime(2025, 3, 5, 16)),
            _package(unit="7A", created=datetime(2025, 3, 20, 16)),
        ]

        report = analytics.package_report(packages, start, end, "America/Toronto")

        assert report["summary"]["total"] == 3
        assert len(report["packages"]) == 3
        assert report["insights"]["busiest_day"] == {"day": date(2025, 3, 5), "count": 2}
        assert report["insights"]["most_active_unit"] == {"unit": "4B", "count": 2}
        assert report["insights"]["average_packages_per_day"] == 0.3

    def test_busiest_day_uses_company_timezone(self):
        # 02:00 UTC on the 6th is still the 5th in Toronto
        packages = [_package(created=datetime(2025, 3, 6, 2))]
        assert analytics.busiest_day(packages, "America/Toronto")["day"] == date(2025, 3, 5)
        assert analytics.busiest_day(packages, "UTC")["day"] == date(2025, 3, 6)

    def test_empty_range(self):
        report = analytics.package_report([], datetime(2025, 3, 1), datetime(2025, 3, 2), "UTC")
        assert report["insights"]["busiest_day"] == {"day": None, "count": 0}
        assert report["insights"]["most_active_unit"] == {"unit": None, "count": 0}


class TestCallStats:
    def test_parse_duration(self):
        assert analytics.parse_duration("2:30") == 150
        assert analytics.parse_duration("45") == 45
        assert analytics.parse_duration(90) == 90
        assert analytics.parse_duration("n/a") == 0
        assert analytics.parse_duration(None) == 0

    def test_call_stats(self):
        calls = [
            SimpleNamespace(status="answered", duration="1:00"),
            SimpleNamespace(status="answered", duration="30"),
            SimpleNamespace(status="missed", duration=None),
        ]
        assert analytics.call_stats(calls) == {
            "total": 3,
            "answered": 2,
            "missed": 1,
            "avg_duration": 45.0,
        }


def test_dashboard_stats_counts_local_today():
    now = datetime(2025, 3, 10, 15, 0)  # 11:00 in Toronto
    stats = analytics.dashboard_stats(
        residents=[object(), object()],
        bookings=[
            SimpleNamespace(start_date=datetime(2025, 3, 10, 20)),
            SimpleNamespace(start_date=datetime(2025, 3, 11, 3)),  # 23:00 on the 10th locally
            SimpleNamespace(start_date=datetime(2025, 3, 11, 14)),
        ],
        packages=[_package(), _package(status="picked_up")],
        messages=[
            _message("+15550001", "incoming", 0, is_read=False),
            _message("+15550001", "outgoing", 4),
        ],
        calls=[SimpleNamespace(status="missed"), SimpleNamespace(status="answered")],
        issues=[SimpleNamespace(status="open"), SimpleNamespace(status="resolved")],
        visitors=[SimpleNamespace(expected_arrival=datetime(2025, 3, 10, 18))],
        timezone_str="America/Toronto",
        now=now,
    )

    assert stats == {
        "total_residents": 2,
        "todays_bookings": 2,
        "pending_packages": 1,
        "unread_messages": 1,
        "missed_calls": 1,
        "open_issues": 1,
        "todays_visitors": 1,
        "response_time": 4.0,
    }
