"""Tests for business hours service."""

from datetime import datetime

import pytz

from app.domain.services.business_hours_service import is_within_business_hours


class TestBusinessHoursService:
    """Test cases for business hours checking logic."""

    def test_returns_true_when_no_hours_configured(self):
        """Test returns True when no business hours configured."""
        assert is_within_business_hours(None, None, "UTC") is True

    def test_within_business_hours(self):
        """Test returns True when within business hours."""
        now = datetime(2025, 1, 13, 10, 0, 0, tzinfo=pytz.UTC)
        assert is_within_business_hours("09:00", "17:00", "UTC", now=now) is True

    def test_before_business_hours(self):
        """Test returns False when before business hours."""
        now = datetime(2025, 1, 13, 8, 0, 0, tzinfo=pytz.UTC)
        assert is_within_business_hours("09:00", "17:00", "UTC", now=now) is False

    def test_after_business_hours(self):
        """Test returns False when after business hours."""
        now = datetime(2025, 1, 13, 18, 0, 0, tzinfo=pytz.UTC)
        assert is_within_business_hours("09:00", "17:00", "UTC", now=now) is False

    def test_at_boundaries(self):
        """Test opening and closing minutes count as open."""
        assert is_within_business_hours(
            "09:00", "17:00", "UTC", now=datetime(2025, 1, 13, 9, 0, tzinfo=pytz.UTC)
        ) is True
        assert is_within_business_hours(
            "09:00", "17:00", "UTC", now=datetime(2025, 1, 13, 17, 0, tzinfo=pytz.UTC)
        ) is True

    def test_overnight_hours(self):
        """Test a desk staffed overnight."""
        late = datetime(2025, 1, 13, 23, 30, tzinfo=pytz.UTC)
        noon = datetime(2025, 1, 13, 12, 0, tzinfo=pytz.UTC)
        assert is_within_business_hours("22:00", "06:00", "UTC", now=late) is True
        assert is_within_business_hours("22:00", "06:00", "UTC", now=noon) is False

    def test_naive_now_is_treated_as_utc(self):
        """Test naive timestamps (as stored) are read as UTC."""
        # 14:00 UTC is 09:00 in Toronto in January
        now = datetime(2025, 1, 13, 14, 0, 0)
        assert is_within_business_hours("09:00", "17:00", "America/Toronto", now=now) is True
        now = datetime(2025, 1, 13, 13, 0, 0)
        assert is_within_business_hours("09:00", "17:00", "America/Toronto", now=now) is False

    def test_handles_invalid_timezone_gracefully(self):
        """Test handles invalid timezone by defaulting to open."""
        assert is_within_business_hours("09:00", "17:00", "Invalid/Timezone") is True

    def test_handles_invalid_time_format_gracefully(self):
        """Test handles invalid time format by defaulting to open."""
        assert is_within_business_hours("invalid", "17:00", "UTC") is True
