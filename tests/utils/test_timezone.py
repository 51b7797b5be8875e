"""Tests for utils/timezone.py - UTC-everywhere time handling."""

from datetime import date, datetime, timezone
from unittest.mock import patch

from utils.timezone import now_utc, today_iso


class TestNowUtc:
    """Tests for now_utc()."""

    def test_returns_timezone_aware(self):
        """Result must have tzinfo set (not naive)."""
        result = now_utc()
        assert result.tzinfo is not None

    def test_is_utc(self):
        """Result timezone must be specifically UTC."""
        result = now_utc()
        assert result.tzinfo == timezone.utc


class TestTodayIso:
    """Tests for today_iso()."""

    def test_is_date_only_iso(self):
        result = today_iso()
        assert date.fromisoformat(result) is not None
        assert len(result) == 10

    def test_uses_utc_day(self):
        """23:30 UTC on the 19th is still the 19th, whatever the server zone."""
        fixed = datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc)
        with patch("utils.timezone.now_utc", return_value=fixed):
            assert today_iso() == "2026-10-19"
