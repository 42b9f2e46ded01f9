"""
Tests for DateService.
"""
import pytest
from datetime import date, datetime
from unittest.mock import patch

from campus_life.services.date_service import DateService


class TestToday:
    """Tests for get_today"""

    def test_uses_given_time(self):
        assert DateService.get_today(datetime(2026, 1, 30, 23, 59)) == date(2026, 1, 30)

    def test_defaults_to_server_clock(self):
        with patch('campus_life.services.date_service.datetime') as mock_dt:
            mock_dt.now.return_value = datetime(2026, 1, 30, 0, 0, 0)
            result = DateService.get_today()

        assert result == date(2026, 1, 30)

    def test_yesterday_across_year(self):
        assert DateService.get_yesterday(date(2026, 1, 1)) == date(2025, 12, 31)


class TestToCalendarDate:
    def test_drops_time(self):
        assert DateService.to_calendar_date(datetime(2026, 1, 30, 18, 45)) == date(2026, 1, 30)

    def test_keeps_date(self):
        assert DateService.to_calendar_date(date(2026, 1, 30)) == date(2026, 1, 30)

    def test_none(self):
        assert DateService.to_calendar_date(None) is None


class TestParseTime:
    def test_valid(self):
        assert DateService.parse_time("06:30") == (6, 30)

    @pytest.mark.parametrize("value", ["24:00", "7", "12:61", "ab:cd"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            DateService.parse_time(value)
