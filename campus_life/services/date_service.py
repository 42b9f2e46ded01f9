"""
Date calculation service.
All day-boundary decisions are made on calendar dates from the server clock.
"""
from datetime import datetime, timedelta, date
from typing import Optional, Union


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def now() -> datetime:
        """Current server time (naive, local clock)"""
        return datetime.now()

    @staticmethod
    def get_today(now: Optional[datetime] = None) -> date:
        """
        Get the calendar date the request is processed on.

        Args:
            now: Processing time; defaults to the server clock

        Returns:
            Today's date
        """
        return (now or DateService.now()).date()

    @staticmethod
    def get_yesterday(today: date) -> date:
        """Calendar day before today"""
        return today - timedelta(days=1)

    @staticmethod
    def to_calendar_date(value: Optional[Union[datetime, date]]) -> Optional[date]:
        """
        Drop the time of day from a stored value.

        Args:
            value: datetime, date or None

        Returns:
            date or None
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        return value

    @staticmethod
    def parse_time(time_str: str) -> tuple[int, int]:
        """
        Parse time string into hour and minute.

        Args:
            time_str: Time string in "HH:MM" format

        Returns:
            Tuple of (hour, minute)

        Raises:
            ValueError: If time string is invalid
        """
        parts = time_str.split(":")
        if len(parts) != 2:
            raise ValueError(f"Invalid time format: {time_str}. Expected HH:MM")
        hour = int(parts[0])
        minute = int(parts[1])
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ValueError(f"Invalid time format: {time_str}. Expected HH:MM")
        return hour, minute
