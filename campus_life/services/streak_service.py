"""
Streak and mission engine.
Pure decision logic: receives current state and today's date, returns the next state.
Does NOT touch the database.
"""
from datetime import date
from typing import Iterable, List, Optional, Tuple

from campus_life.exceptions import DuplicateCheckinException
from campus_life.schemas import DailyMissionResponse, MissionToggleResult
from campus_life.services.date_service import DateService


class StreakService:
    """Rules for check-in streaks and daily mission state"""

    @staticmethod
    def ensure_can_check_in(user_id: int, last_active_date: Optional[date], today: date) -> None:
        """
        Reject a second check-in on the same calendar day.

        Raises:
            DuplicateCheckinException: If last_active_date is today
        """
        if last_active_date == today:
            raise DuplicateCheckinException(user_id)

    @staticmethod
    def count_consecutive_days(history: Iterable[date], today: date) -> int:
        """
        Count consecutive check-in days ending today.

        Walks backward from today one day at a time and stops at the first
        day without a check-in. Dates after today are ignored.
        """
        checked_in = set(history)
        streak = 0
        expected = today
        while expected in checked_in:
            streak += 1
            expected = DateService.get_yesterday(expected)
        return streak

    @staticmethod
    def calculate_streak(
        history: Iterable[date],
        last_active_date: Optional[date],
        today: date
    ) -> int:
        """
        Calculate the streak after checking in today.

        Today always counts as checked in. If the previous activity was
        neither yesterday nor today the streak restarts at 1, even when the
        history itself holds a longer chain.

        Args:
            history: Check-in dates in any order
            last_active_date: Calendar day of the previous check-in, None for first check-in
            today: Processing date

        Returns:
            Streak (always >= 1)
        """
        raw_streak = StreakService.count_consecutive_days(
            list(history) + [today], today
        )

        if last_active_date is None:
            return raw_streak

        yesterday = DateService.get_yesterday(today)
        if last_active_date not in (yesterday, today):
            return 1

        return raw_streak

    @staticmethod
    def toggle_mission(
        completed: bool,
        completed_date: Optional[date],
        xp_value: int,
        today: date
    ) -> MissionToggleResult:
        """
        Decide the outcome of a mission toggle.

        A completion left over from an earlier day is cleared and the tap is
        consumed by the reset (no XP change). Otherwise the flag flips and XP
        moves by xp_value in the matching direction. XP is never clamped.
        """
        if completed and completed_date != today:
            return MissionToggleResult(
                completed=False,
                completed_date=None,
                xp_delta=0,
                stale_reset=True
            )

        if completed:
            return MissionToggleResult(
                completed=False,
                completed_date=None,
                xp_delta=-xp_value
            )

        return MissionToggleResult(
            completed=True,
            completed_date=today,
            xp_delta=xp_value
        )

    @staticmethod
    def is_new_day(last_active_date: Optional[date], today: date) -> bool:
        """True when the user has not been active today"""
        return last_active_date != today

    @staticmethod
    def reset_missions_if_new_day(
        missions: List[DailyMissionResponse],
        last_active_date: Optional[date],
        today: date
    ) -> Tuple[List[DailyMissionResponse], bool]:
        """
        Present missions as incomplete when a new day has started.

        Returns:
            Tuple of (missions to show, whether the store must clear completion flags)
        """
        if not StreakService.is_new_day(last_active_date, today):
            return missions, False

        reset = [m.model_copy(update={"completed": False}) for m in missions]
        return reset, True
