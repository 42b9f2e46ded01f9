"""
Daily check-in service.
Loads user state, asks the streak engine for the next streak and persists the result.
"""
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_life.constants import CHECKIN_XP
from campus_life.exceptions import (
    DatabaseException,
    DuplicateCheckinException,
    UnauthorizedAccessException,
    UserNotFoundException,
)
from campus_life.models import CheckinHistory
from campus_life.repositories.checkin_repository import CheckinRepository
from campus_life.repositories.user_repository import UserRepository
from campus_life.schemas import CheckinResponse
from campus_life.services.date_service import DateService
from campus_life.services.streak_service import StreakService
from campus_life.services.user_locks import user_lock

logger = logging.getLogger("campus_life.checkin")


class CheckinService:
    """Service for daily check-ins"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository()
        self.checkin_repo = CheckinRepository()

    def check_in(
        self,
        user_id: Optional[int],
        caller_id: int,
        now: Optional[datetime] = None
    ) -> CheckinResponse:
        """
        Record today's check-in for the caller.

        Args:
            user_id: User ID from the request body
            caller_id: Authenticated user ID
            now: Processing time (defaults to server clock)

        Returns:
            CheckinResponse with the new streak and XP

        Raises:
            UnauthorizedAccessException: user_id missing or not the caller
            UserNotFoundException: No such user
            DuplicateCheckinException: Already checked in today
            DatabaseException: Store failure
        """
        if user_id is None or user_id != caller_id:
            raise UnauthorizedAccessException(caller_id, user_id)

        now = now or DateService.now()
        today = DateService.get_today(now)

        with user_lock(user_id):
            try:
                user = self.user_repo.get_by_id(self.db, user_id)
                if not user:
                    raise UserNotFoundException(user_id)

                last_active = DateService.to_calendar_date(user.last_active_date)
                StreakService.ensure_can_check_in(user_id, last_active, today)

                history = self.checkin_repo.get_dates(self.db, user_id)
                streak = StreakService.calculate_streak(history, last_active, today)

                self.checkin_repo.add(self.db, CheckinHistory(
                    user_id=user_id,
                    checkin_date=today,
                    xp_earned=CHECKIN_XP,
                    created_at=now
                ))
                user.streak = streak
                user.last_active_date = now
                self.user_repo.add_xp(self.db, user_id, CHECKIN_XP)
                self.db.commit()
                self.db.refresh(user)
            except IntegrityError as e:
                # Another process recorded today's check-in first
                self.db.rollback()
                logger.warning(f"Concurrent check-in rejected for user {user_id}")
                raise DuplicateCheckinException(user_id) from e
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Check-in failed for user {user_id}: {e}")
                raise DatabaseException("Check-in", str(e)) from e

        logger.info(f"User {user_id} checked in: streak={user.streak}, total_xp={user.total_xp}")

        return CheckinResponse(
            streak=user.streak,
            total_xp=user.total_xp,
            last_active_date=user.last_active_date,
            xp_earned=CHECKIN_XP
        )
