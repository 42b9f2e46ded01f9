"""
Daily mission service.
Handles mission toggles, registration seeding and the nightly stale-completion pass.
"""
import logging
from datetime import date, datetime
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_life.constants import DEFAULT_MISSIONS, MISSION_XP
from campus_life.exceptions import (
    DatabaseException,
    MissionNotFoundException,
    UnauthorizedAccessException,
)
from campus_life.models import DailyMission
from campus_life.repositories.mission_repository import MissionRepository
from campus_life.repositories.user_repository import UserRepository
from campus_life.schemas import MissionToggleResponse
from campus_life.services.date_service import DateService
from campus_life.services.streak_service import StreakService
from campus_life.services.user_locks import user_lock

logger = logging.getLogger("campus_life.missions")


class MissionService:
    """Service for daily missions"""

    def __init__(self, db: Session):
        self.db = db
        self.mission_repo = MissionRepository()
        self.user_repo = UserRepository()

    @staticmethod
    def build_default_missions(user_id: int) -> List[DailyMission]:
        """Missions every new user starts with"""
        return [
            DailyMission(
                user_id=user_id,
                mission_name=name,
                completed=False,
                xp_value=MISSION_XP
            )
            for name in DEFAULT_MISSIONS
        ]

    def seed_default_missions(self, user_id: int) -> List[DailyMission]:
        """Stage the default missions for a new user (caller commits)"""
        missions = self.build_default_missions(user_id)
        self.mission_repo.add_all(self.db, missions)
        return missions

    def toggle(
        self,
        mission_id: int,
        user_id: Optional[int],
        caller_id: int,
        now: Optional[datetime] = None
    ) -> MissionToggleResponse:
        """
        Toggle a mission for the caller.

        Raises:
            UnauthorizedAccessException: user_id missing or not the caller
            MissionNotFoundException: Unknown mission or owned by another user
            DatabaseException: Store failure
        """
        if user_id is None or user_id != caller_id:
            raise UnauthorizedAccessException(caller_id, user_id)

        today = DateService.get_today(now)

        with user_lock(user_id):
            try:
                mission = self.mission_repo.get_for_user(self.db, mission_id, user_id)
                if not mission:
                    raise MissionNotFoundException(mission_id)

                result = StreakService.toggle_mission(
                    bool(mission.completed),
                    mission.completed_date,
                    mission.xp_value,
                    today
                )

                mission.completed = result.completed
                mission.completed_date = result.completed_date
                if result.xp_delta:
                    self.user_repo.add_xp(self.db, user_id, result.xp_delta)
                self.db.commit()

                user = self.user_repo.get_by_id(self.db, user_id)
                self.db.refresh(user)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Mission {mission_id} toggle failed for user {user_id}: {e}")
                raise DatabaseException("Update", str(e)) from e

        if result.stale_reset:
            logger.info(f"Mission {mission_id} of user {user_id} had a stale completion, reset")
        else:
            logger.info(
                f"Mission {mission_id} of user {user_id} -> completed={result.completed}, "
                f"xp {result.xp_delta:+d}"
            )

        return MissionToggleResponse(
            completed=result.completed,
            total_xp=user.total_xp,
            xp_earned=result.xp_delta
        )

    def reset_stale_completions(self, today: Optional[date] = None) -> int:
        """
        Clear every completion recorded before today. XP is not touched.
        Safe to run any number of times.

        Returns:
            Number of missions reset
        """
        today = today or DateService.get_today()
        try:
            count = self.mission_repo.clear_completed_before(self.db, today)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Stale mission reset failed: {e}")
            raise DatabaseException("Mission reset", str(e)) from e
        return count
