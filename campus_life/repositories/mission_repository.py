"""
Mission repository - Data access layer for DailyMission model.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy import and_
from sqlalchemy.orm import Session

from campus_life.models import DailyMission


class MissionRepository:
    """Repository for DailyMission data access"""

    @staticmethod
    def get_for_user(db: Session, mission_id: int, user_id: int) -> Optional[DailyMission]:
        """Get a mission only if it belongs to the user"""
        return db.query(DailyMission).filter(
            and_(
                DailyMission.id == mission_id,
                DailyMission.user_id == user_id
            )
        ).first()

    @staticmethod
    def list_for_user(db: Session, user_id: int) -> List[DailyMission]:
        """Get all missions of a user in creation order"""
        return db.query(DailyMission).filter(
            DailyMission.user_id == user_id
        ).order_by(DailyMission.id).all()

    @staticmethod
    def add_all(db: Session, missions: List[DailyMission]) -> None:
        """Stage missions for insertion (caller commits)"""
        db.add_all(missions)

    @staticmethod
    def clear_completion_flags(db: Session, user_id: int) -> int:
        """
        Set completed=False on every mission of the user.
        completed_date is left as is. Returns number of rows touched.
        """
        return db.query(DailyMission).filter(
            DailyMission.user_id == user_id
        ).update({DailyMission.completed: False}, synchronize_session=False)

    @staticmethod
    def clear_completed_before(db: Session, day: date) -> int:
        """Reset every mission completed before the given day. Returns number of rows touched."""
        return db.query(DailyMission).filter(
            and_(
                DailyMission.completed == True,
                DailyMission.completed_date < day
            )
        ).update(
            {DailyMission.completed: False, DailyMission.completed_date: None},
            synchronize_session=False
        )
