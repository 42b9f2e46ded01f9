"""
Check-in repository - Data access layer for the check-in ledger.
"""
from datetime import date
from typing import List
from sqlalchemy.orm import Session

from campus_life.models import CheckinHistory


class CheckinRepository:
    """Repository for CheckinHistory data access"""

    @staticmethod
    def get_dates(db: Session, user_id: int) -> List[date]:
        """Get all check-in dates of a user, newest first"""
        rows = db.query(CheckinHistory.checkin_date).filter(
            CheckinHistory.user_id == user_id
        ).order_by(CheckinHistory.checkin_date.desc()).all()
        return [row.checkin_date for row in rows]

    @staticmethod
    def add(db: Session, checkin: CheckinHistory) -> CheckinHistory:
        """Stage a check-in event (caller commits)"""
        db.add(checkin)
        return checkin
