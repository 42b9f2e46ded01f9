from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Date, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship
from datetime import datetime

from campus_life.database import Base
from campus_life.constants import CHECKIN_XP, MISSION_XP


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    username = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # Progression
    streak = Column(Integer, default=0, nullable=False)
    total_xp = Column(Integer, default=0, nullable=False)
    last_active_date = Column(DateTime, nullable=True)  # Timestamp of the last check-in

    notifications_enabled = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.now)

    daily_missions = relationship(
        "DailyMission",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DailyMission.id",
    )
    checkins = relationship(
        "CheckinHistory",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class DailyMission(Base):
    __tablename__ = "daily_missions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    mission_name = Column(String, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    completed_date = Column(Date, nullable=True)  # Calendar day the mission was completed
    xp_value = Column(Integer, default=MISSION_XP, nullable=False)

    user = relationship("User", back_populates="daily_missions")


class CheckinHistory(Base):
    __tablename__ = "checkin_history"
    __table_args__ = (
        # One check-in per user per calendar day, even across processes
        UniqueConstraint("user_id", "checkin_date", name="uq_checkin_user_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    checkin_date = Column(Date, nullable=False)
    xp_earned = Column(Integer, default=CHECKIN_XP, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    user = relationship("User", back_populates="checkins")
