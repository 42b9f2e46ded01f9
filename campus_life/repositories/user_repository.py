"""
User repository - Data access layer for User model.
Handles all database queries related to users.
"""
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from campus_life.models import User


class UserRepository:
    """Repository for User data access"""

    @staticmethod
    def get_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def exists(db: Session, email: str, username: str) -> bool:
        """Check whether email or username is already registered"""
        return db.query(User.id).filter(
            or_(User.email == email, User.username == username)
        ).first() is not None

    @staticmethod
    def add(db: Session, user: User) -> User:
        """Stage a new user and assign its ID (caller commits)"""
        db.add(user)
        db.flush()
        return user

    @staticmethod
    def add_xp(db: Session, user_id: int, delta: int) -> None:
        """Apply an XP delta in SQL so concurrent writers don't overwrite each other"""
        db.query(User).filter(User.id == user_id).update(
            {User.total_xp: User.total_xp + delta},
            synchronize_session=False
        )

    @staticmethod
    def set_notifications(db: Session, user_id: int, enabled: bool) -> int:
        """Update notification preference. Returns number of rows touched."""
        return db.query(User).filter(User.id == user_id).update(
            {User.notifications_enabled: enabled},
            synchronize_session=False
        )
