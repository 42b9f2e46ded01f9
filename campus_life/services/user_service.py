"""
User service.
Registration, login, the profile/dashboard read and notification preference.
"""
import logging
from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_life.auth import create_access_token
from campus_life.constants import MSG_ALL_FIELDS_REQUIRED, MSG_LOGIN_FIELDS_REQUIRED
from campus_life.exceptions import (
    DatabaseException,
    InvalidCredentialsException,
    UnauthorizedAccessException,
    UserAlreadyExistsException,
    UserNotFoundException,
    ValidationException,
)
from campus_life.models import User
from campus_life.passwords import hash_password, verify_password
from campus_life.repositories.mission_repository import MissionRepository
from campus_life.repositories.user_repository import UserRepository
from campus_life.schemas import (
    DailyMissionResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from campus_life.services.date_service import DateService
from campus_life.services.mission_service import MissionService
from campus_life.services.streak_service import StreakService

logger = logging.getLogger("campus_life.users")


class UserService:
    """Service for user accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository()
        self.mission_repo = MissionRepository()
        self.mission_service = MissionService(db)

    def register(self, data: RegisterRequest) -> Tuple[User, str]:
        """
        Create a user with zeroed progression and the default missions.
        User and missions are committed together.

        Returns:
            Tuple of (user, access token)
        """
        if not data.email or not data.username or not data.password:
            raise ValidationException(MSG_ALL_FIELDS_REQUIRED)

        user = User(
            email=data.email,
            username=data.username,
            password_hash=hash_password(data.password),
            streak=0,
            total_xp=0,
            notifications_enabled=False
        )

        try:
            if self.user_repo.exists(self.db, data.email, data.username):
                raise UserAlreadyExistsException(data.email, data.username)

            self.user_repo.add(self.db, user)
            self.mission_service.seed_default_missions(user.id)
            self.db.commit()
        except IntegrityError as e:
            # Lost a race against another registration with the same email/username
            self.db.rollback()
            raise UserAlreadyExistsException(data.email, data.username) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Registration failed for {data.email}: {e}")
            raise DatabaseException("Registration", str(e)) from e

        logger.info(f"Registered user {user.id} ({user.username})")
        return user, create_access_token(user.id)

    def login(self, data: LoginRequest) -> Tuple[User, str]:
        """
        Check credentials and issue a token.

        Returns:
            Tuple of (user, access token)
        """
        if not data.email or not data.password:
            raise ValidationException(MSG_LOGIN_FIELDS_REQUIRED)

        try:
            user = self.user_repo.get_by_email(self.db, data.email)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Login lookup failed for {data.email}: {e}")
            raise DatabaseException("Login", str(e)) from e

        if not user or not verify_password(data.password, user.password_hash):
            logger.warning(f"Failed login for {data.email}")
            raise InvalidCredentialsException()

        return user, create_access_token(user.id)

    def get_profile(
        self,
        user_id: int,
        caller_id: int,
        now: Optional[datetime] = None
    ) -> UserResponse:
        """
        Get user data with missions.

        On a new day every mission is shown as incomplete and the stored
        completion flags are cleared. XP and completed_date are left alone.
        """
        if user_id != caller_id:
            raise UnauthorizedAccessException(caller_id, user_id)

        today = DateService.get_today(now)

        try:
            user = self.user_repo.get_by_id(self.db, user_id)
            if not user:
                raise UserNotFoundException(user_id)

            missions = [
                DailyMissionResponse(
                    id=m.id,
                    name=m.mission_name,
                    completed=bool(m.completed),
                    xp=m.xp_value
                )
                for m in self.mission_repo.list_for_user(self.db, user_id)
            ]

            missions, needs_reset = StreakService.reset_missions_if_new_day(
                missions,
                DateService.to_calendar_date(user.last_active_date),
                today
            )

            if needs_reset:
                self.mission_repo.clear_completion_flags(self.db, user_id)
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Fetching user {user_id} failed: {e}")
            raise DatabaseException("Fetch", str(e)) from e

        return UserResponse(
            id=user.id,
            email=user.email,
            username=user.username,
            streak=user.streak,
            total_xp=user.total_xp,
            last_active_date=user.last_active_date,
            notifications_enabled=bool(user.notifications_enabled),
            daily_missions=missions
        )

    def update_notifications(self, user_id: int, caller_id: int, enabled: bool) -> bool:
        """Store the notification preference. Returns the stored value."""
        if user_id != caller_id:
            raise UnauthorizedAccessException(caller_id, user_id)

        try:
            updated = self.user_repo.set_notifications(self.db, user_id, enabled)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Notification update failed for user {user_id}: {e}")
            raise DatabaseException("Update", str(e)) from e

        if not updated:
            raise UserNotFoundException(user_id)
        return enabled
