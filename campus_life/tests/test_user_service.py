"""
Tests for UserService.

Tests cover:
1. Registration and mission seeding
2. Login
3. Profile read with the new-day mission reset
4. Notification preference
"""
import pytest
from datetime import timedelta

from campus_life.auth import decode_access_token
from campus_life.exceptions import (
    InvalidCredentialsException,
    UnauthorizedAccessException,
    UserAlreadyExistsException,
    UserNotFoundException,
    ValidationException,
)
from campus_life.models import DailyMission, User
from campus_life.schemas import LoginRequest, RegisterRequest
from campus_life.services.user_service import UserService


class TestRegister:
    """Tests for register"""

    def test_creates_user_with_missions(self, db_session):
        user, token = UserService(db_session).register(RegisterRequest(
            email="new@campus.test", username="newbie", password="Secret123"
        ))

        assert user.streak == 0
        assert user.total_xp == 0
        assert user.last_active_date is None
        assert user.password_hash != "Secret123"
        assert decode_access_token(token) == user.id

        missions = db_session.query(DailyMission).filter(DailyMission.user_id == user.id).all()
        assert len(missions) == 3
        assert all(m.xp_value == 5 and not m.completed for m in missions)

    @pytest.mark.parametrize("field", ["email", "username", "password"])
    def test_missing_field(self, db_session, field):
        data = {"email": "a@campus.test", "username": "a", "password": "Secret123"}
        data[field] = ""

        with pytest.raises(ValidationException) as exc_info:
            UserService(db_session).register(RegisterRequest(**data))

        assert str(exc_info.value) == "All fields are required"

    def test_duplicate_email(self, db_session, user):
        with pytest.raises(UserAlreadyExistsException):
            UserService(db_session).register(RegisterRequest(
                email=user.email, username="someone_else", password="Secret123"
            ))

    def test_duplicate_username(self, db_session, user):
        with pytest.raises(UserAlreadyExistsException):
            UserService(db_session).register(RegisterRequest(
                email="other@campus.test", username=user.username, password="Secret123"
            ))


class TestLogin:
    """Tests for login"""

    def test_valid_credentials(self, db_session, user):
        logged_in, token = UserService(db_session).login(
            LoginRequest(email=user.email, password="Secret123")
        )

        assert logged_in.id == user.id
        assert decode_access_token(token) == user.id

    def test_wrong_password(self, db_session, user):
        with pytest.raises(InvalidCredentialsException):
            UserService(db_session).login(LoginRequest(email=user.email, password="nope"))

    def test_unknown_email(self, db_session):
        with pytest.raises(InvalidCredentialsException):
            UserService(db_session).login(LoginRequest(email="ghost@campus.test", password="x"))

    def test_missing_fields(self, db_session):
        with pytest.raises(ValidationException) as exc_info:
            UserService(db_session).login(LoginRequest(email="a@campus.test"))

        assert str(exc_info.value) == "Email and password are required"


class TestGetProfile:
    """Tests for get_profile"""

    def _complete_all(self, db, user_id, day):
        for mission in db.query(DailyMission).filter(DailyMission.user_id == user_id):
            mission.completed = True
            mission.completed_date = day
        db.commit()

    def test_active_today_keeps_missions(self, db_session, make_user, now, today):
        user = make_user(streak=2, total_xp=35, last_active_date=now)
        self._complete_all(db_session, user.id, today)

        profile = UserService(db_session).get_profile(user.id, user.id, now=now)

        assert profile.streak == 2
        assert profile.total_xp == 35
        assert [m.completed for m in profile.daily_missions] == [True, True, True]
        assert [m.name for m in profile.daily_missions][0] == "Attended lectures today"

    def test_new_day_resets_missions(self, db_session, make_user, now, yesterday):
        """Missions show incomplete and stored flags are cleared, XP untouched"""
        user = make_user(total_xp=25, last_active_date=now - timedelta(days=1))
        self._complete_all(db_session, user.id, yesterday)

        profile = UserService(db_session).get_profile(user.id, user.id, now=now)

        assert all(not m.completed for m in profile.daily_missions)
        assert profile.total_xp == 25
        db_session.expire_all()
        stored = db_session.query(DailyMission).filter(DailyMission.user_id == user.id).all()
        assert all(not m.completed for m in stored)
        # completed_date is not cleared by the read-path reset
        assert all(m.completed_date == yesterday for m in stored)
        assert db_session.get(User, user.id).total_xp == 25

    def test_reset_is_idempotent(self, db_session, make_user, now, yesterday):
        user = make_user(last_active_date=now - timedelta(days=1))
        self._complete_all(db_session, user.id, yesterday)
        service = UserService(db_session)

        first = service.get_profile(user.id, user.id, now=now)
        second = service.get_profile(user.id, user.id, now=now)

        assert first == second

    def test_other_user_forbidden(self, db_session, user, now):
        with pytest.raises(UnauthorizedAccessException):
            UserService(db_session).get_profile(user.id, user.id + 1, now=now)

    def test_unknown_user(self, db_session, now):
        with pytest.raises(UserNotFoundException):
            UserService(db_session).get_profile(404, 404, now=now)


class TestNotifications:
    def test_toggle_preference(self, db_session, user):
        service = UserService(db_session)

        assert service.update_notifications(user.id, user.id, True) is True
        db_session.expire_all()
        assert db_session.get(User, user.id).notifications_enabled is True

        service.update_notifications(user.id, user.id, False)
        db_session.expire_all()
        assert db_session.get(User, user.id).notifications_enabled is False

    def test_other_user_forbidden(self, db_session, user):
        with pytest.raises(UnauthorizedAccessException):
            UserService(db_session).update_notifications(user.id, user.id + 1, True)

    def test_unknown_user(self, db_session):
        with pytest.raises(UserNotFoundException):
            UserService(db_session).update_notifications(404, 404, True)
