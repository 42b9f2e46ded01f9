"""
Shared fixtures: in-memory database, fixed dates, users and an HTTP client.
"""
import pytest
import threading
from datetime import date, datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from campus_life.database import Base, enable_sqlite_foreign_keys, get_db
from campus_life.models import CheckinHistory, User
from campus_life.passwords import hash_password
from campus_life.services.mission_service import MissionService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def today():
    return date(2026, 1, 30)


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def now(today):
    return datetime.combine(today, datetime.min.time()).replace(hour=12)


@pytest.fixture
def make_user(db_session):
    """Factory creating a user with the default missions"""
    counter = {"n": 0}

    def _make_user(streak=0, total_xp=0, last_active_date=None, password="Secret123"):
        counter["n"] += 1
        user = User(
            email=f"student{counter['n']}@campus.test",
            username=f"student{counter['n']}",
            password_hash=hash_password(password),
            streak=streak,
            total_xp=total_xp,
            last_active_date=last_active_date,
        )
        db_session.add(user)
        db_session.flush()
        db_session.add_all(MissionService.build_default_missions(user.id))
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


def add_checkins(db, user_id, days):
    """Insert check-in events for the given dates"""
    for day in days:
        db.add(CheckinHistory(user_id=user_id, checkin_date=day, xp_earned=10))
    db.commit()


@pytest.fixture
def client(db_session):
    from campus_life.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def registered(client):
    """Register through the API and return (user_id, auth headers)"""
    response = client.post("/api/auth/register", json={
        "email": "ada@campus.test",
        "username": "ada",
        "password": "Secret123",
    })
    assert response.status_code == 200
    body = response.json()
    return body["userId"], {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def file_session_factory(tmp_path):
    """Sessions on an on-disk database, one connection per thread"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'campus_life.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def run_in_threads(count, action):
    """Start `count` threads released together; returns each action's outcome"""
    barrier = threading.Barrier(count)
    outcomes = []
    outcomes_lock = threading.Lock()

    def worker():
        barrier.wait()
        outcome = action()
        with outcomes_lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return outcomes
