"""
Tests for the automatic schema migration.
"""
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.pool import StaticPool

from campus_life.auto_migrate import auto_migrate, build_add_column_sql, init_db
from campus_life.models import User


def test_adds_missing_column():
    engine = create_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    with engine.begin() as conn:
        conn.execute(text("ALTER TABLE users DROP COLUMN notifications_enabled"))

    added = auto_migrate(engine)

    assert added == 1
    columns = {c["name"] for c in inspect(engine).get_columns("users")}
    assert "notifications_enabled" in columns


def test_up_to_date_schema(engine):
    assert auto_migrate(engine) == 0


def test_not_null_column_gets_default():
    sql = build_add_column_sql("users", User.__table__.c.total_xp)

    assert sql == "ALTER TABLE users ADD COLUMN total_xp INTEGER DEFAULT 0 NOT NULL"


def test_nullable_column_without_default():
    sql = build_add_column_sql("users", User.__table__.c.last_active_date)

    assert sql == "ALTER TABLE users ADD COLUMN last_active_date TEXT"
