"""
Automatic database migration system.
Compares SQLAlchemy models with the actual SQLite schema and adds missing columns.
"""
import logging
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from campus_life.database import engine as default_engine, Base
from campus_life import models  # noqa: F401  Import to register all models

logger = logging.getLogger("campus_life.migrations")


def sqlalchemy_type_to_sqlite(sa_type) -> str:
    """Convert SQLAlchemy type to SQLite storage class"""
    sa_type_upper = str(sa_type).upper()

    if 'INT' in sa_type_upper or 'BOOLEAN' in sa_type_upper:
        return 'INTEGER'  # SQLite stores booleans as integers
    elif 'FLOAT' in sa_type_upper or 'NUMERIC' in sa_type_upper or 'REAL' in sa_type_upper:
        return 'REAL'
    else:
        return 'TEXT'  # Strings, dates and timestamps


def get_default_value(column) -> str:
    """Get default value for a column in SQL format"""
    default = column.default
    if default is None or not hasattr(default, 'arg'):
        return 'NULL'

    value = default.arg

    # Callable defaults (datetime.now) can't be expressed as literals
    if callable(value):
        return 'CURRENT_TIMESTAMP' if 'datetime' in str(value) else 'NULL'

    if isinstance(value, bool):
        return '1' if value else '0'
    elif isinstance(value, (int, float)):
        return str(value)
    elif isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    return 'NULL'


def build_add_column_sql(table_name: str, column) -> str:
    """ALTER TABLE statement that adds the model column to an existing table"""
    sqlite_type = sqlalchemy_type_to_sqlite(column.type)
    default_value = get_default_value(column)

    alter_sql = f"ALTER TABLE {table_name} ADD COLUMN {column.name} {sqlite_type}"

    if default_value != 'NULL':
        alter_sql += f" DEFAULT {default_value}"
        # SQLite only allows NOT NULL in ALTER TABLE when a default is given
        if not column.nullable:
            alter_sql += " NOT NULL"

    return alter_sql


def auto_migrate(engine: Engine = default_engine) -> int:
    """
    Add columns that exist on the models but not in the database.

    Returns:
        Number of columns added
    """
    logger.info("Starting automatic schema migration...")

    inspector = inspect(engine)
    existing_tables = inspector.get_table_names()
    migrations_applied = 0

    with engine.begin() as conn:
        for table_name, table in Base.metadata.tables.items():
            if table_name not in existing_tables:
                logger.warning(f"Table '{table_name}' doesn't exist. Run Base.metadata.create_all() first.")
                continue

            existing_columns = {col["name"] for col in inspector.get_columns(table_name)}

            for column in table.columns:
                if column.name in existing_columns:
                    continue

                alter_sql = build_add_column_sql(table_name, column)
                logger.info(f"Adding column '{column.name}' to table '{table_name}'")
                logger.debug(f"SQL: {alter_sql}")

                try:
                    conn.execute(text(alter_sql))
                    migrations_applied += 1
                except SQLAlchemyError as e:
                    logger.error(f"Failed to add column {table_name}.{column.name}: {e}")
                    raise

    if migrations_applied > 0:
        logger.info(f"Migration completed: {migrations_applied} column(s) added")
    else:
        logger.info("Schema is up to date - no migrations needed")

    return migrations_applied


def init_db(engine: Engine = default_engine) -> None:
    """Create missing tables, then add missing columns"""
    Base.metadata.create_all(bind=engine)
    auto_migrate(engine)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
