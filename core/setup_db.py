# core/setup_db.py

import logging

from sqlalchemy import inspect, text

from core.database import Base

logger = logging.getLogger(__name__)


# Columns added after the first release; older files get them on open.
essential_alters = {
    "patients": [
        ("phone", "TEXT"),
        ("created_at", "DATETIME"),
    ],
    "certificates": [
        ("start_date", "TEXT"),
        ("end_date", "TEXT"),
    ],
    "templates": [
        ("diagnosis", "TEXT"),
    ],
}


def column_exists(conn, table, column):
    cur = conn.execute(text(f"PRAGMA table_info({table})"))
    cols = [row[1] for row in cur.fetchall()]
    return column in cols


def migrate_columns(engine):
    """Add missing columns to tables created by earlier versions."""
    existing = set(inspect(engine).get_table_names())
    added = []
    with engine.begin() as conn:
        for table, columns in essential_alters.items():
            if table not in existing:
                continue
            for col, typ in columns:
                if not column_exists(conn, table, col):
                    logger.info("Adding column %s to %s", col, table)
                    conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {col} {typ}"))
                    added.append(f"{table}.{col}")
    return added


def create_schema(engine):
    """Apply additive migrations, then create missing tables and indexes."""
    # Register every model on Base.metadata
    import models  # noqa: F401

    # Existing tables first, so indexes on new columns can be created
    added = migrate_columns(engine)
    Base.metadata.create_all(bind=engine)

    # create_all skips the indexes of tables that already existed
    for table in Base.metadata.sorted_tables:
        for index in table.indexes:
            index.create(bind=engine, checkfirst=True)
    return added


def main():
    from core.config import DB_PATH, configure_logging
    from core.database import open_store

    configure_logging()
    print("Creating database tables...")

    store = open_store(DB_PATH)
    store.close()

    print(f"Database initialized successfully at {DB_PATH}.")


if __name__ == "__main__":
    main()
