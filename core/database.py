import os
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from core.config import DB_PATH

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


def _sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.execute("PRAGMA journal_mode = WAL")
    cursor.close()


class ClinicStore:
    """Owns the engine and session factory for one clinic database file.

    Usage:
        store = open_store("data/clinic.db")
        with store.session() as db:
            patients = search_patients(db, "")
        store.close()
    """

    def __init__(self, path: str):
        self.path = path
        self.engine = create_engine(
            f"sqlite:///{path}",
            connect_args={"check_same_thread": False},
        )
        event.listen(self.engine, "connect", _sqlite_pragmas)

        # Session factory
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def create_schema(self):
        from core.setup_db import create_schema

        create_schema(self.engine)

    @contextmanager
    def session(self):
        """
        Context manager for database sessions.
        Automatically closes session when done.

        Usage:
            with store.session() as db:
                result = db.query(Model).all()
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def close(self):
        self.engine.dispose()
        logger.info("Closed clinic database at %s", self.path)


def open_store(path: str | None = None) -> ClinicStore:
    """Open (creating if needed) the clinic database and return its store."""
    path = path or DB_PATH
    folder = os.path.dirname(os.path.abspath(path))
    if not os.path.exists(folder):
        os.makedirs(folder)

    store = ClinicStore(path)
    store.create_schema()
    logger.info("Database connected at %s", path)
    return store
