from datetime import datetime

import pytest

from core.database import open_store


@pytest.fixture
def store(tmp_path):
    store = open_store(str(tmp_path / "clinic.db"))
    yield store
    store.close()


@pytest.fixture
def db(store):
    with store.session() as session:
        yield session


@pytest.fixture
def at():
    """Build a local datetime: at(2026, 3, 20, 9) -> 2026-03-20 09:00:00."""
    def _at(year, month, day, hour=10, minute=0, second=0):
        return datetime(year, month, day, hour, minute, second)
    return _at
