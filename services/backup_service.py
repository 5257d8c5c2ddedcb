import os
import shutil
import logging
from datetime import datetime

from core.time_utils import now_local, DATE_FORMAT

logger = logging.getLogger(__name__)


def backup_filename(now: datetime | None = None) -> str:
    return f"Clinic_Backup_{(now or now_local()).strftime(DATE_FORMAT)}.db"


def _checkpoint(store):
    # Fold the WAL into the main file so the copy is complete
    with store.engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA wal_checkpoint(TRUNCATE)")


def export_database(store, destination: str | None):
    """Copy the live database file to `destination`.

    An empty destination means the user cancelled the picker; that is
    reported with `cancelled` rather than as an error.
    """
    if not os.path.exists(store.path):
        return {"success": False, "error": "Database file not found."}
    if not destination:
        return {"success": False, "cancelled": True}

    try:
        _checkpoint(store)
        shutil.copyfile(store.path, destination)
    except OSError as e:
        logger.warning("Backup to %s failed: %s", destination, e)
        return {"success": False, "error": str(e)}

    logger.info("Backed up database to %s", destination)
    return {"success": True, "path": destination}


def read_backup_bytes(store):
    """Contents of the live database file, for a download button. None if missing."""
    if not os.path.exists(store.path):
        return None
    _checkpoint(store)
    with open(store.path, "rb") as f:
        return f.read()
