import os
from datetime import datetime

from services.backup_service import export_database, backup_filename, read_backup_bytes
from services.patient_service import add_patient, search_patients
from core.database import open_store


def test_backup_filename():
    assert backup_filename(datetime(2026, 2, 15, 9, 0)) == "Clinic_Backup_2026-02-15.db"


def test_export_copies_live_data(store, tmp_path):
    with store.session() as db:
        add_patient(db, "Asha", 30, "Female", None)

    destination = str(tmp_path / "backup.db")
    result = export_database(store, destination)

    assert result == {"success": True, "path": destination}
    copy = open_store(destination)
    with copy.session() as db:
        assert [p.name for p in search_patients(db, "")] == ["Asha"]
    copy.close()


def test_export_cancelled_is_not_an_error(store):
    result = export_database(store, "")

    assert result == {"success": False, "cancelled": True}
    assert "error" not in result


def test_export_missing_source(store, tmp_path):
    os.remove(store.path)
    result = export_database(store, str(tmp_path / "backup.db"))

    assert result == {"success": False, "error": "Database file not found."}


def test_export_unwritable_destination(store, tmp_path):
    result = export_database(store, str(tmp_path / "missing" / "dir" / "backup.db"))

    assert result["success"] is False
    assert result["error"]


def test_read_backup_bytes(store):
    data = read_backup_bytes(store)

    assert data.startswith(b"SQLite format 3")
