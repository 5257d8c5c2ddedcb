import sqlite3

from sqlalchemy import inspect

from core.database import open_store
from services.patient_service import add_patient, search_patients


def test_fresh_schema_has_tables_and_indexes(store):
    inspector = inspect(store.engine)

    assert set(inspector.get_table_names()) >= {
        "patients", "prescriptions", "prescription_items", "certificates", "inventory", "templates", "settings",
    }
    assert {ix["name"] for ix in inspector.get_indexes("patients")} == {"idx_patients_name", "idx_patients_phone"}
    assert "idx_prescriptions_pid_date" in {ix["name"] for ix in inspector.get_indexes("prescriptions")}
    assert "idx_certificates_pid_date" in {ix["name"] for ix in inspector.get_indexes("certificates")}


def test_foreign_keys_enforced(store):
    with store.engine.connect() as conn:
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1


def test_old_file_gets_missing_columns(tmp_path):
    path = str(tmp_path / "old.db")
    con = sqlite3.connect(path)
    con.execute("CREATE TABLE patients (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, age INTEGER, gender TEXT)")
    con.execute("INSERT INTO patients (name, age, gender) VALUES ('Legacy', 50, 'Male')")
    con.commit()
    con.close()

    store = open_store(path)
    try:
        columns = {c["name"] for c in inspect(store.engine).get_columns("patients")}
        assert {"phone", "created_at"} <= columns

        with store.session() as db:
            add_patient(db, "Fresh", 20, "Female", "123")
            names = [p.name for p in search_patients(db, "")]
        assert names == ["Fresh", "Legacy"]
    finally:
        store.close()


def test_reopen_is_idempotent(tmp_path):
    path = str(tmp_path / "clinic.db")
    open_store(path).close()
    store = open_store(path)
    store.close()


def test_old_file_gets_indexes(tmp_path):
    path = str(tmp_path / "old.db")
    con = sqlite3.connect(path)
    con.execute("CREATE TABLE patients (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, age INTEGER, gender TEXT)")
    con.commit()
    con.close()

    store = open_store(path)
    try:
        names = {ix["name"] for ix in inspect(store.engine).get_indexes("patients")}
        assert names == {"idx_patients_name", "idx_patients_phone"}
    finally:
        store.close()
