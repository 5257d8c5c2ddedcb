from sqlalchemy.exc import OperationalError

from services.inventory_service import (
    list_inventory,
    add_medicine,
    update_medicine,
    delete_medicine,
    bulk_add_medicines,
    normalize_medicine_name,
    search_inventory,
    get_medicine,
    DUPLICATE_ERROR,
)


def test_list_is_sorted_by_name(db):
    for name in ("ZINC", "AMOXICILLIN", "PARACETAMOL"):
        add_medicine(db, name, "", "", "After Food")

    assert [i.name for i in list_inventory(db)] == ["AMOXICILLIN", "PARACETAMOL", "ZINC"]


def test_add_rejects_exact_duplicate(db):
    assert add_medicine(db, "ZINC", "1-0-0", "5 Days", "After Food")["success"] is True

    result = add_medicine(db, "ZINC", "0-0-1", "3 Days", "Before Food")

    assert result == {"success": False, "error": DUPLICATE_ERROR}
    assert list_inventory(db)[0].default_dosage == "1-0-0"


def test_update_overwrites_by_id(db):
    mid = add_medicine(db, "ZINC", "1-0-0", "5 Days", "After Food")["id"]

    result = update_medicine(db, mid, "ZINC SULPHATE", "0-1-0", "10 Days", "With Food")

    assert result == {"success": True, "updated": True}
    db.expire_all()
    item = get_medicine(db, mid)
    assert (item.name, item.default_dosage, item.default_duration, item.default_instruction) == (
        "ZINC SULPHATE", "0-1-0", "10 Days", "With Food"
    )


def test_update_rename_onto_existing_name(db):
    add_medicine(db, "ZINC", "", "", "")
    mid = add_medicine(db, "IRON", "", "", "")["id"]

    result = update_medicine(db, mid, "ZINC", "", "", "")

    assert result["success"] is False
    assert result["error"] == DUPLICATE_ERROR


def test_update_missing_id(db):
    assert update_medicine(db, 77, "X", "", "", "")["updated"] is False


def test_delete_medicine(db):
    mid = add_medicine(db, "ZINC", "", "", "")["id"]

    assert delete_medicine(db, mid) == {"success": True, "deleted": True}
    assert list_inventory(db) == []
    assert delete_medicine(db, mid)["deleted"] is False


def test_bulk_add_normalizes_and_counts_inserted(db):
    add_medicine(db, "ZINC", "1-0-0", "5 Days", "Before Food")

    result = bulk_add_medicines(db, ["  paracetamol ", "", "   ", "zinc", "Cetirizine", "PARACETAMOL"])

    assert result == {"success": True, "count": 2}
    items = {i.name: i for i in list_inventory(db)}
    assert set(items) == {"CETIRIZINE", "PARACETAMOL", "ZINC"}
    assert items["PARACETAMOL"].default_instruction == "After Food"
    assert items["PARACETAMOL"].default_dosage == ""
    # existing defaults are not overwritten
    assert items["ZINC"].default_instruction == "Before Food"


def test_bulk_add_is_idempotent(db):
    assert bulk_add_medicines(db, ["Azithromycin"])["count"] == 1
    assert bulk_add_medicines(db, ["Azithromycin"])["count"] == 0
    assert len(list_inventory(db)) == 1


def test_normalize_medicine_name():
    assert normalize_medicine_name("  tab dolo 650 ") == "TAB DOLO 650"
    assert normalize_medicine_name(None) == ""


def test_search_ignores_dosage_form_prefix(db):
    bulk_add_medicines(db, ["TAB PARACETAMOL", "SYR. PARACETAMOL", "PANTOPRAZOLE", "CAP AMOXICILLIN"])
    items = list_inventory(db)

    found = [i.name for i in search_inventory(items, "para")]

    assert found == ["SYR. PARACETAMOL", "TAB PARACETAMOL"]
    assert [i.name for i in search_inventory(items, "tab amox")] == ["CAP AMOXICILLIN"]
    assert search_inventory(items, "") == []


def test_delete_medicine_reports_database_error(store, monkeypatch):
    with store.session() as db:
        mid = add_medicine(db, "ZINC", "", "", "")["id"]

    with store.session() as db:
        def failing_commit():
            raise OperationalError("DELETE FROM inventory", {}, Exception("database is locked"))

        monkeypatch.setattr(db, "commit", failing_commit)
        result = delete_medicine(db, mid)

    assert result["success"] is False
    assert result["deleted"] is False
    assert "database is locked" in result["error"]

    with store.session() as db:
        assert [i.id for i in list_inventory(db)] == [mid]
