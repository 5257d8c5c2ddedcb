from datetime import date

from services.validation import validate_patient, validate_prescription, validate_certificate
from services.template_service import MedicineLine


def test_validate_patient():
    assert validate_patient("Asha", 30, "Female") is None
    assert validate_patient("  ", 30) == "Name is required."
    assert validate_patient("Asha", None) == "Age is required."
    assert validate_patient("Asha", "thirty") == "Age must be a whole number."
    assert validate_patient("Asha", 30, "Unknown") is not None


def test_validate_prescription():
    assert validate_prescription("Fever", [MedicineLine("ZINC")]) is None
    assert validate_prescription("", [MedicineLine("ZINC")]) == "Please enter a Diagnosis first"
    assert validate_prescription("Fever", []) == "Add at least one medicine"
    assert validate_prescription("Fever", [{"name": "  "}]) == "Add at least one medicine"


def test_validate_certificate():
    assert validate_certificate("Fever", "2026-02-01", "2026-02-03") is None
    assert validate_certificate("Fever", date(2026, 2, 1), date(2026, 2, 1)) is None
    assert validate_certificate("", "2026-02-01", "2026-02-03") == "Please enter a Diagnosis first"
    assert validate_certificate("Fever", None, "2026-02-03") == "Please select all dates"
    assert validate_certificate("Fever", "2026-02-05", "2026-02-03") == "End Date cannot be before Start Date"
    assert validate_certificate("Fever", "05-02-2026", "2026-02-03") == "Dates must be in YYYY-MM-DD form"
