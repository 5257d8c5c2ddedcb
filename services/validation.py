"""
Form checks run by the pages before anything is written.

Each function returns a message for the user, or None when the input is fine.
"""

from datetime import datetime

from core.time_utils import DATE_FORMAT


def validate_patient(name, age, gender=None):
    if not (name or "").strip():
        return "Name is required."
    if age in (None, ""):
        return "Age is required."
    try:
        age = int(age)
    except (TypeError, ValueError):
        return "Age must be a whole number."
    if age < 0 or age > 150:
        return "Age must be between 0 and 150."
    if gender is not None and gender not in ("Male", "Female", "Other"):
        return "Gender must be Male, Female or Other."
    return None


def validate_prescription(diagnosis, medicines):
    if not (diagnosis or "").strip():
        return "Please enter a Diagnosis first"
    named = [m for m in (medicines or []) if (_line_name(m) or "").strip()]
    if not named:
        return "Add at least one medicine"
    return None


def validate_certificate(diagnosis, start_date, end_date):
    if not (diagnosis or "").strip():
        return "Please enter a Diagnosis first"
    if not start_date or not end_date:
        return "Please select all dates"

    start = _as_date(start_date)
    end = _as_date(end_date)
    if start is None or end is None:
        return "Dates must be in YYYY-MM-DD form"
    if start > end:
        return "End Date cannot be before Start Date"
    return None


def _line_name(line):
    if isinstance(line, dict):
        return line.get("name")
    return getattr(line, "name", None)


def _as_date(value):
    if hasattr(value, "year") and not isinstance(value, str):
        return value if not isinstance(value, datetime) else value.date()
    try:
        return datetime.strptime(str(value), DATE_FORMAT).date()
    except ValueError:
        return None
