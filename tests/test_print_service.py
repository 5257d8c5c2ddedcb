from datetime import datetime

from services.print_service import (
    render_prescription_html,
    render_certificate_html,
    paper_size,
    salutation,
)
from services.template_service import MedicineLine

PATIENT = {"name": "Asha", "age": 30, "gender": "Female"}
SETTINGS = {"clinicName": "Sunrise Clinic", "address": "Thrissur, Kerala", "doctorName": "Dr. Rao", "regNumber": "12345"}


def test_paper_size_defaults_to_a4():
    assert paper_size({}) == "A4"
    assert paper_size(None) == "A4"
    assert paper_size({"paperSize": "A5"}) == "A5"
    assert paper_size({"paperSize": "Letter"}) == "A4"


def test_prescription_html_lists_medicines_in_order():
    html = render_prescription_html(
        PATIENT,
        [MedicineLine("ZINC", "1-0-0", "5 Days", "After Food"), {"name": "ORS", "dosage": "SOS", "duration": "", "instruction": "With Food"}],
        "Viral Fever",
        SETTINGS,
        now=datetime(2026, 2, 15, 9, 5),
    )

    assert "Sunrise Clinic, Thrissur" in html
    assert "15-02-2026, 9:05 AM" in html
    assert "size: A4" in html
    assert html.index("ZINC") < html.index("ORS")
    assert "Viral Fever" in html


def test_prescription_html_escapes_input():
    html = render_prescription_html({"name": "<script>x</script>", "age": 1, "gender": "Other"}, [], "a & b", {})

    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html
    assert "a &amp; b" in html


def test_certificate_html_wording():
    html = render_certificate_html(
        PATIENT, "Viral Fever", "2026-02-01", "2026-02-03", datetime(2026, 2, 1), "Kochi", {**SETTINGS, "paperSize": "A5"}
    )

    assert "Mrs. Asha" in html
    assert "is under my treatment" in " ".join(html.split())
    assert "<strong>3</strong> days" in html
    assert "1 February 2026" in html
    assert "residing/working at <strong>Kochi</strong>" in html
    assert "size: A5" in html


def test_certificate_past_tense_after_rest():
    html = render_certificate_html(PATIENT, "Fever", "2026-02-01", "2026-02-03", "2026-02-10", "", SETTINGS)

    assert "was under my treatment" in " ".join(html.split())
    assert "residing" not in html


def test_salutation():
    assert salutation("Male") == ("Mr.", "He")
    assert salutation("Female") == ("Mrs.", "She")
    assert salutation("Other") == ("Mr./Mrs.", "He/She")
