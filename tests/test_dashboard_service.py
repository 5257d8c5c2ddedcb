from services.patient_service import add_patient
from services.prescription_service import save_prescription
from services.certificate_service import save_certificate
from services.dashboard_service import get_dashboard_stats, count_visits

MED = [{"name": "ZINC", "dosage": "1-0-0", "duration": "5 Days", "instruction": "After Food"}]


def test_empty_dashboard(db, at):
    stats = get_dashboard_stats(db, now=at(2026, 3, 20))

    assert stats["success"] is True
    assert stats["total_patients"] == 0
    assert stats["today_count"] == 0
    assert stats["month_count"] == 0
    assert len(stats["weekly_stats"]) == 7
    assert len(stats["yearly_stats"]) == 12


def test_month_and_week_buckets(db, at):
    pid = add_patient(db, "Asha", 30, "Female", None, now=at(2026, 1, 1))["id"]
    for day in (18, 19, 20):
        save_prescription(db, pid, "Fever", MED, now=at(2026, 3, day))
    save_prescription(db, pid, "Fever", MED, now=at(2026, 2, 25))

    stats = get_dashboard_stats(db, now=at(2026, 3, 20, 18))

    assert stats["month_count"] == 3
    assert stats["today_count"] == 1
    assert sum(d["count"] for d in stats["weekly_stats"]) == 3
    assert [d["count"] for d in stats["weekly_stats"]] == [0, 0, 0, 0, 1, 1, 1]


def test_week_labels_end_today(db, at):
    # 2026-03-20 is a Friday
    stats = get_dashboard_stats(db, now=at(2026, 3, 20))

    assert [d["label"] for d in stats["weekly_stats"]] == ["Sat", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri"]


def test_week_spans_month_boundary(db, at):
    pid = add_patient(db, "Asha", 30, "Female", None)["id"]
    save_prescription(db, pid, "Fever", MED, now=at(2026, 2, 28))

    stats = get_dashboard_stats(db, now=at(2026, 3, 2))

    assert stats["month_count"] == 0
    assert stats["weekly_stats"][4]["count"] == 1


def test_certificates_and_prescriptions_both_count(db, at):
    pid = add_patient(db, "Asha", 30, "Female", None)["id"]
    save_prescription(db, pid, "Fever", MED, now=at(2026, 3, 20, 9))
    save_certificate(db, pid, "Fever", "2026-03-20", "2026-03-22", now=at(2026, 3, 20, 9, 5))

    stats = get_dashboard_stats(db, now=at(2026, 3, 20, 12))

    assert stats["today_count"] == 2
    assert stats["total_patients"] == 1


def test_yearly_stats(db, at):
    pid = add_patient(db, "Asha", 30, "Female", None)["id"]
    save_prescription(db, pid, "Fever", MED, now=at(2026, 1, 5))
    save_prescription(db, pid, "Fever", MED, now=at(2026, 12, 31, 23, 59, 59))
    save_certificate(db, pid, "Fever", "2026-06-01", "2026-06-02", now=at(2026, 6, 1))
    save_prescription(db, pid, "Fever", MED, now=at(2025, 6, 1))

    yearly = get_dashboard_stats(db, now=at(2026, 7, 1))["yearly_stats"]

    assert yearly[0] == {"label": "Jan", "count": 1}
    assert yearly[5] == {"label": "Jun", "count": 1}
    assert yearly[11] == {"label": "Dec", "count": 1}
    assert sum(m["count"] for m in yearly) == 3


def test_count_visits_by_prefix(db, at):
    pid = add_patient(db, "Asha", 30, "Female", None)["id"]
    save_prescription(db, pid, "Fever", MED, now=at(2026, 3, 1))
    save_prescription(db, pid, "Fever", MED, now=at(2026, 3, 10))

    assert count_visits(db, "2026-03") == 2
    assert count_visits(db, "2026-03-1") == 1
    assert count_visits(db, "2026-04") == 0
