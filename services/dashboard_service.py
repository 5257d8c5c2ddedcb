import logging
from datetime import datetime, timedelta

from sqlalchemy import select, func, union_all
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.patient import Patient
from models.prescription import Prescription
from models.certificate import Certificate
from core.time_utils import now_local, day_prefix, month_prefix

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def count_visits(db: Session, prefix: str) -> int:
    """Prescriptions plus certificates whose local timestamp starts with `prefix`."""
    pattern = f"{prefix}%"
    visits = union_all(
        select(Prescription.date.label("ts")).where(Prescription.date.like(pattern)),
        select(Certificate.created_at.label("ts")).where(Certificate.created_at.like(pattern)),
    ).subquery()
    return db.execute(select(func.count()).select_from(visits)).scalar() or 0


def weekly_stats(db: Session, today):
    """Visit counts for the last 7 days, oldest first, ending today."""
    stats = []
    for offset in range(6, -1, -1):
        d = today - timedelta(days=offset)
        stats.append({"label": WEEKDAY_LABELS[d.weekday()], "count": count_visits(db, day_prefix(d))})
    return stats


def yearly_stats(db: Session, year: int):
    """Visit counts for each month of `year`, January first."""
    return [
        {"label": MONTH_LABELS[month - 1], "count": count_visits(db, month_prefix(year, month))}
        for month in range(1, 13)
    ]


def get_dashboard_stats(db: Session, now: datetime | None = None):
    now = now or now_local()
    today = now.date()
    try:
        total_patients = db.execute(select(func.count(Patient.id))).scalar() or 0
        return {
            "success": True,
            "total_patients": total_patients,
            "today_count": count_visits(db, day_prefix(today)),
            "month_count": count_visits(db, month_prefix(today.year, today.month)),
            "weekly_stats": weekly_stats(db, today),
            "yearly_stats": yearly_stats(db, today.year),
        }
    except SQLAlchemyError as e:
        logger.exception("Dashboard statistics failed")
        return {"success": False, "error": str(e)}
