import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select, func, or_, delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.patient import Patient
from models.prescription import Prescription, PrescriptionItem
from models.certificate import Certificate
from core.config import RECENT_PATIENT_LIMIT
from core.time_utils import local_timestamp

logger = logging.getLogger(__name__)

GENDERS = ["Male", "Female", "Other"]


@dataclass
class PatientSummary:
    """A patient row plus the derived last visit, as shown on the list page."""

    id: int
    name: str
    age: int | None
    gender: str | None
    phone: str | None
    created_at: str | None
    last_visit: str | None = None

    @property
    def display_date(self):
        """Last visit, or the registration time for patients never seen."""
        return self.last_visit or self.created_at


# ------------------------------------------
# Derived "last visit" expression
# ------------------------------------------
def _last_visit_column():
    last_rx = (
        select(func.max(Prescription.date))
        .where(Prescription.patient_id == Patient.id)
        .correlate(Patient)
        .scalar_subquery()
    )
    last_cert = (
        select(func.max(Certificate.created_at))
        .where(Certificate.patient_id == Patient.id)
        .correlate(Patient)
        .scalar_subquery()
    )
    # SQLite's two-argument max() is the scalar greatest-of
    return func.max(func.coalesce(last_rx, ""), func.coalesce(last_cert, ""))


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ------------------------------------------
# Search / list patients
# ------------------------------------------
def search_patients(db: Session, query: str = "", limit: int = RECENT_PATIENT_LIMIT):
    """Return patients ordered by most recent activity.

    A blank query returns the `limit` most recently active patients. Otherwise
    names are matched by prefix (case-insensitive) and phones by substring,
    and every match is returned.
    """
    last_visit = _last_visit_column().label("last_visit")
    stmt = select(Patient, last_visit)

    q = (query or "").strip()
    if q:
        term = _escape_like(q)
        stmt = stmt.where(
            or_(
                # SQLite folds case for ASCII letters only; "émile" will not match "Émile"
                Patient.name.ilike(f"{term}%", escape="\\"),
                Patient.phone.like(f"%{term}%", escape="\\"),
            )
        )

    activity = func.max(last_visit, func.coalesce(Patient.created_at, ""))
    stmt = stmt.order_by(activity.desc(), Patient.id.desc())

    if not q:
        stmt = stmt.limit(limit)

    results = []
    for patient, visit in db.execute(stmt).all():
        results.append(
            PatientSummary(
                id=patient.id,
                name=patient.name,
                age=patient.age,
                gender=patient.gender,
                phone=patient.phone,
                created_at=patient.created_at,
                last_visit=visit or None,
            )
        )
    return results


def get_patient(db: Session, patient_id: int):
    return db.get(Patient, patient_id)


def get_last_visit(db: Session, patient_id: int):
    """Latest prescription or certificate timestamp for one patient, or None."""
    stmt = select(_last_visit_column()).select_from(Patient).where(Patient.id == patient_id)
    value = db.execute(stmt).scalar()
    return value or None


# ------------------------------------------
# Create a new patient
# ------------------------------------------
def add_patient(db: Session, name: str, age: int, gender: str, phone: str | None = None, now: datetime | None = None):
    patient = Patient(
        name=name,
        age=age,
        gender=gender,
        phone=phone,
        created_at=local_timestamp(now),
    )

    try:
        db.add(patient)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Could not add patient %r: %s", name, e)
        return {"success": False, "error": str(e)}

    logger.info("Registered patient %s", patient.id)
    return {"success": True, "id": patient.id}


# ------------------------------------------
# Update patient basic info (created_at is immutable)
# ------------------------------------------
def update_patient(db: Session, patient_id: int, name: str, age: int, gender: str, phone: str | None = None):
    stmt = (
        update(Patient)
        .where(Patient.id == patient_id)
        .values(name=name, age=age, gender=gender, phone=phone)
        .execution_options(synchronize_session=False)
    )
    try:
        result = db.execute(stmt)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Could not update patient %s: %s", patient_id, e)
        return {"success": False, "updated": False, "error": str(e)}

    updated = result.rowcount > 0
    return {"success": updated, "updated": updated}


# ------------------------------------------
# Delete a patient and everything issued to them
# ------------------------------------------
def delete_patient(db: Session, patient_id: int):
    rx_ids = select(Prescription.id).where(Prescription.patient_id == patient_id)
    statements = [
        # items -> prescriptions -> certificates -> patient
        delete(PrescriptionItem).where(PrescriptionItem.prescription_id.in_(rx_ids)),
        delete(Prescription).where(Prescription.patient_id == patient_id),
        delete(Certificate).where(Certificate.patient_id == patient_id),
        delete(Patient).where(Patient.id == patient_id),
    ]
    try:
        for stmt in statements:
            result = db.execute(stmt.execution_options(synchronize_session=False))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Delete of patient %s rolled back", patient_id)
        return {"success": False, "deleted": False, "error": str(e)}

    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted patient %s and their records", patient_id)
    return {"success": True, "deleted": deleted}
