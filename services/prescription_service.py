import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select, literal, null, union_all
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.prescription import Prescription, PrescriptionItem
from models.certificate import Certificate
from models.inventory import InventoryItem
from core.time_utils import local_timestamp
from services.template_service import MedicineLine, strip_days

logger = logging.getLogger(__name__)

RX = "RX"
CERT = "CERT"


# ------------------------------------------
# History feed: two visit shapes
# ------------------------------------------
@dataclass
class PrescriptionVisit:
    id: int
    diagnosis: str | None
    date: str | None

    type = RX

    def as_dict(self):
        return {
            "id": self.id,
            "diagnosis": self.diagnosis,
            "date": self.date,
            "type": self.type,
            "start_date": None,
            "end_date": None,
        }


@dataclass
class CertificateVisit:
    id: int
    diagnosis: str | None
    date: str | None
    start_date: str | None
    end_date: str | None

    type = CERT

    def as_dict(self):
        return {
            "id": self.id,
            "diagnosis": self.diagnosis,
            "date": self.date,
            "type": self.type,
            "start_date": self.start_date,
            "end_date": self.end_date,
        }


def format_duration(value) -> str:
    """A bare number of days becomes 'N Days'; schedules are kept as typed."""
    text = str(value or "").strip()
    if text.isdigit():
        return f"{text} Days"
    return text


def strip_duration_suffix(value) -> str:
    return strip_days(value)


# ------------------------------------------
# Save a prescription and learn inventory defaults
# ------------------------------------------
def _item_values(med):
    if isinstance(med, dict):
        return MedicineLine(**{k: med.get(k) for k in ("name", "dosage", "duration", "instruction")})
    if isinstance(med, MedicineLine):
        return med
    raise TypeError(f"Cannot read a medicine line from {type(med).__name__}")


def save_prescription(db: Session, patient_id: int, diagnosis: str, medicines, now: datetime | None = None):
    """Insert the prescription, its items and the inventory upserts atomically."""
    try:
        lines = [_item_values(m) for m in medicines]
        prescription = Prescription(
            patient_id=patient_id,
            diagnosis=diagnosis,
            date=local_timestamp(now),
        )
        db.add(prescription)
        db.flush()

        for med in lines:
            db.add(
                PrescriptionItem(
                    prescription_id=prescription.id,
                    medicine=med.name,
                    dosage=med.dosage,
                    duration=med.duration,
                    instruction=med.instruction,
                )
            )
            upsert = sqlite_insert(InventoryItem).values(
                name=med.name,
                default_dosage=med.dosage,
                default_duration=med.duration,
                default_instruction=med.instruction,
            )
            upsert = upsert.on_conflict_do_update(
                index_elements=[InventoryItem.name],
                set_={
                    "default_dosage": upsert.excluded.default_dosage,
                    "default_duration": upsert.excluded.default_duration,
                    "default_instruction": upsert.excluded.default_instruction,
                },
            )
            db.flush()
            db.execute(upsert)

        db.commit()
    except (SQLAlchemyError, TypeError) as e:
        db.rollback()
        logger.exception("Prescription for patient %s rolled back", patient_id)
        return {"success": False, "error": str(e)}

    logger.info("Saved prescription %s (%d items)", prescription.id, len(lines))
    return {"success": True, "id": prescription.id}


# ------------------------------------------
# Patient history (prescriptions + certificates)
# ------------------------------------------
def get_patient_history(db: Session, patient_id: int):
    rx = select(
        Prescription.id.label("id"),
        Prescription.diagnosis.label("diagnosis"),
        Prescription.date.label("date"),
        literal(RX).label("type"),
        null().label("start_date"),
        null().label("end_date"),
    ).where(Prescription.patient_id == patient_id)

    cert = select(
        Certificate.id.label("id"),
        Certificate.diagnosis.label("diagnosis"),
        Certificate.created_at.label("date"),
        literal(CERT).label("type"),
        Certificate.start_date.label("start_date"),
        Certificate.end_date.label("end_date"),
    ).where(Certificate.patient_id == patient_id)

    feed = union_all(rx, cert).subquery()
    stmt = select(feed).order_by(feed.c.date.desc(), feed.c.id.desc())

    history = []
    for row in db.execute(stmt).mappings():
        if row["type"] == CERT:
            history.append(
                CertificateVisit(
                    id=row["id"],
                    diagnosis=row["diagnosis"],
                    date=row["date"],
                    start_date=row["start_date"],
                    end_date=row["end_date"],
                )
            )
        else:
            history.append(PrescriptionVisit(id=row["id"], diagnosis=row["diagnosis"], date=row["date"]))
    return history


def get_prescription_details(db: Session, prescription_id: int):
    stmt = (
        select(PrescriptionItem)
        .where(PrescriptionItem.prescription_id == prescription_id)
        .order_by(PrescriptionItem.id.asc())
    )
    return db.scalars(stmt).all()


def prescription_draft_from_history(db: Session, prescription_id: int):
    """Diagnosis and medicine lines of an earlier prescription, for re-issuing.

    Returns None if the prescription does not exist.
    """
    prescription = db.get(Prescription, prescription_id)
    if prescription is None:
        return None

    lines = [
        MedicineLine(
            name=item.medicine or "",
            dosage=item.dosage or "",
            duration=strip_days(item.duration),
            instruction=item.instruction or "",
        )
        for item in get_prescription_details(db, prescription_id)
    ]
    return {"diagnosis": prescription.diagnosis or "", "medicines": lines}
