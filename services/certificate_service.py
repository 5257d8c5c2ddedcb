import logging
from datetime import datetime, date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.certificate import Certificate
from core.time_utils import local_timestamp, parse_timestamp, DATE_FORMAT

logger = logging.getLogger(__name__)


def _iso(value):
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    return value


# ------------------------------------------
# Issue a medical certificate
# ------------------------------------------
def save_certificate(db: Session, patient_id: int, diagnosis: str, start_date, end_date, now: datetime | None = None):
    certificate = Certificate(
        patient_id=patient_id,
        diagnosis=diagnosis,
        start_date=_iso(start_date),
        end_date=_iso(end_date),
        created_at=local_timestamp(now),
    )
    try:
        db.add(certificate)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Could not save certificate for patient %s: %s", patient_id, e)
        return {"success": False, "error": str(e)}

    logger.info("Issued certificate %s for patient %s", certificate.id, patient_id)
    return {"success": True, "id": certificate.id}


def list_certificates(db: Session, patient_id: int):
    stmt = (
        select(Certificate)
        .where(Certificate.patient_id == patient_id)
        .order_by(Certificate.created_at.desc())
    )
    return db.scalars(stmt).all()


def rest_days(start_date, end_date) -> int:
    """Days of rest, counting both the first and the last day."""
    start = parse_timestamp(_iso(start_date))
    end = parse_timestamp(_iso(end_date))
    if start is None or end is None:
        return 0
    return abs((end.date() - start.date()).days) + 1
