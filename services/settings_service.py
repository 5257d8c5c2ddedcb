import logging

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.setting import Setting
from core.config import DEFAULT_PAPER_SIZE

logger = logging.getLogger(__name__)

PAPER_SIZES = ["A4", "A5"]

# Letterhead fields shown on the Settings page; callers fall back to these
DEFAULT_SETTINGS = {
    "clinicName": "",
    "address": "",
    "phone": "",
    "doctorName": "",
    "qualification": "",
    "speciality": "",
    "regNumber": "",
    "paperSize": DEFAULT_PAPER_SIZE,
}


def get_settings(db: Session) -> dict:
    rows = db.execute(select(Setting.key, Setting.value)).all()
    return {key: value for key, value in rows}


def get_setting(db: Session, key: str, default=None):
    value = db.execute(select(Setting.value).where(Setting.key == key)).scalar()
    return default if value is None else value


def with_defaults(settings: dict) -> dict:
    merged = dict(DEFAULT_SETTINGS)
    merged.update({k: v for k, v in (settings or {}).items() if v is not None})
    return merged


def save_settings(db: Session, values: dict):
    """Upsert every given key in one transaction; other keys are left alone."""
    try:
        for key, value in (values or {}).items():
            stmt = sqlite_insert(Setting).values(key=key, value=None if value is None else str(value))
            stmt = stmt.on_conflict_do_update(
                index_elements=[Setting.key],
                set_={"value": stmt.excluded.value},
            )
            db.execute(stmt)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Saving settings rolled back")
        return {"success": False, "error": str(e)}

    return {"success": True}
