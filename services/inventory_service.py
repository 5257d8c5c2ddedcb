import logging
import re

from sqlalchemy import select, update, delete
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.orm import Session

from models.inventory import InventoryItem
from core.config import DEFAULT_INSTRUCTION

logger = logging.getLogger(__name__)

DUPLICATE_ERROR = "Medicine already exists."

DOSAGE_OPTIONS = ["1-0-1", "1-0-0", "0-0-1", "0-1-0", "1-1-1", "1-1-0", "0-1-1", "SOS", "ONCE A WEEK", "ONCE A MONTH"]
INSTRUCTION_OPTIONS = ["After Food", "Before Food", "With Food"]

# Dosage-form prefixes ignored when looking a medicine up (TAB, CAP, T. ...)
FORM_PREFIX = re.compile(
    r"^(?:(?:TAB|CAP|SYR|INJ|OINT|GEL|CRM|SOL|SUSP|DRP|GTT|PWDR)\.?\s*|(?:T|C|S|I)(?:\.|\s)\s*)",
    re.IGNORECASE,
)


def normalize_medicine_name(name) -> str:
    return str(name or "").strip().upper()


def _lookup_key(name) -> str:
    return FORM_PREFIX.sub("", normalize_medicine_name(name)).strip()


def search_inventory(items, text):
    """Inventory items whose name (form prefix ignored) starts with `text`."""
    key = _lookup_key(text)
    if not key:
        return []
    return [item for item in items if _lookup_key(item.name).startswith(key)]


# ------------------------------------------
# Queries
# ------------------------------------------
def list_inventory(db: Session):
    return db.scalars(select(InventoryItem).order_by(InventoryItem.name.asc())).all()


def get_medicine(db: Session, medicine_id: int):
    return db.get(InventoryItem, medicine_id)


def get_medicine_by_name(db: Session, name: str):
    return db.scalars(select(InventoryItem).where(InventoryItem.name == name)).first()


# ------------------------------------------
# Strict add: exact-name duplicates are rejected
# ------------------------------------------
def add_medicine(db: Session, name: str, dosage: str = "", duration: str = "", instruction: str = DEFAULT_INSTRUCTION):
    if get_medicine_by_name(db, name) is not None:
        return {"success": False, "error": DUPLICATE_ERROR}

    item = InventoryItem(
        name=name,
        default_dosage=dosage,
        default_duration=duration,
        default_instruction=instruction,
    )
    try:
        db.add(item)
        db.commit()
    except IntegrityError:
        db.rollback()
        return {"success": False, "error": DUPLICATE_ERROR}
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Could not add medicine %r: %s", name, e)
        return {"success": False, "error": str(e)}

    return {"success": True, "id": item.id}


def update_medicine(db: Session, medicine_id: int, name: str, dosage: str, duration: str, instruction: str):
    stmt = (
        update(InventoryItem)
        .where(InventoryItem.id == medicine_id)
        .values(
            name=name,
            default_dosage=dosage,
            default_duration=duration,
            default_instruction=instruction,
        )
        .execution_options(synchronize_session=False)
    )
    try:
        result = db.execute(stmt)
        db.commit()
    except IntegrityError:
        db.rollback()
        return {"success": False, "updated": False, "error": DUPLICATE_ERROR}
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Could not update medicine %s: %s", medicine_id, e)
        return {"success": False, "updated": False, "error": str(e)}

    updated = result.rowcount > 0
    return {"success": updated, "updated": updated}


def delete_medicine(db: Session, medicine_id: int):
    # Prescription items keep their own text, so nothing references this row
    stmt = delete(InventoryItem).where(InventoryItem.id == medicine_id)
    try:
        result = db.execute(stmt.execution_options(synchronize_session=False))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Could not delete medicine %s: %s", medicine_id, e)
        return {"success": False, "deleted": False, "error": str(e)}
    return {"success": True, "deleted": result.rowcount > 0}


# ------------------------------------------
# Bulk add: insert-if-absent, never overwrites defaults
# ------------------------------------------
def bulk_add_medicines(db: Session, names):
    added = 0
    try:
        for raw in names or []:
            name = normalize_medicine_name(raw)
            if not name:
                continue
            stmt = (
                sqlite_insert(InventoryItem)
                .values(
                    name=name,
                    default_dosage="",
                    default_duration="",
                    default_instruction=DEFAULT_INSTRUCTION,
                )
                .on_conflict_do_nothing(index_elements=[InventoryItem.name])
            )
            result = db.execute(stmt)
            added += result.rowcount
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Bulk medicine import rolled back")
        return {"success": False, "error": str(e)}

    logger.info("Bulk import added %d medicines", added)
    return {"success": True, "count": added}
