import json
import logging
import re
from dataclasses import dataclass, asdict, fields

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.template import Template
from core.config import DEFAULT_INSTRUCTION

logger = logging.getLogger(__name__)

_DAYS_SUFFIX = re.compile(r"\s*days\s*$", re.IGNORECASE)


@dataclass
class MedicineLine:
    """One medicine row of a prescription draft or template."""

    name: str = ""
    dosage: str = ""
    duration: str = ""
    instruction: str = ""

    def as_dict(self):
        return asdict(self)

    @classmethod
    def from_value(cls, value):
        """Build from a dict (unknown keys ignored) or another MedicineLine."""
        if isinstance(value, cls):
            return cls(**value.as_dict())
        if not isinstance(value, dict):
            raise TypeError(f"Cannot read a medicine line from {type(value).__name__}")
        known = {f.name for f in fields(cls)}
        data = {k: ("" if v is None else str(v)) for k, v in value.items() if k in known}
        return cls(**data)


def blank_line():
    return MedicineLine(instruction=DEFAULT_INSTRUCTION)


# ------------------------------------------
# Persisted form of the medicine list
# ------------------------------------------
def serialize_medicines(medicines) -> str:
    """Store the list as given; only MedicineLine objects are converted."""
    return json.dumps([m.as_dict() if isinstance(m, MedicineLine) else m for m in (medicines or [])])


def parse_medicines(blob) -> list:
    """Parse the stored JSON list. Unknown fields are dropped, missing ones blank."""
    if not blob:
        return []
    try:
        data = json.loads(blob)
    except (TypeError, ValueError):
        logger.warning("Unreadable template medicine list: %.40r", blob)
        return []
    if not isinstance(data, list):
        return []
    return [MedicineLine.from_value(item) for item in data if isinstance(item, dict)]


# ------------------------------------------
# CRUD
# ------------------------------------------
def list_templates(db: Session):
    return db.scalars(select(Template).order_by(Template.name.asc())).all()


def get_template(db: Session, template_id: int):
    return db.get(Template, template_id)


def save_template(db: Session, name: str, diagnosis: str, medicines, template_id: int | None = None):
    """Insert a new template, or overwrite the one with `template_id`."""
    try:
        blob = serialize_medicines(medicines)
        if template_id:
            template = db.get(Template, template_id)
            if template is None:
                return {"success": False, "updated": False}
            template.name = name
            template.diagnosis = diagnosis
            template.medicines = blob
        else:
            template = Template(name=name, diagnosis=diagnosis, medicines=blob)
            db.add(template)
        db.commit()
    except (SQLAlchemyError, TypeError, ValueError) as e:
        db.rollback()
        logger.warning("Could not save template %r: %s", name, e)
        return {"success": False, "error": str(e)}

    return {"success": True, "id": template.id}


def delete_template(db: Session, template_id: int):
    template = db.get(Template, template_id)
    if template is None:
        return {"success": True, "deleted": False}
    try:
        db.delete(template)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Could not delete template %s: %s", template_id, e)
        return {"success": False, "deleted": False, "error": str(e)}
    return {"success": True, "deleted": True}


# ------------------------------------------
# Applying templates to a draft (in memory only)
# ------------------------------------------
def current_term(diagnosis_text: str) -> str:
    """The diagnosis being typed: the last comma-separated part, upper-cased."""
    return (diagnosis_text or "").split(",")[-1].strip().upper()


def match_templates(templates, diagnosis_text: str):
    """Templates whose diagnosis has a word starting with the term being typed."""
    term = current_term(diagnosis_text)
    if not term:
        return []
    matches = []
    for t in templates:
        words = (t.diagnosis or "").upper().split()
        if any(w.startswith(term) for w in words):
            matches.append(t)
    return matches


def strip_days(duration) -> str:
    return _DAYS_SUFFIX.sub("", str(duration or "")).strip()


def apply_template(diagnosis_text: str, draft, template):
    """Merge a template into a draft prescription.

    Returns (diagnosis_text, lines). The partially typed term is replaced by
    the template diagnosis; template medicines already in the draft (by name,
    case-insensitive) are skipped.
    """
    parts = [p.strip() for p in (diagnosis_text or "").split(",")[:-1] if p.strip()]
    parts.append(template.diagnosis or "")
    new_diagnosis = ", ".join(parts) + ", "

    lines = [MedicineLine.from_value(m) for m in (draft or [])]
    lines = [m for m in lines if m.name.strip()]
    existing = {m.name.upper() for m in lines}
    for med in parse_medicines(template.medicines):
        if med.name.upper() in existing:
            continue
        med.duration = strip_days(med.duration)
        lines.append(med)
        existing.add(med.name.upper())

    return new_diagnosis, lines
