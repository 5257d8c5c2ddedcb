import os
import logging

from dotenv import load_dotenv

try:
    load_dotenv()
except Exception:
    pass

# Path: project_root/data/clinic.db
BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DEFAULT_DB_PATH = os.path.join(BASE_DIR, "data", "clinic.db")

DB_PATH = os.getenv("CLINIC_DB_PATH", DEFAULT_DB_PATH)
LOG_LEVEL = os.getenv("CLINIC_LOG_LEVEL", "INFO").upper()

# Patients shown on the list page when nothing is typed in the search box
RECENT_PATIENT_LIMIT = int(os.getenv("CLINIC_RECENT_LIMIT", "30"))

DEFAULT_INSTRUCTION = "After Food"
DEFAULT_PAPER_SIZE = "A4"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None):
    """Configure root logging once for the app and the CLI scripts."""
    logging.basicConfig(level=(level or LOG_LEVEL), format=LOG_FORMAT)
