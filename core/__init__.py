from .database import ClinicStore, open_store, Base
from .time_utils import local_timestamp, live_age, now_local

# Streamlit helpers (core.helpers, core.session_manager) are imported
# directly by pages so the data layer stays importable without a UI.

__all__ = [
    "ClinicStore",
    "open_store",
    "Base",
    "local_timestamp",
    "live_age",
    "now_local",
]
