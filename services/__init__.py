from .patient_service import add_patient, update_patient, delete_patient, search_patients
from .prescription_service import save_prescription, get_patient_history, get_prescription_details
from .certificate_service import save_certificate
from .inventory_service import list_inventory, add_medicine, update_medicine, delete_medicine, bulk_add_medicines
from .template_service import list_templates, save_template, delete_template
from .dashboard_service import get_dashboard_stats
from .settings_service import get_settings, save_settings

# print_service pulls in Streamlit components lazily; import it directly.

__all__ = [
    "add_patient",
    "update_patient",
    "delete_patient",
    "search_patients",
    "save_prescription",
    "get_patient_history",
    "get_prescription_details",
    "save_certificate",
    "list_inventory",
    "add_medicine",
    "update_medicine",
    "delete_medicine",
    "bulk_add_medicines",
    "list_templates",
    "save_template",
    "delete_template",
    "get_dashboard_stats",
    "get_settings",
    "save_settings",
]
