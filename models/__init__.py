from .patient import Patient
from .prescription import Prescription, PrescriptionItem
from .certificate import Certificate
from .inventory import InventoryItem
from .template import Template
from .setting import Setting

__all__ = [
    "Patient",
    "Prescription",
    "PrescriptionItem",
    "Certificate",
    "InventoryItem",
    "Template",
    "Setting",
]
