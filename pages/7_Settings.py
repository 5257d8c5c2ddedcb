import streamlit as st

from core.helpers import get_store, render_clinic_sidebar, show_result
from services.settings_service import get_settings, save_settings, with_defaults, PAPER_SIZES
from services.backup_service import backup_filename, export_database, read_backup_bytes

# Page config is set globally in app.py

store = get_store()
render_clinic_sidebar()

st.title("Settings")

with store.session() as db:
    settings = with_defaults(get_settings(db))

LABELS = {
    "clinicName": "Clinic Name",
    "address": "Address",
    "phone": "Phone",
    "doctorName": "Doctor Name",
    "qualification": "Qualification",
    "speciality": "Speciality",
    "regNumber": "Registration Number",
}

with st.form("settings_form"):
    values = {key: st.text_input(label, value=settings.get(key) or "") for key, label in LABELS.items()}
    values["paperSize"] = st.selectbox(
        "Paper Size",
        PAPER_SIZES,
        index=PAPER_SIZES.index(settings["paperSize"]) if settings["paperSize"] in PAPER_SIZES else 0,
    )
    if st.form_submit_button("Save Settings"):
        with store.session() as db:
            result = save_settings(db, values)
        show_result(result, "Settings updated successfully", "Update failed")

st.markdown("### Backup")
data = read_backup_bytes(store)
if data is None:
    st.error("Database file not found.")
else:
    st.download_button("Download Backup", data=data, file_name=backup_filename(), mime="application/octet-stream")

destination = st.text_input("Or copy to a folder path on this computer", placeholder="/path/to/Clinic_Backup.db")
if st.button("Copy Backup"):
    result = export_database(store, destination.strip())
    show_result(result, f"Backup saved to {result.get('path')}", "Backup failed")
