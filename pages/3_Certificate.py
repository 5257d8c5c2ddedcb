import streamlit as st
import streamlit.components.v1 as components
from datetime import date

from core.helpers import get_store, render_clinic_sidebar, show_result
from core.session_manager import require_patient
from services.patient_service import get_patient
from services.certificate_service import save_certificate, rest_days
from services.settings_service import get_settings
from services.template_service import list_templates, match_templates
from services.print_service import render_certificate_html, print_document
from services.validation import validate_certificate

# Page config is set globally in app.py

store = get_store()
render_clinic_sidebar()
patient_id = require_patient()

with store.session() as db:
    patient = get_patient(db, patient_id)
    settings = get_settings(db)
    templates = list_templates(db)

if not patient:
    st.error("Patient not found.")
    st.stop()

st.title("Medical Certificate")
st.subheader(patient.name)

diagnosis = st.text_input("Diagnosis", key="cert_diagnosis")
suggestions = match_templates(templates, diagnosis)
if suggestions:
    st.caption("Known diagnoses: " + ", ".join(t.diagnosis for t in suggestions[:5]))

residence = st.text_input("Residing / working at (optional)")

c1, c2, c3 = st.columns(3)
with c1:
    start_date = st.date_input("Rest from", value=date.today())
with c2:
    end_date = st.date_input("Rest until", value=date.today())
with c3:
    issue_date = st.date_input("Issue date", value=date.today())

if start_date and end_date and start_date <= end_date:
    st.caption(f"{rest_days(start_date, end_date)} days of rest")

col1, col2 = st.columns(2)
with col1:
    preview = st.button("Preview")
with col2:
    save_print = st.button("Save & Print", type="primary")

if preview or save_print:
    error = validate_certificate(diagnosis, start_date, end_date)
    if error:
        st.error(error)
        st.stop()

    html = render_certificate_html(patient, diagnosis.strip(), start_date, end_date, issue_date, residence, settings)
    if preview:
        components.html(html, height=700, scrolling=True)
    else:
        with store.session() as db:
            result = save_certificate(db, patient.id, diagnosis.strip(), start_date, end_date)
        if show_result(result, "Certificate saved", "Error"):
            print_document(html)
