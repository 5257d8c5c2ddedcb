import streamlit as st
import streamlit.components.v1 as components
from streamlit_searchbox import st_searchbox

from core.helpers import get_store, render_clinic_sidebar, show_result
from core.session_manager import require_patient, apply_template_to_draft, clear_draft, bump_draft_version
from core.time_utils import live_age
from services.patient_service import get_patient
from services.inventory_service import (
    list_inventory,
    search_inventory,
    normalize_medicine_name,
    DOSAGE_OPTIONS,
    INSTRUCTION_OPTIONS,
)
from services.template_service import list_templates, match_templates, MedicineLine, blank_line, strip_days
from services.prescription_service import save_prescription, format_duration
from services.settings_service import get_settings
from services.print_service import render_prescription_html, print_document
from services.validation import validate_prescription

# Page config is set globally in app.py

store = get_store()
render_clinic_sidebar()
patient_id = require_patient()

with store.session() as db:
    patient = get_patient(db, patient_id)
    inventory = list_inventory(db)
    templates = list_templates(db)
    settings = get_settings(db)

if not patient:
    st.error("Patient not found.")
    st.stop()

st.title("New Prescription")
st.subheader(patient.name)
st.caption(f"Age: {live_age(patient.age, patient.created_at)} • Gender: {patient.gender}")

# Diagnosis, with template suggestions for the term being typed
diagnosis = st.text_input("Diagnosis", value=st.session_state.draft_diagnosis)
st.session_state.draft_diagnosis = diagnosis

suggestions = match_templates(templates, diagnosis)
if suggestions:
    st.caption("Templates")
    cols = st.columns(min(len(suggestions), 4))
    for i, t in enumerate(suggestions[:4]):
        with cols[i]:
            if st.button(t.name or t.diagnosis, key=f"tpl_{t.id}"):
                apply_template_to_draft(t)
                st.rerun()


def inventory_lookup(text: str):
    return [(item.name, item.name) for item in search_inventory(inventory, text)[:15]]


st.markdown("### Medicines")
picked = st_searchbox(
    inventory_lookup,
    key="medicine_search",
    placeholder="Type a medicine, e.g. PARA",
)
if picked and st.button(f"Add {picked}"):
    item = next((i for i in inventory if i.name == picked), None)
    line = MedicineLine(
        name=picked,
        dosage=(item.default_dosage if item else "") or "",
        duration=strip_days(item.default_duration if item else ""),
        instruction=(item.default_instruction if item else "") or INSTRUCTION_OPTIONS[0],
    )
    lines = [m for m in st.session_state.draft_medicines if m.name.strip()]
    st.session_state.draft_medicines = lines + [line, blank_line()]
    bump_draft_version()
    st.rerun()

version = st.session_state.draft_version
edited = []
for index, med in enumerate(st.session_state.draft_medicines):
    c1, c2, c3, c4, c5 = st.columns([4, 2, 2, 2, 1])
    with c1:
        name = st.text_input("Medicine", value=med.name, key=f"med_name_{version}_{index}", label_visibility="collapsed")
    with c2:
        dosage = st.text_input(
            "Dosage", value=med.dosage, key=f"med_dosage_{version}_{index}",
            placeholder=DOSAGE_OPTIONS[0], label_visibility="collapsed",
        )
    with c3:
        duration = st.text_input(
            "Days", value=med.duration, key=f"med_duration_{version}_{index}",
            placeholder="Days", label_visibility="collapsed",
        )
    with c4:
        instruction = st.selectbox(
            "Instruction",
            INSTRUCTION_OPTIONS,
            index=INSTRUCTION_OPTIONS.index(med.instruction) if med.instruction in INSTRUCTION_OPTIONS else 0,
            key=f"med_instruction_{version}_{index}",
            label_visibility="collapsed",
        )
    with c5:
        removed = st.button("✕", key=f"med_remove_{version}_{index}")
    if not removed:
        edited.append(MedicineLine(normalize_medicine_name(name), dosage.strip(), duration.strip(), instruction))

if not edited or edited[-1].name:
    edited.append(blank_line())
if len(edited) != len(st.session_state.draft_medicines):
    st.session_state.draft_medicines = edited
    bump_draft_version()
    st.rerun()
st.session_state.draft_medicines = edited


def final_payload():
    final_diagnosis = diagnosis.strip().rstrip(",").strip()
    lines = [
        MedicineLine(m.name, m.dosage, format_duration(m.duration), m.instruction)
        for m in edited
        if m.name.strip()
    ]
    return final_diagnosis, lines


col1, col2, col3, col4 = st.columns(4)
with col1:
    preview = st.button("Preview")
with col2:
    save = st.button("Save")
with col3:
    save_print = st.button("Save & Print", type="primary")
with col4:
    if st.button("Clear"):
        clear_draft()
        st.rerun()

if preview or save or save_print:
    final_diagnosis, lines = final_payload()
    error = validate_prescription(final_diagnosis, lines)
    if error:
        st.error(error)
        st.stop()

    html = render_prescription_html(patient, lines, final_diagnosis, settings)
    if preview:
        components.html(html, height=700, scrolling=True)
    else:
        with store.session() as db:
            result = save_prescription(db, patient.id, final_diagnosis, lines)
        if show_result(result, "Prescription saved", "Error saving prescription"):
            if save_print:
                print_document(html)
            clear_draft()
