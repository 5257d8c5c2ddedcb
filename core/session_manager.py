import streamlit as st

from services.template_service import MedicineLine, blank_line, apply_template


def init_session_state():
    """Ensure required session keys exist."""
    if "selected_patient" not in st.session_state:
        st.session_state.selected_patient = None
    if "draft_diagnosis" not in st.session_state:
        st.session_state.draft_diagnosis = ""
    if "draft_medicines" not in st.session_state:
        st.session_state.draft_medicines = [blank_line()]
    if "draft_version" not in st.session_state:
        st.session_state.draft_version = 0


def bump_draft_version():
    """Give the draft editor fresh widget keys after the rows change."""
    st.session_state.draft_version = st.session_state.get("draft_version", 0) + 1


def select_patient(patient_id: int):
    """Remember the patient the doctor is working on and start a fresh draft."""
    init_session_state()
    if st.session_state.selected_patient != patient_id:
        clear_draft()
    st.session_state.selected_patient = patient_id


def clear_draft():
    st.session_state.draft_diagnosis = ""
    st.session_state.draft_medicines = [blank_line()]
    bump_draft_version()


def load_draft(diagnosis: str, medicines):
    """Replace the draft, e.g. when repeating an earlier prescription."""
    st.session_state.draft_diagnosis = diagnosis or ""
    st.session_state.draft_medicines = [MedicineLine.from_value(m) for m in medicines] + [blank_line()]
    bump_draft_version()


def apply_template_to_draft(template):
    """Copy a template into the draft. Nothing is written to the database."""
    init_session_state()
    diagnosis, lines = apply_template(
        st.session_state.draft_diagnosis,
        st.session_state.draft_medicines,
        template,
    )
    st.session_state.draft_diagnosis = diagnosis
    st.session_state.draft_medicines = lines + [blank_line()]
    bump_draft_version()


def require_patient():
    """Return the selected patient id; send the user to the list if none."""
    init_session_state()
    if st.session_state.selected_patient is None:
        st.warning("Please select a patient first.")
        st.switch_page("pages/1_Patients.py")
    return st.session_state.selected_patient
