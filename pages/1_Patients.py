import streamlit as st

from core.helpers import get_store, render_clinic_sidebar, show_result
from core.session_manager import select_patient
from core.time_utils import live_age
from services.patient_service import (
    GENDERS,
    search_patients,
    add_patient,
    update_patient,
    delete_patient,
)
from services.validation import validate_patient

# Page config is set globally in app.py

store = get_store()
render_clinic_sidebar()

st.title("Patients")

# Register new patient
with st.expander("Register New Patient", expanded=False):
    with st.form("patient_form", clear_on_submit=True):
        name = st.text_input("Full Name")
        age = st.number_input("Age", min_value=0, max_value=150, step=1)
        gender = st.selectbox("Gender", GENDERS)
        phone = st.text_input("Phone (optional)")
        submitted = st.form_submit_button("Add Patient")

    if submitted:
        error = validate_patient(name, age, gender)
        if error:
            st.error(error)
        else:
            with store.session() as db:
                result = add_patient(db, name.strip().title(), int(age), gender, phone.strip() or None)
            show_result(result, "Patient added", "Could not add patient")

# Search bar
search_query = st.text_input("Search by name or phone", placeholder="e.g., An or 555")

with store.session() as db:
    patients = search_patients(db, search_query)

if not patients:
    st.info("No patients found.")
    st.stop()

if not search_query.strip():
    st.caption("Showing the most recently seen patients.")

for p in patients:
    with st.container():
        st.write(f"**{p.name}**  #{p.id}")
        st.write(
            f"Age: {live_age(p.age, p.created_at) or '-'}, Gender: {p.gender or '-'}, "
            f"Phone: {p.phone or '-'}"
        )
        st.caption(f"Last visit: {p.last_visit or 'none'} (registered {p.created_at})")

        col1, col2, col3, col4, col5 = st.columns(5)
        with col1:
            if st.button("Prescription", key=f"rx_{p.id}"):
                select_patient(p.id)
                st.switch_page("pages/2_Prescription.py")
        with col2:
            if st.button("Certificate", key=f"cert_{p.id}"):
                select_patient(p.id)
                st.switch_page("pages/3_Certificate.py")
        with col3:
            if st.button("History", key=f"history_{p.id}"):
                select_patient(p.id)
                st.switch_page("pages/4_Patient_History.py")
        with col4:
            edit_open = st.toggle("Edit", key=f"edit_{p.id}")
        with col5:
            delete_open = st.toggle("Delete", key=f"delete_{p.id}")

        if edit_open:
            with st.form(f"edit_form_{p.id}"):
                new_name = st.text_input("Full Name", value=p.name)
                new_age = st.number_input("Age", min_value=0, max_value=150, step=1, value=int(p.age or 0))
                new_gender = st.selectbox(
                    "Gender", GENDERS, index=GENDERS.index(p.gender) if p.gender in GENDERS else 0
                )
                new_phone = st.text_input("Phone", value=p.phone or "")
                if st.form_submit_button("Save Changes"):
                    error = validate_patient(new_name, new_age, new_gender)
                    if error:
                        st.error(error)
                    else:
                        with store.session() as db:
                            result = update_patient(
                                db, p.id, new_name.strip(), int(new_age), new_gender, new_phone.strip() or None
                            )
                        if show_result(result, "Patient updated", "Update failed"):
                            st.rerun()

        if delete_open:
            st.warning(f"Delete {p.name} with all prescriptions and certificates? This cannot be undone.")
            if st.button("Confirm Delete", key=f"confirm_delete_{p.id}", type="primary"):
                with store.session() as db:
                    result = delete_patient(db, p.id)
                if show_result(result, "Patient deleted", "Delete failed"):
                    st.rerun()

        st.markdown("---")
