import streamlit as st

from core.helpers import get_store, render_clinic_sidebar
from core.session_manager import require_patient, load_draft
from core.time_utils import live_age, parse_timestamp
from services.patient_service import get_patient
from services.prescription_service import (
    get_patient_history,
    get_prescription_details,
    prescription_draft_from_history,
    RX,
)
from services.settings_service import get_settings
from services.print_service import render_prescription_html, render_certificate_html, print_document


def main():
    store = get_store()
    render_clinic_sidebar()
    patient_id = require_patient()

    with store.session() as db:
        patient = get_patient(db, patient_id)
        history = get_patient_history(db, patient_id) if patient else []
        settings = get_settings(db)

    st.title("Patient Visit History")

    if not patient:
        st.error("Patient not found.")
        if st.button("Back to Patient List"):
            st.switch_page("pages/1_Patients.py")
        st.stop()

    st.subheader(f"{patient.name} (#{patient.id})")
    st.caption(f"Age: {live_age(patient.age, patient.created_at)} • Gender: {patient.gender}")

    if not history:
        st.info("No prior visits found for this patient.")
        if st.button("Back to Patient List"):
            st.switch_page("pages/1_Patients.py")
        st.stop()

    st.markdown("---")

    for visit in history:
        with st.container():
            label = "Prescription" if visit.type == RX else "Medical Certificate"
            st.write(f"**{label}**: {visit.date or '-'}")
            st.write(f"Diagnosis: {visit.diagnosis or '-'}")

            if visit.type == RX:
                with store.session() as db:
                    items = get_prescription_details(db, visit.id)
                for i, item in enumerate(items, start=1):
                    st.write(f"{i}. {item.medicine} | {item.dosage or ''} | {item.duration or ''} | {item.instruction or ''}")

                c1, c2 = st.columns(2)
                with c1:
                    if st.button("Reprint", key=f"reprint_rx_{visit.id}"):
                        html = render_prescription_html(
                            patient,
                            [
                                {"name": i.medicine, "dosage": i.dosage, "duration": i.duration, "instruction": i.instruction}
                                for i in items
                            ],
                            visit.diagnosis,
                            settings,
                            now=parse_timestamp(visit.date),
                        )
                        print_document(html)
                with c2:
                    if st.button("Repeat Prescription", key=f"repeat_{visit.id}"):
                        with store.session() as db:
                            draft = prescription_draft_from_history(db, visit.id)
                        if draft:
                            load_draft(draft["diagnosis"], draft["medicines"])
                            st.switch_page("pages/2_Prescription.py")
            else:
                st.write(f"Rest: {visit.start_date} to {visit.end_date}")
                if st.button("Reprint", key=f"reprint_cert_{visit.id}"):
                    html = render_certificate_html(
                        patient, visit.diagnosis, visit.start_date, visit.end_date, visit.date, "", settings
                    )
                    print_document(html)
        st.markdown("---")

    if st.button("Back to Patient List", use_container_width=True):
        st.switch_page("pages/1_Patients.py")


if __name__ == "__main__":
    main()
