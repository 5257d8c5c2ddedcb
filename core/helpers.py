import streamlit as st

from core.config import DB_PATH, configure_logging
from core.database import open_store


@st.cache_resource
def get_store():
    """One ClinicStore per Streamlit process, opened on first use."""
    configure_logging()
    return open_store(DB_PATH)


def show_result(result: dict, success_message: str, failure_message: str = "Something went wrong"):
    """Report a service result dict to the user. Returns True on success."""
    if result.get("success"):
        st.toast(success_message)
        return True
    if result.get("cancelled"):
        return False
    st.error(f"{failure_message}: {result.get('error', 'no changes made')}")
    return False


# -----------------------------
# Sidebar helpers
# -----------------------------
def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        /* Hide the auto-generated Pages section */
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_clinic_sidebar():
    """Render the clinic menu.

    Items:
    - Dashboard
    - Patients
    - Medicines
    - Templates
    - Settings
    """
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### Clinic Menu")
        if st.button("Dashboard", use_container_width=True):
            st.switch_page("app.py")
        if st.button("Patients", use_container_width=True):
            st.switch_page("pages/1_Patients.py")
        if st.button("Medicines", use_container_width=True):
            st.switch_page("pages/5_Medicines.py")
        if st.button("Templates", use_container_width=True):
            st.switch_page("pages/6_Templates.py")
        st.divider()
        if st.button("Settings", use_container_width=True):
            st.switch_page("pages/7_Settings.py")
