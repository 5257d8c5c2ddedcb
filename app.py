import streamlit as st

from core.helpers import get_store, render_clinic_sidebar
from core.session_manager import init_session_state
from services.dashboard_service import get_dashboard_stats
from services.settings_service import get_settings


def main():
    st.set_page_config(
        page_title="Clinic Desk",
        page_icon="🩺",
        layout="wide",
    )

    init_session_state()
    store = get_store()
    render_clinic_sidebar()

    with store.session() as db:
        settings = get_settings(db)
        stats = get_dashboard_stats(db)

    st.title(settings.get("clinicName") or "Clinic Desk")
    st.write("---")

    if not stats.get("success"):
        st.error(f"Could not load statistics: {stats.get('error')}")
        return

    st.subheader("Overview")
    colA, colB, colC = st.columns(3)
    with colA:
        st.metric("Total Patients", stats["total_patients"])
    with colB:
        st.metric("Visits Today", stats["today_count"])
    with colC:
        st.metric("Visits This Month", stats["month_count"])

    left, right = st.columns(2)
    with left:
        st.markdown("### Last 7 Days")
        weekly = stats["weekly_stats"]
        st.bar_chart(
            {"Day": [f"{i + 1}. {w['label']}" for i, w in enumerate(weekly)], "Visits": [w["count"] for w in weekly]},
            x="Day",
            y="Visits",
        )
    with right:
        st.markdown("### This Year")
        yearly = stats["yearly_stats"]
        st.bar_chart(
            {"Month": [f"{i + 1:02d} {m['label']}" for i, m in enumerate(yearly)], "Visits": [m["count"] for m in yearly]},
            x="Month",
            y="Visits",
        )

    st.write("## Actions")
    if st.button("Open Patient List"):
        st.switch_page("pages/1_Patients.py")


if __name__ == "__main__":
    main()
