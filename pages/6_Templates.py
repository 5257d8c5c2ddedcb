import streamlit as st

from core.helpers import get_store, render_clinic_sidebar, show_result
from services.template_service import list_templates, save_template, delete_template, MedicineLine
from services.inventory_service import list_inventory, normalize_medicine_name, INSTRUCTION_OPTIONS
from services.prescription_service import format_duration

# Page config is set globally in app.py

store = get_store()
render_clinic_sidebar()

st.title("Diagnosis Templates")

with store.session() as db:
    templates = list_templates(db)
    inventory = list_inventory(db)

defaults = {item.name: item for item in inventory}

options = ["New template"] + [f"{t.name} (#{t.id})" for t in templates]
choice = st.selectbox("Template", options)
current = None if choice == options[0] else templates[options.index(choice) - 1]

with st.form("template_form"):
    name = st.text_input("Name", value=current.name if current else "")
    diagnosis = st.text_input("Diagnosis", value=current.diagnosis if current else "")
    st.caption("Medicines, one per line: NAME | dosage | days | instruction (defaults come from inventory)")
    lines_text = "\n".join(
        f"{m.name} | {m.dosage} | {m.duration} | {m.instruction}" for m in (current.medicine_list if current else [])
    )
    medicines_text = st.text_area("Medicines", value=lines_text, height=200)
    c1, c2 = st.columns(2)
    with c1:
        submitted = st.form_submit_button("Save Template")
    with c2:
        remove = st.form_submit_button("Delete", disabled=current is None)


def parse_lines(text):
    lines = []
    for raw in text.splitlines():
        parts = [p.strip() for p in raw.split("|")]
        med_name = normalize_medicine_name(parts[0] if parts else "")
        if not med_name:
            continue
        known = defaults.get(med_name)
        parts += [""] * (4 - len(parts))
        lines.append(
            MedicineLine(
                name=med_name,
                dosage=parts[1] or (known.default_dosage if known else "") or "",
                duration=format_duration(parts[2] or (known.default_duration if known else "")),
                instruction=parts[3] or (known.default_instruction if known else "") or INSTRUCTION_OPTIONS[0],
            )
        )
    return lines


if submitted:
    if not diagnosis.strip():
        st.error("Diagnosis name is required")
    else:
        with store.session() as db:
            result = save_template(
                db,
                name.strip() or diagnosis.strip(),
                diagnosis.strip(),
                parse_lines(medicines_text),
                template_id=current.id if current else None,
            )
        if show_result(result, "Template saved", "Could not save template"):
            st.rerun()

if remove and current is not None:
    with store.session() as db:
        delete_template(db, current.id)
    st.rerun()
