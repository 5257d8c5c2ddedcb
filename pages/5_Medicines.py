import streamlit as st

from core.helpers import get_store, render_clinic_sidebar, show_result
from services.inventory_service import (
    list_inventory,
    add_medicine,
    update_medicine,
    delete_medicine,
    bulk_add_medicines,
    normalize_medicine_name,
    search_inventory,
    INSTRUCTION_OPTIONS,
)
from services.prescription_service import format_duration, strip_duration_suffix

# Page config is set globally in app.py

store = get_store()
render_clinic_sidebar()

st.title("Medicines")
st.caption("Defaults are learned from every saved prescription.")

tab_add, tab_bulk = st.tabs(["Add Medicine", "Bulk Add"])

with tab_add:
    with st.form("medicine_form", clear_on_submit=True):
        name = st.text_input("Name")
        dosage = st.text_input("Default Dosage", placeholder="1-0-1")
        duration = st.text_input("Default Duration (days)")
        instruction = st.selectbox("Default Instruction", INSTRUCTION_OPTIONS)
        if st.form_submit_button("Add"):
            clean = normalize_medicine_name(name)
            if not clean:
                st.error("Name is required.")
            else:
                with store.session() as db:
                    result = add_medicine(db, clean, dosage.strip(), format_duration(duration), instruction)
                show_result(result, f"{clean} added", "Could not add")

with tab_bulk:
    bulk_text = st.text_area("One medicine name per line")
    if st.button("Add All"):
        names = [n for n in bulk_text.splitlines() if n.strip()]
        if names:
            with store.session() as db:
                result = bulk_add_medicines(db, names)
            show_result(result, f"Added {result.get('count', 0)} new medicines", "Bulk add failed")

with store.session() as db:
    items = list_inventory(db)

query = st.text_input("Filter", placeholder="e.g., PARA")
if query.strip():
    items = search_inventory(items, query)

st.write(f"{len(items)} medicines")

for item in items:
    with st.expander(f"{item.name}: {item.default_dosage or '-'} · {item.default_duration or '-'} · {item.default_instruction or '-'}"):
        with st.form(f"edit_medicine_{item.id}"):
            new_name = st.text_input("Name", value=item.name)
            new_dosage = st.text_input("Default Dosage", value=item.default_dosage or "")
            new_duration = st.text_input("Default Duration (days)", value=strip_duration_suffix(item.default_duration))
            current = item.default_instruction if item.default_instruction in INSTRUCTION_OPTIONS else INSTRUCTION_OPTIONS[0]
            new_instruction = st.selectbox(
                "Default Instruction", INSTRUCTION_OPTIONS, index=INSTRUCTION_OPTIONS.index(current)
            )
            c1, c2 = st.columns(2)
            with c1:
                save = st.form_submit_button("Save")
            with c2:
                remove = st.form_submit_button("Delete")

        if save:
            with store.session() as db:
                result = update_medicine(
                    db,
                    item.id,
                    normalize_medicine_name(new_name),
                    new_dosage.strip(),
                    format_duration(new_duration),
                    new_instruction,
                )
            if show_result(result, "Medicine updated", "Update failed"):
                st.rerun()
        if remove:
            with store.session() as db:
                delete_medicine(db, item.id)
            st.rerun()
