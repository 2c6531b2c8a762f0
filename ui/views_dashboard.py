"""Streamlit renderer for the shipment list (search, status filter, export, edit)."""

from __future__ import annotations

from typing import List, Optional

import pandas as pd
import streamlit as st

from core.auth import is_admin
from core.documents import pack, unpack
from core.export import export_filename, to_export_bytes
from core.filters import apply_period, filter_records, status_counts
from core.normalize_utils import MappingDiagnostics, edited_date_text, format_display_date, parse_date
from core.schemas import AWBStatus, ShipmentRecord
from ui.app_helpers import current_user, get_client, get_filters, report_write


def _table(records: List[ShipmentRecord]) -> pd.DataFrame:
    rows = [
        {
            "Supplier": r.supplier,
            "Dispatch": format_display_date(r.dispatch_date),
            "NF's": r.invoices,
            "AWB": r.awb_number,
            "Status": r.status.label,
            "Arrival": format_display_date(r.arrival_date),
            "Brand": r.brand,
            "Material": r.material,
            "Remark": r.remark,
            "Tracking": r.tracking_url,
            "Docs": len(r.documents),
        }
        for r in records
    ]
    return pd.DataFrame(rows)


def _render_kpis(records: List[ShipmentRecord]) -> None:
    counts = status_counts(records)
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Shipments", len(records))
    k2.metric("In transit", counts[AWBStatus.IN_TRANSIT])
    k3.metric("Available", counts[AWBStatus.AVAILABLE])
    k4.metric("Delayed", counts[AWBStatus.DELAYED])


def _render_diagnostics(diagnostics: Optional[MappingDiagnostics]) -> None:
    if diagnostics is None or not diagnostics.total:
        return
    with st.expander(f"Data quality: {diagnostics.total} value(s) were defaulted while reading the sheet"):
        st.json(diagnostics.as_dict())


def render_record_form(record: Optional[ShipmentRecord], key: str) -> Optional[ShipmentRecord]:
    """Create / edit form. Returns the edited record when submitted."""
    r = record or ShipmentRecord()
    statuses = list(AWBStatus)
    # new rows default to today; existing rows show what the sheet holds
    shown_dispatch = parse_date(r.dispatch_date) if record is not None else pd.Timestamp.today().date()
    shown_arrival = parse_date(r.arrival_date)
    with st.form(key):
        c1, c2 = st.columns(2)
        supplier = c1.text_input("Supplier", r.supplier)
        awb_number = c2.text_input("AWB", r.awb_number)
        dispatch = c1.date_input("Dispatch date", shown_dispatch)
        arrival = c2.date_input("Arrival date", shown_arrival)
        invoices = c1.text_input("NF's", r.invoices)
        status = c2.selectbox("Status", statuses, index=statuses.index(r.status), format_func=lambda s: s.label)
        brand = c1.text_input("Brand", r.brand)
        material = c2.text_input("Material", r.material)
        tracking_url = st.text_input("Tracking link", r.tracking_url)
        documents = st.text_input("Documents (separate links with |)", pack(r.documents))
        remark = st.text_area("Remark", r.remark)
        submitted = st.form_submit_button("Save")

    if not submitted:
        return None
    if not supplier.strip() or not awb_number.strip():
        st.error("Supplier and AWB are required.")
        return None

    return ShipmentRecord(
        id=r.id,
        supplier=supplier.strip(),
        dispatch_date=edited_date_text(r.dispatch_date, shown_dispatch, dispatch),
        invoices=invoices.strip(),
        awb_number=awb_number.strip(),
        status=status,
        arrival_date=edited_date_text(r.arrival_date, shown_arrival, arrival),
        brand=brand.strip(),
        material=material.strip(),
        remark=remark.strip(),
        tracking_url=tracking_url.strip(),
        documents=unpack("|".join(d.strip() for d in documents.split("|"))),
    )


def _render_admin_actions(records: List[ShipmentRecord]) -> None:
    client = get_client()

    with st.expander("New shipment"):
        new = render_record_form(None, key="awb_new_form")
        if new is not None:
            report_write(client.save_record(new), "Shipment saved.")

    if not records:
        return

    labels = {r.id: f"{r.awb_number or '(no AWB)'} · {r.supplier or '(no supplier)'}" for r in records if r.id}
    if not labels:
        return

    with st.expander("Edit / delete shipment"):
        chosen_id = st.selectbox("Shipment", list(labels.keys()), format_func=lambda k: labels[k], key="awb_edit_pick")
        chosen = next((r for r in records if r.id == chosen_id), None)
        edited = render_record_form(chosen, key=f"awb_edit_form_{chosen_id}")
        if edited is not None:
            report_write(client.save_record(edited), "Shipment updated.")

        confirm = st.checkbox("I understand this removes the row from the spreadsheet", key=f"awb_delete_confirm_{chosen_id}")
        if st.button("Delete", key=f"awb_delete_{chosen_id}", disabled=not confirm):
            report_write(client.delete_record(chosen_id), "Shipment deleted.")


def render_dashboard(records: List[ShipmentRecord], diagnostics: Optional[MappingDiagnostics] = None) -> None:
    st.subheader("Shipments")

    filters = get_filters()
    search = st.text_input("Search supplier, AWB, NF's, brand or material", key="dashboard_search")

    visible = filter_records(apply_period(records, filters.period), search, filters.statuses)
    _render_kpis(visible)
    _render_diagnostics(diagnostics)

    if not visible:
        st.info("No shipments to show.")
    else:
        st.dataframe(_table(visible), use_container_width=True, hide_index=True)

        with st.expander("Documents"):
            for r in visible:
                if not r.documents:
                    continue
                st.markdown(f"**{r.awb_number or r.id}**: " + " · ".join(f"[doc {i}]({u})" for i, u in enumerate(r.documents, 1)))

    st.download_button(
        "Export (CSV)",
        data=to_export_bytes(visible),
        file_name=export_filename(),
        mime="text/csv",
        key="dashboard_export",
    )

    if is_admin(current_user()):
        st.divider()
        _render_admin_actions(records)
