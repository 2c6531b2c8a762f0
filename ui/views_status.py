"""Per-status view: counts for every status plus the matching shipments."""

from __future__ import annotations

from typing import List

import streamlit as st

from core.filters import records_with_status, status_counts
from core.normalize_utils import format_display_date
from core.schemas import AWBStatus, ShipmentRecord


def render_status_view(records: List[ShipmentRecord]) -> None:
    st.subheader("Shipments by status")

    counts = status_counts(records)
    cols = st.columns(4)
    for i, (status, n) in enumerate(counts.items()):
        cols[i % 4].metric(status.label, n)

    options = [None] + list(AWBStatus)
    chosen = st.selectbox(
        "Show",
        options,
        format_func=lambda s: "All" if s is None else f"{s.label} ({counts[s]})",
        key="status_view_pick",
    )

    subset = records_with_status(records, chosen)
    if not subset:
        st.info("No shipments with this status.")
        return

    st.dataframe(
        [
            {
                "AWB": r.awb_number,
                "Supplier": r.supplier,
                "Status": r.status.label,
                "Dispatch": format_display_date(r.dispatch_date),
                "Arrival": format_display_date(r.arrival_date),
            }
            for r in subset
        ],
        use_container_width=True,
        hide_index=True,
    )
