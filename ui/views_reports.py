"""Streamlit renderer for the analytics report."""

from __future__ import annotations

from typing import List

import streamlit as st

from core.reports import DEFAULT_REPORT_PERIOD, REPORT_PERIODS, compute_stats, distribution_frame
from core.schemas import ShipmentRecord


def render_reports(records: List[ShipmentRecord]) -> None:
    st.subheader("Reports")

    days_options = [d for d, _ in REPORT_PERIODS]
    labels = dict(REPORT_PERIODS)
    window = st.selectbox(
        "Period",
        days_options,
        index=days_options.index(DEFAULT_REPORT_PERIOD),
        format_func=lambda d: labels[d],
        key="reports_period",
    )

    stats = compute_stats(records, int(window))

    k1, k2, k3 = st.columns(3)
    k1.metric("Total volume", stats.total)
    k2.metric("Efficiency", f"{stats.efficiency}%")
    k3.metric("Delays", stats.delayed)

    if stats.total == 0:
        st.info("No shipments dispatched in this period.")
        return

    c1, c2 = st.columns(2)
    with c1:
        st.caption("Status distribution")
        df = distribution_frame([(s.label.upper(), n) for s, n in stats.status_distribution])
        st.bar_chart(df, x="name", y="value")
    with c2:
        st.caption("Top brands")
        st.bar_chart(distribution_frame(stats.brand_distribution), x="name", y="value")

    st.caption("Daily dispatches")
    timeline = distribution_frame(stats.timeline, name_col="date", value_col="count")
    # keep calendar order on the x axis
    timeline["order"] = range(len(timeline))
    st.line_chart(timeline.set_index("order"), y="count")
    st.dataframe(timeline[["date", "count"]], use_container_width=True, hide_index=True)

    st.caption("Top materials")
    st.bar_chart(distribution_frame(stats.material_distribution), x="name", y="value")
