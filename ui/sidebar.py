# ui/sidebar.py
from __future__ import annotations

import streamlit as st

from core.auth import is_admin
from core.schemas import PERIODS, AWBStatus
from ui.app_helpers import current_user, get_filters, get_view, set_filters, set_view
from ui.auth import render_logout_button

VIEWS = {
    "dashboard": "Dashboard",
    "status": "By status",
    "reports": "Reports",
    "settings": "Settings",
}

PERIOD_LABELS = {
    "today": "Today",
    "week": "Last 7 days",
    "month": "Last 30 days",
    "all": "All",
}


def render_sidebar() -> str:
    """Navigation + dashboard filters. Returns the selected view key."""
    with st.sidebar:
        st.header("AWB Tracker")
        render_logout_button()
        st.divider()

        views = dict(VIEWS)
        if not is_admin(current_user()):
            views.pop("settings", None)

        keys = list(views.keys())
        current = get_view()
        if current not in keys:
            current = "dashboard"
        view = st.radio(
            "View",
            keys,
            index=keys.index(current),
            format_func=lambda k: views[k],
            key="sidebar_view",
        )
        set_view(view)

        st.divider()
        st.subheader("Filters")
        filters = get_filters()

        selected = st.multiselect(
            "Status",
            list(AWBStatus),
            default=[s for s in AWBStatus if s in filters.statuses],
            format_func=lambda s: s.label,
            key="sidebar_status_filter",
        )
        period_keys = list(PERIODS.keys())
        period = st.selectbox(
            "Period",
            period_keys,
            index=period_keys.index(filters.period) if filters.period in period_keys else period_keys.index("all"),
            format_func=lambda k: PERIOD_LABELS.get(k, k),
            key="sidebar_period_filter",
        )
        filters.statuses = set(selected)
        filters.period = period
        set_filters(filters)

        if st.button("Clear filters", key="sidebar_clear_filters"):
            set_filters(filters.clear())
            for k in ("sidebar_status_filter", "sidebar_period_filter"):
                st.session_state.pop(k, None)
            st.rerun()

    return view
