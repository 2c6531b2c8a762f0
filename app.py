# app.py
from __future__ import annotations

import logging
import os

import streamlit as st

from ui.app_helpers import load_records
from ui.auth import require_login
from ui.sidebar import render_sidebar
from ui.views_dashboard import render_dashboard
from ui.views_reports import render_reports
from ui.views_settings import render_settings
from ui.views_status import render_status_view

logging.basicConfig(
    level=os.getenv("AWB_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="AWB Tracker", layout="wide")

require_login()
view = render_sidebar()

if view == "settings":
    render_settings()
    st.stop()

with st.spinner("Loading shipments..."):
    records, diagnostics = load_records()

if view == "reports":
    render_reports(records)
elif view == "status":
    render_status_view(records)
else:
    render_dashboard(records, diagnostics)
