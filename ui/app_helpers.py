"""Small helpers shared across Streamlit UI modules."""

from __future__ import annotations

import time
from typing import Callable, List, Optional

import streamlit as st

from core.normalize_utils import MappingDiagnostics
from core.schemas import FilterState, ShipmentRecord, UserAccount
from core.settings import AppConfig, SettingsStore, load_config
from core.sheet_client import SheetClient, WriteResult

_USER_KEY = "auth_user"
_FILTERS_KEY = "awb_filters"
_VIEW_KEY = "awb_view"


def _secrets():
    try:
        return st.secrets
    except Exception:
        return None


def get_settings_store() -> SettingsStore:
    return SettingsStore()


def get_config() -> AppConfig:
    return load_config(store=get_settings_store(), secrets=_secrets())


def get_client() -> SheetClient:
    return SheetClient(get_config())


def load_records() -> tuple[List[ShipmentRecord], MappingDiagnostics]:
    """Fresh read on every call (no cache across reruns)."""
    diagnostics = MappingDiagnostics()
    records = get_client().fetch_records(diagnostics)
    return records, diagnostics


def load_users() -> List[UserAccount]:
    return get_client().fetch_users()


# -------------------------------
# Session state
# -------------------------------
def current_user() -> Optional[UserAccount]:
    return st.session_state.get(_USER_KEY)


def set_current_user(user: Optional[UserAccount]) -> None:
    if user is None:
        st.session_state.pop(_USER_KEY, None)
    else:
        st.session_state[_USER_KEY] = user


def get_filters() -> FilterState:
    f = st.session_state.get(_FILTERS_KEY)
    if not isinstance(f, FilterState):
        f = FilterState()
        st.session_state[_FILTERS_KEY] = f
    return f


def set_filters(f: FilterState) -> None:
    st.session_state[_FILTERS_KEY] = f


def get_view(default: str = "dashboard") -> str:
    return st.session_state.get(_VIEW_KEY, default)


def set_view(view: str) -> None:
    st.session_state[_VIEW_KEY] = view


# -------------------------------
# Writes
# -------------------------------
def report_write(result: WriteResult, success_msg: str, reload: Optional[Callable[[], None]] = None) -> None:
    """
    Shows the outcome of a write, then reruns after a short delay so the
    sheet has time to apply it (the script may lag behind).
    """
    if result.ok:
        st.success(success_msg)
    else:
        st.warning(f"The spreadsheet may not have been updated ({result.reason}). Reloading anyway.")

    time.sleep(get_config().reload_delay_sec)
    if callable(reload):
        reload()
    st.rerun()
