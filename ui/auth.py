# ui/auth.py
from __future__ import annotations

import streamlit as st

from core.auth import authenticate
from ui.app_helpers import current_user, get_config, load_users, set_current_user


def require_login() -> None:
    """
    Login gate. Stops the script run until a user is signed in.
    Idempotent: once signed in, it renders nothing.
    """
    if current_user() is not None:
        return

    st.subheader("AWB Tracker: sign in")

    config = get_config()
    if not config.is_configured:
        st.error("Configuration error: the spreadsheet URL is not set. Set AWB_API_URL or secrets['API_URL'].")
        st.stop()

    with st.form("auth_login_form"):
        email = st.text_input("E-mail", key="auth_email")
        password = st.text_input("Password", type="password", key="auth_password")
        submitted = st.form_submit_button("Sign in")

    if not submitted:
        st.stop()

    with st.spinner("Checking credentials..."):
        users = load_users()

    result = authenticate(users, email, password, configured=config.is_configured)
    if not result.ok:
        st.error(result.message)
        if not users:
            st.caption("No users could be read from the spreadsheet. Check the script URL and its sharing settings.")
        st.stop()

    set_current_user(result.user)
    st.rerun()


def render_logout_button() -> None:
    user = current_user()
    if user is None:
        return
    st.caption(f"Signed in as **{user.name}** ({user.role.value})")
    if st.button("Sign out", key="auth_logout"):
        set_current_user(None)
        st.rerun()
