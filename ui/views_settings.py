# ui/views_settings.py
from __future__ import annotations

from typing import Optional

import streamlit as st

from core.schemas import AccountStatus, Role, UserAccount
from ui.app_helpers import get_client, get_config, get_settings_store, load_users, report_write


def _render_endpoint() -> None:
    st.subheader("Spreadsheet integration")
    store = get_settings_store()
    config = get_config()

    st.caption(f"Current endpoint: `{config.api_url or '(not set)'}`")
    url = st.text_input("Script URL (leave empty to use the deploy default)", store.get_api_url_override(), key="settings_api_url")
    if st.button("Save URL", key="settings_save_url"):
        try:
            store.set_api_url_override(url)
        except OSError as e:
            st.error(f"Could not save settings: {e}")
            return
        st.success("Endpoint saved.")
        st.rerun()


def _user_form(user: Optional[UserAccount], key: str) -> Optional[UserAccount]:
    u = user or UserAccount()
    roles = list(Role)
    states = list(AccountStatus)
    with st.form(key):
        name = st.text_input("Name", u.name)
        email = st.text_input("E-mail", u.email)
        password = st.text_input("Password", u.password, type="password")
        c1, c2 = st.columns(2)
        role = c1.selectbox("Role", roles, index=roles.index(u.role), format_func=lambda r: r.value)
        status = c2.selectbox("Status", states, index=states.index(u.status), format_func=lambda s: s.value)
        submitted = st.form_submit_button("Save user")

    if not submitted:
        return None
    if not email.strip():
        st.error("E-mail is required.")
        return None
    return UserAccount(id=u.id, name=name.strip(), email=email.strip(), password=password, role=role, status=status)


def _render_users() -> None:
    st.subheader("Users")
    client = get_client()
    users = load_users()

    if users:
        st.dataframe(
            [{"Name": u.name, "E-mail": u.email, "Role": u.role.value, "Status": u.status.value} for u in users],
            use_container_width=True,
            hide_index=True,
        )
    else:
        st.info("No users found in the spreadsheet.")

    with st.expander("New user"):
        new = _user_form(None, key="settings_new_user")
        if new is not None:
            report_write(client.save_user(new), "User saved.")

    by_id = {u.id: u for u in users if u.id}
    if not by_id:
        return
    with st.expander("Edit / delete user"):
        chosen_id = st.selectbox("User", list(by_id.keys()), format_func=lambda k: f"{by_id[k].name} <{by_id[k].email}>", key="settings_user_pick")
        edited = _user_form(by_id[chosen_id], key=f"settings_edit_user_{chosen_id}")
        if edited is not None:
            report_write(client.save_user(edited), "User updated.")
        if st.button("Delete user", key=f"settings_delete_user_{chosen_id}"):
            report_write(client.delete_user(chosen_id), "User deleted.")


def render_settings() -> None:
    _render_endpoint()
    st.divider()
    _render_users()
