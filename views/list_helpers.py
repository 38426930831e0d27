import streamlit as st

import ui
from use_cases.session_list import SessionListController


def mount_list(name, factory) -> SessionListController:
    """Controller for list view `name`; fetched once per mount, with a skeleton while it loads."""
    lists = st.session_state.lists
    controller = lists.get(name)
    if controller is None:
        controller = factory()
        lists[name] = controller
    if not controller.loaded:
        placeholder = st.empty()
        with placeholder.container():
            ui.render_skeleton_cards()
        controller.refresh()
        placeholder.empty()
    return controller


def render_error(message):
    st.error(f"⚠️ {message}")
