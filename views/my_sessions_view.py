import streamlit as st

import ui
from services import session_service
from use_cases.route_guard import DEFAULT_AUTHENTICATED_PATH, NEW_SESSION_PATH, edit_session_path
from use_cases.session_list import SessionListController
from utils import session_manager
from views.list_helpers import mount_list, render_error


def _build_controller():
    store = session_manager.get_token_store()
    return SessionListController(
        lambda: session_service.list_my_sessions(store),
        publish=lambda session_id: session_service.publish_session(store, session_id),
        delete=lambda session_id: session_service.delete_session(store, session_id),
    )


def _render_actions(controller, session):
    if controller.pending_delete == session.id:
        st.warning("Are you sure you want to delete this session?")
        c_yes, c_no = st.columns(2)
        if c_yes.button("Delete", key=f"confirm_delete_{session.id}", type="primary", use_container_width=True):
            with st.spinner("Deleting..."):
                controller.confirm_delete()
            st.rerun()
        if c_no.button("Cancel", key=f"cancel_delete_{session.id}", use_container_width=True):
            controller.cancel_delete()
            st.rerun()
        return

    c_edit, c_publish, c_delete = st.columns(3)
    if c_edit.button("Edit", key=f"edit_{session.id}", use_container_width=True):
        session_manager.navigate(edit_session_path(session.id))
    if not session.is_published:
        if c_publish.button("Publish", key=f"publish_{session.id}", type="primary", use_container_width=True):
            with st.spinner("Publishing..."):
                controller.publish(session.id)
            st.rerun()
    if c_delete.button("🗑️ Delete", key=f"delete_{session.id}", use_container_width=True):
        controller.request_delete(session.id)
        st.rerun()


def render_my_sessions():
    c_title, c_dash, c_new = st.columns([4, 1.5, 1.8])
    c_title.title("My Sessions")
    if c_dash.button("View Dashboard", use_container_width=True):
        session_manager.navigate(DEFAULT_AUTHENTICATED_PATH)
    if c_new.button("Create New Session", type="primary", use_container_width=True):
        session_manager.navigate(NEW_SESSION_PATH)

    controller = mount_list("my_sessions", _build_controller)

    if controller.action_error:
        st.error(controller.action_error)

    status = controller.status
    if status == "error":
        render_error(controller.error)
    elif status == "empty":
        ui.render_empty_state("No sessions yet", "Create a new session to get started.")
    elif status == "populated":
        for session in controller.sessions:
            with st.container():
                ui.render_session_card(session)
                _render_actions(controller, session)
