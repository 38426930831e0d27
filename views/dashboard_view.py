import streamlit as st

import ui
from services import session_service
from use_cases.route_guard import MY_SESSIONS_PATH, NEW_SESSION_PATH
from use_cases.session_list import SessionListController
from utils import session_manager
from views.list_helpers import mount_list, render_error


def render_dashboard():
    c_title, c_mine, c_new, c_logout = st.columns([4, 1.3, 1.6, 1])
    c_title.title("Published Sessions")
    if c_mine.button("My Sessions", use_container_width=True):
        session_manager.navigate(MY_SESSIONS_PATH)
    if c_new.button("Create New Session", type="primary", use_container_width=True):
        session_manager.navigate(NEW_SESSION_PATH)
    if c_logout.button("Logout", key="logout_btn", use_container_width=True):
        session_manager.logout()

    controller = mount_list(
        "dashboard",
        lambda: SessionListController(session_service.list_published_sessions),
    )

    status = controller.status
    if status == "error":
        render_error(controller.error)
    elif status == "empty":
        ui.render_empty_state("No published sessions yet", "Publish one of your drafts to see it here.")
    elif status == "populated":
        cols = st.columns(2)
        for index, session in enumerate(controller.sessions):
            with cols[index % 2]:
                ui.render_session_card(session, show_status=False)
