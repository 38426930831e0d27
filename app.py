from datetime import datetime, timezone

import streamlit as st

from infrastructure.observability import setup_observability, tag_navigation
setup_observability()

import ui
from use_cases import route_guard
from use_cases.route_guard import Route
from utils import session_manager
from views import dashboard_view, editor_view, login_view, my_sessions_view

# --- PAGE SETUP ---
st.set_page_config(page_title="Session Catalog", page_icon="📚", layout="wide")

# Health Check (Basic load-balancer heartbeat)
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "version": "1.0", "uptime": datetime.now(timezone.utc).isoformat()})
    st.stop()


def render_route(decision, location):
    route = decision.route
    if route == Route.LOGIN:
        login_view.render_login_screen(decision.match.query.get("next"))
    elif route == Route.REGISTER:
        login_view.render_register_screen()
    elif route == Route.DASHBOARD:
        dashboard_view.render_dashboard()
    elif route == Route.MY_SESSIONS:
        my_sessions_view.render_my_sessions()
    elif route == Route.SESSION_NEW:
        editor_view.render_editor(location)
    elif route == Route.SESSION_EDIT:
        editor_view.render_editor(location, decision.match.params.get("id"))


ui.setup_style()
session_manager.init_session_state()
session_manager.watch_browser_storage()

# --- ROUTE GUARD ---
auth_session = session_manager.get_auth_session()
location = session_manager.current_location()
decision = route_guard.evaluate(
    location,
    is_authenticated=auth_session.is_authenticated,
    is_loading=auth_session.is_loading,
)

if decision.action == "PLACEHOLDER":
    ui.render_placeholder()
elif decision.action == "REDIRECT":
    session_manager.navigate(decision.target)
else:
    tag_navigation(decision.match.path)
    render_route(decision, location)
