import logging
import time

import streamlit as st
import streamlit.components.v1 as components

import auth
from infrastructure.storage.browser_storage import MIRROR_PREFIX, BrowserKeyValueStore, storage_listener_script
from use_cases.auth_flow import AuthSession
from use_cases.route_guard import LOGIN_PATH, ROOT_PATH

log = logging.getLogger(__name__)

"""
SESSION STATE CONTRACT

This module owns the Streamlit session state of one browser tab.

st.session_state keys:

path: str
    current in-app location, e.g. "/session/edit/abc123" or "/login?next=%2Fmy-sessions"
    default: ?path= query param, else "/"
    owner: session_manager

token_store: BrowserKeyValueStore
    credential store for this tab
    owner: session_manager

storage::token: str | None
    mirror of the browser credential (see BrowserKeyValueStore)
    owner: token_store

auth_session: AuthSession
    authentication state derived from token_store
    owner: session_manager

editor: DraftEditor | None
    mounted draft editor, bound to editor_path
    default: None
    owner: views.editor_view

editor_path: str | None
    location the editor was mounted for
    default: None
    owner: views.editor_view

lists: dict[str, SessionListController]
    list controllers of mounted list views, keyed by view name
    default: {}
    owner: views
"""

PATH_PARAM = "path"
VIEW_STATE_KEYS = ("editor", "editor_path", "lists")


def init_session_state():
    if "path" not in st.session_state:
        st.session_state.path = st.query_params.get(PATH_PARAM) or ROOT_PATH
    if "editor" not in st.session_state:
        st.session_state.editor = None
    if "editor_path" not in st.session_state:
        st.session_state.editor_path = None
    if "lists" not in st.session_state:
        st.session_state.lists = {}


def _render_script(html: str) -> None:
    components.html(html, height=0)


def _request_cookies():
    try:
        return dict(st.context.cookies)
    except Exception:
        # No browser context (bare imports, tests)
        return {}


def get_token_store() -> BrowserKeyValueStore:
    if "token_store" not in st.session_state:
        st.session_state.token_store = BrowserKeyValueStore(
            st.session_state,
            cookies=_request_cookies(),
            render_script=_render_script,
        )
    return st.session_state.token_store


def get_auth_session() -> AuthSession:
    if "auth_session" not in st.session_state:
        session = AuthSession(
            get_token_store(),
            on_logout=_after_logout,
            revoke=auth.revoke_token,
        )
        session.check()
        st.session_state.auth_session = session
    return st.session_state.auth_session


def watch_browser_storage():
    """Reload this tab when another tab logs in or out."""
    _render_script(storage_listener_script())


def current_location() -> str:
    return st.session_state.get("path") or ROOT_PATH


def drop_view_state():
    editor = st.session_state.get("editor")
    if editor is not None:
        editor.unmount()
    st.session_state.editor = None
    st.session_state.editor_path = None
    st.session_state.lists = {}


def navigate(location: str, rerun: bool = True):
    """Soft in-app navigation: unmount the current view and rerun on `location`."""
    if location != current_location():
        log.debug(f"navigate {current_location()} -> {location}")
        drop_view_state()
    st.session_state.path = location
    st.query_params[PATH_PARAM] = location
    if rerun:
        st.rerun()


def login(token: str, next_location: str):
    get_auth_session().login(token)
    time.sleep(1)  # Give the storage script time to execute
    navigate(next_location)


def logout():
    get_auth_session().logout()


def hard_navigation_script(location: str) -> str:
    return f"""
        <script>
          setTimeout(function () {{
            window.parent.location.replace(window.parent.location.pathname + "?{PATH_PARAM}=" + encodeURIComponent("{location}"));
          }}, 300);
        </script>
    """


def _after_logout():
    """Full navigation to the login view. Nothing protected may stay in session state."""
    drop_view_state()
    for key in list(st.session_state.keys()):
        if not str(key).startswith(MIRROR_PREFIX):
            del st.session_state[key]
    st.session_state.path = LOGIN_PATH
    st.query_params[PATH_PARAM] = LOGIN_PATH
    _render_script(hard_navigation_script(LOGIN_PATH))
    st.stop()
