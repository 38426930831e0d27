import importlib
import sys
from unittest.mock import MagicMock, patch

import pytest


def _run_app(location, authenticated, loading=False):
    auth_session = MagicMock(is_authenticated=authenticated, is_loading=loading)
    with patch("ui.setup_style"), \
         patch("ui.render_placeholder") as placeholder, \
         patch("utils.session_manager.init_session_state"), \
         patch("utils.session_manager.watch_browser_storage"), \
         patch("utils.session_manager.get_auth_session", return_value=auth_session), \
         patch("utils.session_manager.current_location", return_value=location), \
         patch("utils.session_manager.navigate") as navigate, \
         patch("views.login_view.render_login_screen") as login, \
         patch("views.dashboard_view.render_dashboard") as dashboard, \
         patch("views.my_sessions_view.render_my_sessions") as my_sessions, \
         patch("views.editor_view.render_editor") as editor:
        if "app" in sys.modules:
            del sys.modules["app"]
        importlib.import_module("app")
    return {
        "placeholder": placeholder,
        "navigate": navigate,
        "login": login,
        "dashboard": dashboard,
        "my_sessions": my_sessions,
        "editor": editor,
    }


def _rendered(mocks):
    return [name for name in ("login", "dashboard", "my_sessions", "editor") if mocks[name].called]


def test_guest_on_protected_view_is_redirected_without_rendering():
    mocks = _run_app("/my-sessions", authenticated=False)

    mocks["navigate"].assert_called_once_with("/login?next=%2Fmy-sessions")
    assert _rendered(mocks) == []


def test_loading_shows_placeholder_only():
    mocks = _run_app("/my-sessions", authenticated=False, loading=True)

    mocks["placeholder"].assert_called_once()
    mocks["navigate"].assert_not_called()
    assert _rendered(mocks) == []


@pytest.mark.parametrize("location,view", [
    ("/dashboard", "dashboard"),
    ("/my-sessions", "my_sessions"),
    ("/session/new", "editor"),
])
def test_authenticated_views_render(location, view):
    mocks = _run_app(location, authenticated=True)

    assert _rendered(mocks) == [view]
    mocks["navigate"].assert_not_called()


def test_edit_route_passes_session_id():
    mocks = _run_app("/session/edit/abc123", authenticated=True)
    mocks["editor"].assert_called_once_with("/session/edit/abc123", "abc123")


def test_login_view_gets_next_param():
    mocks = _run_app("/login?next=%2Fsession%2Fnew", authenticated=False)
    mocks["login"].assert_called_once_with("/session/new")
