from unittest.mock import MagicMock, patch

import pytest

from infrastructure.api.errors import HttpStatusError
from use_cases.draft_editor import EditorState
from use_cases.session_models import Session
from views import editor_view


class SessionState(dict):
    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def st():
    mock_st = MagicMock()
    mock_st.session_state = SessionState(editor=None, editor_path=None, lists={})
    with patch("views.editor_view.st", mock_st):
        yield mock_st


@pytest.fixture
def session_manager():
    with patch("views.editor_view.session_manager") as sm:
        yield sm


@pytest.fixture
def session_service():
    with patch("views.editor_view.session_service") as svc:
        yield svc


def test_existing_session_loaded_into_widgets(st, session_manager, session_service):
    session_service.get_my_session.return_value = Session(
        id="abc123", title="Sets", tags=("math",), json_file_url="https://x.test/a.json"
    )

    editor = editor_view.get_editor("/session/edit/abc123", "abc123")

    session_service.get_my_session.assert_called_once_with(session_manager.get_token_store(), "abc123")
    assert editor.session_id == "abc123"
    assert editor.state == EditorState.IDLE
    assert st.session_state["editor_title"] == "Sets"
    assert st.session_state["editor_tags"] == "math"
    assert st.session_state["editor_json_file_url"] == "https://x.test/a.json"


def test_load_error_kept_on_editor(st, session_manager, session_service):
    session_service.get_my_session.side_effect = HttpStatusError("Session not found", 404)

    editor = editor_view.get_editor("/session/edit/abc123", "abc123")

    assert editor.error == "Session not found"
    assert st.session_state["editor_title"] == ""


def test_editor_reused_for_same_location(st, session_manager, session_service):
    first = editor_view.get_editor("/session/new")
    st.session_state.editor = first
    assert editor_view.get_editor("/session/new") is first
    session_service.get_my_session.assert_not_called()


def test_new_location_mounts_fresh_editor(st, session_manager, session_service):
    first = editor_view.get_editor("/session/new")
    second = editor_view.get_editor("/session/edit/abc123", "abc123")

    assert second is not first
    session_manager.drop_view_state.assert_called()


def test_widget_change_is_an_edit(st, session_manager, session_service):
    editor = editor_view.get_editor("/session/new")
    st.session_state["editor_title"] = "Intro to Sets"

    editor_view._on_field_change(editor, "title")

    assert editor.fields.title == "Intro to Sets"
    assert editor.state == EditorState.DIRTY
    assert editor.has_pending_timers


def test_navigating_editor_leaves_view(st, session_manager, session_service):
    editor = editor_view.get_editor("/session/new")
    editor.cancel()

    editor_view._leave_if_done(editor)

    session_manager.navigate.assert_called_once_with("/my-sessions")
