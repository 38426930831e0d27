"""
Draft editor view.

Streamlit text inputs report a change when the field is committed (blur or Enter), not per
keystroke, so the auto-save debounce window starts at the last committed edit.
"""

import html
from functools import partial

import streamlit as st

import config
from services import session_service
from use_cases.draft_editor import DraftEditor, EditorState
from use_cases.session_models import EDITABLE_FIELDS
from utils import session_manager
from utils.scheduler import TimerQueue

FIELD_LABELS = {
    "title": ("Title", "Enter session title"),
    "tags": ("Tags (comma-separated)", "tag1, tag2, tag3"),
    "json_file_url": ("JSON File URL", "https://example.com/file.json"),
}


def _widget_key(field):
    return f"editor_{field}"


def _mount_editor(location, session_id):
    store = session_manager.get_token_store()
    editor = DraftEditor(
        partial(session_service.submit_save_draft, store),
        TimerQueue(),
        session_id=session_id,
        debounce_seconds=config.autosave_debounce(),
        redirect_delay=config.save_redirect_delay(),
        status_clear_delay=config.status_clear_delay(),
    )
    if session_id:
        with st.spinner("Loading session..."):
            editor.load_existing(partial(session_service.get_my_session, store))
    for field in EDITABLE_FIELDS:
        st.session_state[_widget_key(field)] = getattr(editor.fields, field)
    st.session_state.editor = editor
    st.session_state.editor_path = location
    return editor


def get_editor(location, session_id=None) -> DraftEditor:
    editor = st.session_state.get("editor")
    if editor is None or st.session_state.get("editor_path") != location:
        session_manager.drop_view_state()
        editor = _mount_editor(location, session_id)
    return editor


def _on_field_change(editor, field):
    editor.edit(field, st.session_state.get(_widget_key(field), ""))


def _leave_if_done(editor):
    if editor.state == EditorState.NAVIGATING:
        session_manager.navigate(editor.navigated_to or editor.list_path)


def _render_status(editor):
    for field, message in editor.errors.items():
        st.caption(f":red[{FIELD_LABELS.get(field, (field,))[0]}: {message}]")
    if editor.error:
        st.error(editor.error)
    st.markdown(
        f"<div class='sc-status-line'>{html.escape(editor.status_message)}</div>",
        unsafe_allow_html=True,
    )


def render_editor(location, session_id=None):
    editor = get_editor(location, session_id)
    editor.timers.run_due()
    _leave_if_done(editor)

    st.title("Edit Session" if session_id else "Create New Session")

    for field in EDITABLE_FIELDS:
        label, placeholder = FIELD_LABELS[field]
        st.text_input(
            label,
            key=_widget_key(field),
            placeholder=placeholder,
            on_change=_on_field_change,
            args=(editor, field),
        )

    @st.fragment(run_every=config.editor_tick())
    def _autosave_tick():
        editor.timers.run_due()
        _leave_if_done(editor)
        _render_status(editor)

    _autosave_tick()

    c_save, c_cancel = st.columns(2)
    saving = editor.state == EditorState.SAVING
    if c_save.button("Saving..." if saving else "Save as Draft", type="primary", use_container_width=True):
        editor.save_now()
        st.rerun()
    if c_cancel.button("Cancel", use_container_width=True):
        editor.cancel()
        _leave_if_done(editor)
