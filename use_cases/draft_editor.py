"""
Draft editor and its auto-save state machine.

    IDLE --edit--> DIRTY --debounce elapsed, form valid--> SAVING
    SAVING --ok--> SAVED --redirect delay--> NAVIGATING
    SAVING --error--> FAILED --status cleared / next edit--> DIRTY
    FAILED --debounce of an edit made while saving--> SAVING
    IDLE|DIRTY|FAILED --save_now--> SAVING --ok--> NAVIGATING

All mutation happens on the thread that drains the TimerQueue. Save requests run
elsewhere (a Future); their completion is handed back through `call_soon`.
At most one save request per editor is in flight; a second request waits for the first.
"""

import logging
from concurrent.futures import Future
from enum import Enum
from typing import Callable, Optional

from infrastructure.api.errors import SessionApiError
from use_cases.forms import FormErrors, validate_draft
from use_cases.route_guard import MY_SESSIONS_PATH
from use_cases.session_models import DraftFields, EditableField, Session
from utils.scheduler import TimerHandle, TimerQueue

log = logging.getLogger(__name__)

STATUS_SAVING = "Saving..."
STATUS_SAVED = "Draft saved successfully!"
STATUS_AUTOSAVE_FAILED = "Auto-save failed"

SaveSubmitter = Callable[[dict], Future]


class EditorState(str, Enum):
    IDLE = "idle"
    DIRTY = "dirty"
    SAVING = "saving"
    SAVED = "saved"
    FAILED = "failed"
    NAVIGATING = "navigating"


class DraftEditor:
    def __init__(
        self,
        submit_save: SaveSubmitter,
        timers: TimerQueue,
        *,
        session_id: Optional[str] = None,
        on_navigate: Optional[Callable[[str], None]] = None,
        debounce_seconds: float = 5.0,
        redirect_delay: float = 1.5,
        status_clear_delay: float = 2.0,
        list_path: str = MY_SESSIONS_PATH,
    ):
        self._submit_save = submit_save
        self.timers = timers
        self._on_navigate = on_navigate
        self.debounce_seconds = debounce_seconds
        self.redirect_delay = redirect_delay
        self.status_clear_delay = status_clear_delay
        self.list_path = list_path

        self.session_id = session_id
        self.fields = DraftFields()
        self._baseline = DraftFields()
        self.state = EditorState.IDLE
        self.errors: FormErrors = {}
        self.status_message = ""
        self.error: Optional[str] = None
        self.mounted = True
        self.navigated_to: Optional[str] = None

        self._debounce: Optional[TimerHandle] = None
        self._redirect: Optional[TimerHandle] = None
        self._status_clear: Optional[TimerHandle] = None
        self._in_flight: Optional[Future] = None
        self._queued: Optional[str] = None

    # --- read side ---

    @property
    def is_dirty(self) -> bool:
        return self.fields != self._baseline

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    @property
    def has_pending_timers(self) -> bool:
        return any(h is not None and not h.cancelled for h in (self._debounce, self._redirect, self._status_clear))

    # --- loading ---

    def populate(self, session: Session) -> None:
        """Fill the form from the server copy. Not an edit: state stays IDLE."""
        if not self.mounted:
            return
        self.fields = DraftFields.from_session(session)
        self._baseline = self.fields
        self.session_id = session.id or self.session_id
        self.errors = {}
        self._cancel("_debounce")
        self.state = EditorState.IDLE

    def load_existing(self, fetch: Callable[[str], Session]) -> bool:
        if not self.session_id:
            return False
        try:
            session = fetch(self.session_id)
        except SessionApiError as e:
            log.warning(f"⚠️ Could not load session {self.session_id}: {e.message}")
            self.error = e.message
            return False
        self.populate(session)
        return True

    # --- user actions ---

    def edit(self, name: EditableField, value: str) -> None:
        if not self.mounted or self.state == EditorState.NAVIGATING:
            return
        self.fields = self.fields.replace(name, value)
        self.errors.pop(name, None)
        self._cancel("_redirect")

        if self.state == EditorState.SAVING:
            # saved after the in-flight request resolves
            self._arm_debounce()
            return

        if self.state == EditorState.FAILED:
            self._cancel("_status_clear")
            self.status_message = ""

        if not self.is_dirty:
            self._cancel("_debounce")
            self.state = EditorState.IDLE
            return

        self.state = EditorState.DIRTY
        self._arm_debounce()

    def save_now(self) -> bool:
        """Manual "Save as Draft": skips the debounce, navigates right after success."""
        if not self.mounted or self.state == EditorState.NAVIGATING:
            return False
        self.error = None
        if self.state == EditorState.SAVED and not self.is_dirty:
            self._navigate()
            return True
        return self._start_save("manual")

    def cancel(self) -> None:
        if not self.mounted or self.state == EditorState.NAVIGATING:
            return
        self._navigate()

    def unmount(self) -> None:
        """Stop every timer. An in-flight save may still finish; its result is dropped."""
        if not self.mounted:
            return
        self.mounted = False
        self._queued = None
        for name in ("_debounce", "_redirect", "_status_clear"):
            self._cancel(name)

    # --- internals ---

    def _cancel(self, name: str) -> None:
        handle = getattr(self, name)
        if handle is not None:
            handle.cancel()
            setattr(self, name, None)

    def _arm_debounce(self) -> None:
        self._cancel("_debounce")
        self._debounce = self.timers.call_later(self.debounce_seconds, self._on_debounce)

    def _on_debounce(self) -> None:
        self._debounce = None
        if not self.mounted:
            return
        if self.state == EditorState.SAVING:
            self._queued = self._queued or "auto"
            return
        if self.state not in (EditorState.DIRTY, EditorState.FAILED) or not self.fields.title.strip():
            return
        self._start_save("auto")

    def _start_save(self, kind: str) -> bool:
        form, errors = validate_draft(self.fields)
        if form is None:
            self.errors = errors
            log.debug(f"Draft not saved ({kind}): {sorted(errors)}")
            return False
        self.errors = {}

        if self._in_flight is not None:
            if kind == "manual" or self._queued is None:
                self._queued = kind
            return True

        snapshot = self.fields
        body = form.to_payload(self.session_id).to_request()
        self._cancel("_debounce")
        self._cancel("_status_clear")
        self.state = EditorState.SAVING
        self.status_message = STATUS_SAVING

        try:
            future = self._submit_save(body)
        except SessionApiError as e:
            self._on_failure(kind, e.message)
            return False

        self._in_flight = future
        future.add_done_callback(
            lambda f: self.timers.call_soon(self._on_save_done, f, kind, snapshot)
        )
        return True

    def _on_save_done(self, future: Future, kind: str, snapshot: DraftFields) -> None:
        if future is self._in_flight:
            self._in_flight = None
        if not self.mounted:
            log.debug("Save finished after unmount, result discarded")
            return

        exc = future.exception()
        queued, self._queued = self._queued, None

        if exc is not None:
            if isinstance(exc, SessionApiError):
                message = exc.message
            else:
                log.error("❌ Unexpected error while saving draft", exc_info=exc)
                message = str(exc) or exc.__class__.__name__
            self._on_failure(kind, message)
            if queued == "manual":
                self._start_save("manual")
            elif (queued == "auto" or self.fields != snapshot) and self._debounce is None:
                # edits made during the failed request still need their own save
                self._arm_debounce()
            return

        self._baseline = snapshot
        if self.fields != snapshot:
            # edited while the request was in flight
            self.state = EditorState.DIRTY
            self.status_message = ""
            if queued is not None:
                self._start_save(queued)
            return

        if kind == "manual" or queued == "manual":
            self._navigate()
            return

        self.state = EditorState.SAVED
        self.status_message = STATUS_SAVED
        self._redirect = self.timers.call_later(self.redirect_delay, self._navigate)

    def _on_failure(self, kind: str, message: str) -> None:
        log.warning(f"⚠️ Draft save failed ({kind}): {message}")
        self.state = EditorState.FAILED
        if kind == "manual":
            self.error = message
            self.status_message = ""
        else:
            self.status_message = STATUS_AUTOSAVE_FAILED
        self._cancel("_status_clear")
        self._status_clear = self.timers.call_later(self.status_clear_delay, self._clear_failure)

    def _clear_failure(self) -> None:
        self._status_clear = None
        if not self.mounted or self.state != EditorState.FAILED:
            return
        self.status_message = ""
        self.state = EditorState.DIRTY if self.is_dirty else EditorState.IDLE

    def _navigate(self) -> None:
        for name in ("_debounce", "_redirect", "_status_clear"):
            self._cancel(name)
        self.state = EditorState.NAVIGATING
        self.navigated_to = self.list_path
        if self._on_navigate is not None:
            self._on_navigate(self.list_path)
