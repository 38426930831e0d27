"""Fetch-and-render state for the Dashboard and My Sessions lists."""

import logging
from typing import Callable, Literal, Optional

from infrastructure.api.errors import SessionApiError
from use_cases.session_models import Session

log = logging.getLogger(__name__)

ListStatus = Literal["loading", "error", "populated", "empty"]


class SessionListController:
    """
    Holds one list view's data. The server is the source of truth: publish and delete
    never touch `sessions` locally, they refetch.
    """

    def __init__(
        self,
        fetch: Callable[[], list[Session]],
        publish: Optional[Callable[[str], None]] = None,
        delete: Optional[Callable[[str], None]] = None,
    ):
        self._fetch = fetch
        self._publish = publish
        self._delete = delete
        self.sessions: list[Session] = []
        self.error: Optional[str] = None
        self.loaded = False
        self.pending_delete: Optional[str] = None
        self.action_error: Optional[str] = None

    @property
    def status(self) -> ListStatus:
        if self.error is not None:
            return "error"
        if not self.loaded:
            return "loading"
        return "populated" if self.sessions else "empty"

    def refresh(self) -> None:
        try:
            sessions = self._fetch()
        except SessionApiError as e:
            self.error = e.message
            self.loaded = True
            return
        self.sessions = list(sessions)
        self.error = None
        self.loaded = True

    def publish(self, session_id: str) -> bool:
        if self._publish is None:
            raise RuntimeError("this list does not support publishing")
        self.action_error = None
        try:
            self._publish(session_id)
        except SessionApiError as e:
            self.action_error = e.message
            return False
        log.info(f"📢 Session {session_id} published")
        self.refresh()
        return True

    def request_delete(self, session_id: str) -> None:
        """First step of delete: nothing is sent until `confirm_delete`."""
        self.pending_delete = session_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        if self._delete is None:
            raise RuntimeError("this list does not support deleting")
        session_id, self.pending_delete = self.pending_delete, None
        self.action_error = None
        if session_id is None:
            return False
        try:
            self._delete(session_id)
        except SessionApiError as e:
            self.action_error = e.message
            return False
        log.info(f"🗑️ Session {session_id} deleted")
        self.refresh()
        return True

