"""Authentication state derived from the stored credential (application layer)."""

import logging
from typing import Callable, Optional

from infrastructure.api.errors import SessionApiError
from infrastructure.storage.token_store import TOKEN_KEY, KeyValueStore

log = logging.getLogger(__name__)


class AuthSession:
    """
    The credential's presence is the only authentication signal. Nothing is validated
    locally (no expiry or signature check).

    `is_loading` stays True until `check()` runs; the check is a local read so callers
    run it in the same pass that first renders.
    """

    def __init__(
        self,
        store: KeyValueStore,
        on_logout: Optional[Callable[[], None]] = None,
        revoke: Optional[Callable[[str], None]] = None,
    ):
        self._store = store
        self._on_logout = on_logout
        self._revoke = revoke
        self.is_loading = True
        self.is_authenticated = False
        store.subscribe(self._on_store_change)

    def check(self) -> "AuthSession":
        self.is_authenticated = bool(self._store.get(TOKEN_KEY))
        self.is_loading = False
        return self

    @property
    def token(self) -> Optional[str]:
        return self._store.get(TOKEN_KEY)

    def login(self, token: str) -> None:
        if not token:
            raise ValueError("empty credential")
        self._store.set(TOKEN_KEY, token)
        self.is_authenticated = True
        self.is_loading = False

    def logout(self) -> None:
        token = self._store.get(TOKEN_KEY)
        if token and self._revoke is not None:
            try:
                self._revoke(token)
            except SessionApiError as e:
                # Local logout must complete even when the server call fails.
                log.warning(f"⚠️ Remote logout failed, clearing local credential anyway: {e}")
        self._store.remove(TOKEN_KEY)
        self.is_authenticated = False
        if self._on_logout is not None:
            self._on_logout()

    def _on_store_change(self, key: str, old: Optional[str], new: Optional[str]) -> None:
        if key != TOKEN_KEY:
            return
        self.is_authenticated = bool(new)
        self.is_loading = False
