import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from infrastructure.api.errors import HttpStatusError, NetworkError
from use_cases.session_models import Session

log = logging.getLogger(__name__)


class SessionApiClient:
    """Thin wrapper over the remote sessions API. One origin for every endpoint."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        json_body: Optional[dict] = None,
        fallback_message: str = "Request failed",
    ) -> Any:
        headers = {"Accept": "application/json"}
        if json_body is not None:
            headers["Content-Type"] = "application/json"
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            resp = requests.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"❌ Network error on {method} {path}: {e}")
            raise NetworkError(f"Network error: {e}") from e

        payload = None
        if resp.content:
            try:
                payload = resp.json()
            except ValueError:
                payload = None

        if not 200 <= resp.status_code < 300:
            message = fallback_message
            if isinstance(payload, dict) and payload.get("message"):
                message = str(payload["message"])
            log.warning(f"⚠️ {method} {path} -> HTTP {resp.status_code}: {message}")
            raise HttpStatusError(message, resp.status_code, path)

        log.info(f"✅ {method} {path} -> HTTP {resp.status_code}")
        return payload

    def _token_from(self, payload: Any, fallback_message: str) -> str:
        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            raise HttpStatusError(fallback_message, 200)
        return token

    # --- auth ---

    def login(self, email: str, password: str) -> str:
        payload = self._request(
            "POST",
            "/api/auth/login",
            json_body={"email": email, "password": password},
            fallback_message="Login failed",
        )
        return self._token_from(payload, "Login failed")

    def register(self, name: str, email: str, password: str) -> str:
        payload = self._request(
            "POST",
            "/api/auth/register",
            json_body={"name": name, "email": email, "password": password},
            fallback_message="Registration failed",
        )
        return self._token_from(payload, "Registration failed")

    def logout(self, token: str) -> None:
        self._request("POST", "/api/auth/logout", token=token, fallback_message="Logout failed")

    # --- sessions ---

    def list_published(self) -> list[Session]:
        payload = self._request("GET", "/api/sessions", fallback_message="Failed to fetch sessions")
        return [Session.from_api(item) for item in (payload or {}).get("data") or []]

    def list_mine(self, token: str) -> list[Session]:
        payload = self._request(
            "GET", "/api/my-sessions", token=token, fallback_message="Failed to fetch sessions"
        )
        return [Session.from_api(item) for item in (payload or {}).get("data") or []]

    def get_mine(self, token: str, session_id: str) -> Session:
        path = f"/api/my-sessions/{quote(session_id, safe='')}"
        payload = self._request(
            "GET",
            path,
            token=token,
            fallback_message="Failed to fetch session",
        )
        data = (payload or {}).get("data")
        if not isinstance(data, dict):
            raise HttpStatusError("Failed to fetch session", 200, path)
        return Session.from_api(data)

    def save_draft(self, token: str, body: dict) -> Any:
        return self._request(
            "POST",
            "/api/my-sessions/save-draft",
            token=token,
            json_body=body,
            fallback_message="Failed to save session",
        )

    def publish(self, token: str, session_id: str) -> None:
        self._request(
            "POST",
            "/api/my-sessions/publish",
            token=token,
            json_body={"_id": session_id},
            fallback_message="Failed to publish session",
        )

    def delete(self, token: str, session_id: str) -> None:
        self._request(
            "DELETE",
            f"/api/my-sessions/{quote(session_id, safe='')}",
            token=token,
            fallback_message="Failed to delete session",
        )
