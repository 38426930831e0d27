import json
import logging
from typing import Callable, Mapping, MutableMapping, Optional
from urllib.parse import unquote

from infrastructure.storage.token_store import TOKEN_KEY, KeyValueStore

log = logging.getLogger(__name__)

MIRROR_PREFIX = "storage::"
COOKIE_MAX_AGE = 2592000  # 30 days


def _js_string(value: str) -> str:
    return json.dumps(value).replace("</", "<\\/")


def persist_script(key: str, value: Optional[str]) -> str:
    """JS that writes (or clears) `key` in localStorage and mirrors it into a cookie."""
    js_key = _js_string(key)
    if value is None:
        body = f"""
            window.parent.localStorage.removeItem({js_key});
            var cookieStr = {js_key} + "=; path=/; max-age=0; SameSite=Lax";
        """
    else:
        body = f"""
            window.parent.localStorage.setItem({js_key}, {_js_string(value)});
            var cookieStr = {js_key} + "=" + encodeURIComponent({_js_string(value)}) + "; path=/; max-age={COOKIE_MAX_AGE}; SameSite=Lax";
        """
    return f"""
        <script>
        (function () {{
          try {{
            {body}
            document.cookie = cookieStr;
            try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
          }} catch (e) {{
            console.error("storage write failed", e);
          }}
        }})();
        </script>
    """


def storage_listener_script(key: str = TOKEN_KEY) -> str:
    """
    JS installed on every run. Reloads the tab when another tab changes `key`,
    and re-syncs the cookie from localStorage so the server side sees the same credential.
    """
    js_key = _js_string(key)
    return f"""
        <script>
        (function () {{
          try {{
            var host = window.parent;
            var value = host.localStorage.getItem({js_key});
            var cookies = host.document.cookie.split("; ");
            var prefix = {js_key} + "=";
            var cookie = null;
            for (var i = 0; i < cookies.length; i++) {{
              if (cookies[i].trim().indexOf(prefix) === 0) {{
                cookie = decodeURIComponent(cookies[i].trim().substring(prefix.length));
              }}
            }}
            if ((value || null) !== (cookie || null)) {{
              var cookieStr = value
                ? prefix + encodeURIComponent(value) + "; path=/; max-age={COOKIE_MAX_AGE}; SameSite=Lax"
                : prefix + "; path=/; max-age=0; SameSite=Lax";
              host.document.cookie = cookieStr;
              host.location.reload();
              return;
            }}
            if (!host.__storageWatchInstalled) {{
              host.__storageWatchInstalled = true;
              host.addEventListener("storage", function (event) {{
                if (event.key === {js_key} || event.key === null) {{
                  host.location.reload();
                }}
              }});
            }}
          }} catch (e) {{
            console.error("storage watch failed", e);
          }}
        }})();
        </script>
    """


class BrowserKeyValueStore(KeyValueStore):
    """
    Credential store backed by the browser's localStorage.

    Reads come from a per-session mirror, seeded from the request cookie on first access.
    Writes update the mirror immediately and emit JS that persists the value in the browser.
    """

    def __init__(
        self,
        state: MutableMapping,
        cookies: Optional[Mapping[str, str]] = None,
        render_script: Optional[Callable[[str], None]] = None,
    ):
        super().__init__()
        self._state = state
        self._cookies = cookies or {}
        self._render_script = render_script

    def get(self, key: str) -> Optional[str]:
        mirror_key = f"{MIRROR_PREFIX}{key}"
        if mirror_key in self._state:
            return self._state[mirror_key]
        raw = self._cookies.get(key)
        value = unquote(raw) if raw else None
        self._state[mirror_key] = value
        if value:
            log.info(f"🔓 Restored '{key}' from browser cookie")
        return value

    def _write(self, key: str, value: Optional[str]) -> None:
        self._state[f"{MIRROR_PREFIX}{key}"] = value
        if self._render_script is not None:
            self._render_script(persist_script(key, value))
