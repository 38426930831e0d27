import logging
import os

import streamlit as st

log = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://react-assignment-612x.onrender.com"


def get_secret(key):
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None


def get_setting(key, default=None):
    """Streamlit secrets first, then the process environment."""
    value = get_secret(key)
    if value is None:
        value = os.getenv(key)
    return default if value in (None, "") else value


def get_float(key, default: float) -> float:
    raw = get_setting(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        log.warning(f"⚠️ {key}={raw!r} is not a number, using {default}")
        return default


def api_base_url() -> str:
    return str(get_setting("API_BASE_URL", DEFAULT_API_BASE_URL)).rstrip("/")


def api_timeout() -> float:
    return get_float("API_TIMEOUT_SECONDS", 10.0)


def autosave_debounce() -> float:
    return get_float("AUTOSAVE_DEBOUNCE_SECONDS", 5.0)


def save_redirect_delay() -> float:
    return get_float("SAVE_REDIRECT_DELAY_SECONDS", 1.5)


def status_clear_delay() -> float:
    return get_float("STATUS_CLEAR_SECONDS", 2.0)


def editor_tick() -> float:
    return get_float("EDITOR_TICK_SECONDS", 1.0)
