"""
Centralized Observability Infrastructure.
Provides structured logging setup and Sentry SDK initialization
governed entirely by environment variables.
"""

import os
import logging
import re
from typing import Any, Dict

log = logging.getLogger(__name__)

REDACTED = "[REDACTED]"

# Patterns to scrub in Sentry events
SENSITIVE_PATTERNS = [
    re.compile(r"(Bearer\s+)[A-Za-z0-9_\-\.=]+", re.IGNORECASE),
    re.compile(r"[A-Za-z0-9_\-]{30,}\.[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}"),  # JWT-shaped
    re.compile(r"[a-zA-Z0-9_\-]{40,}"),
]
SENSITIVE_KEYS = {"token", "password", "confirm_password", "authorization", "cookie"}


def _mask_string(val: str) -> str:
    for pattern in SENSITIVE_PATTERNS:
        if pattern.groups:
            val = pattern.sub(lambda m: m.group(1) + REDACTED, val)
        else:
            val = pattern.sub(REDACTED, val)
    return val


def _recursive_scrub(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: REDACTED if str(k).lower() in SENSITIVE_KEYS else _recursive_scrub(v)
            for k, v in obj.items()
        }
    elif isinstance(obj, list):
        return [_recursive_scrub(i) for i in obj]
    elif isinstance(obj, str):
        return _mask_string(obj)
    return obj


def _scrub_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sentry before_send hook. Scrubs bearer tokens and passwords from
    stack frame locals, request data and breadcrumbs.
    """
    if "exception" in event and "values" in event["exception"]:
        for exc in event["exception"]["values"]:
            if "value" in exc and isinstance(exc["value"], str):
                exc["value"] = _mask_string(exc["value"])
            for frame in exc.get("stacktrace", {}).get("frames", []):
                if "vars" in frame:
                    frame["vars"] = _recursive_scrub(frame["vars"])

    if "request" in event:
        event["request"] = _recursive_scrub(event["request"])

    crumbs = event.get("breadcrumbs")
    if isinstance(crumbs, dict) and "values" in crumbs:
        crumbs["values"] = _recursive_scrub(crumbs["values"])

    return event


def setup_observability() -> None:
    """
    Initializes global system logging and Sentry (if DSN is present).
    Should be called once at application startup.
    """
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        import sentry_sdk
        sentry_env = os.getenv("SENTRY_ENV", "development")

        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=sentry_env,
            traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0") or 0.0),
            send_default_pii=False,
            before_send=_scrub_sensitive_data
        )
        log.info(f"Sentry SDK initialized (env: {sentry_env})")
    else:
        log.info("SENTRY_DSN not provided. Running without Sentry.")

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def tag_navigation(path: str) -> None:
    """Attach the current in-app path to Sentry events, if Sentry is running."""
    import sentry_sdk
    if sentry_sdk.get_client().is_active():
        sentry_sdk.set_tag("app.path", path.split("?", 1)[0])
