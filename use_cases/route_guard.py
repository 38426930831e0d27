"""Route table and auth guard for in-app navigation."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional
from urllib.parse import parse_qs, quote, unquote, urlsplit


class Route(str, Enum):
    ROOT = "root"
    LOGIN = "login"
    REGISTER = "register"
    DASHBOARD = "dashboard"
    MY_SESSIONS = "my_sessions"
    SESSION_NEW = "session_new"
    SESSION_EDIT = "session_edit"
    UNKNOWN = "unknown"


ROUTE_PATTERNS = (
    (Route.ROOT, re.compile(r"^/$")),
    (Route.LOGIN, re.compile(r"^/login/?$")),
    (Route.REGISTER, re.compile(r"^/register/?$")),
    (Route.DASHBOARD, re.compile(r"^/dashboard/?$")),
    (Route.MY_SESSIONS, re.compile(r"^/my-sessions/?$")),
    (Route.SESSION_NEW, re.compile(r"^/session/new/?$")),
    (Route.SESSION_EDIT, re.compile(r"^/session/edit/(?P<id>[^/]+)/?$")),
)

PROTECTED_ROUTES = frozenset({Route.DASHBOARD, Route.MY_SESSIONS, Route.SESSION_NEW, Route.SESSION_EDIT})
AUTH_ONLY_ROUTES = frozenset({Route.LOGIN, Route.REGISTER})

ROOT_PATH = "/"
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
DEFAULT_AUTHENTICATED_PATH = "/dashboard"
MY_SESSIONS_PATH = "/my-sessions"
NEW_SESSION_PATH = "/session/new"

GuardAction = Literal["PLACEHOLDER", "RENDER", "REDIRECT"]


def edit_session_path(session_id: str) -> str:
    return f"/session/edit/{quote(session_id, safe='')}"


@dataclass(frozen=True)
class RouteMatch:
    route: Route
    path: str
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)


def match_route(location: str) -> RouteMatch:
    parts = urlsplit(location or ROOT_PATH)
    path = parts.path or ROOT_PATH
    query = {k: v[-1] for k, v in parse_qs(parts.query).items() if v}
    for route, pattern in ROUTE_PATTERNS:
        m = pattern.match(path)
        if m:
            params = {k: unquote(v) for k, v in m.groupdict().items()}
            return RouteMatch(route=route, path=path, params=params, query=query)
    return RouteMatch(route=Route.UNKNOWN, path=path, query=query)


def login_target(origin: str) -> str:
    return f"{LOGIN_PATH}?next={quote(origin, safe='')}"


def resolve_next(raw: Optional[str]) -> Optional[str]:
    """Accept a post-login return location only when it is an in-app protected view."""
    if not raw or not raw.startswith("/") or raw.startswith("//"):
        return None
    if match_route(raw).route not in PROTECTED_ROUTES:
        return None
    return raw


@dataclass(frozen=True)
class GuardDecision:
    action: GuardAction
    match: RouteMatch
    target: Optional[str] = None

    @property
    def route(self) -> Route:
        return self.match.route


def evaluate(location: str, *, is_authenticated: bool, is_loading: bool) -> GuardDecision:
    """
    Decide what to do with a navigation to `location`.

    Nothing redirects while the credential check is pending. Afterwards the
    unauthenticated/protected rule is applied before the authenticated/auth-only rule.
    """
    match = match_route(location)

    if is_loading:
        return GuardDecision(action="PLACEHOLDER", match=match)

    if match.route == Route.UNKNOWN:
        return GuardDecision(action="REDIRECT", match=match, target=ROOT_PATH)

    if match.route == Route.ROOT:
        target = DEFAULT_AUTHENTICATED_PATH if is_authenticated else LOGIN_PATH
        return GuardDecision(action="REDIRECT", match=match, target=target)

    if not is_authenticated and match.route in PROTECTED_ROUTES:
        return GuardDecision(action="REDIRECT", match=match, target=login_target(location))

    if is_authenticated and match.route in AUTH_ONLY_ROUTES:
        target = resolve_next(match.query.get("next")) or DEFAULT_AUTHENTICATED_PATH
        return GuardDecision(action="REDIRECT", match=match, target=target)

    return GuardDecision(action="RENDER", match=match)
