"""Application layer contracts for orchestrating high-level flows."""

from .auth_flow import AuthSession
from .draft_editor import DraftEditor, EditorState
from .forms import DraftForm, LoginForm, RegisterForm, validate_draft, validate_form
from .route_guard import GuardDecision, Route, RouteMatch, evaluate, match_route, resolve_next
from .session_list import SessionListController
from .session_models import DraftFields, DraftPayload, Session, SessionStatus, parse_tags

__all__ = [
    "AuthSession",
    "DraftEditor",
    "DraftFields",
    "DraftForm",
    "DraftPayload",
    "EditorState",
    "GuardDecision",
    "LoginForm",
    "RegisterForm",
    "Route",
    "RouteMatch",
    "Session",
    "SessionListController",
    "SessionStatus",
    "evaluate",
    "match_route",
    "parse_tags",
    "resolve_next",
    "validate_draft",
    "validate_form",
]
