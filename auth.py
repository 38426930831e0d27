import logging

from services.session_service import get_api_client

log = logging.getLogger(__name__)


def login_user(email: str, password: str) -> str:
    """Exchange credentials for a bearer token. Raises SessionApiError with the server's message."""
    token = get_api_client().login(email.strip(), password)
    log.info("🔑 Login succeeded")
    return token


def register_user(name: str, email: str, password: str) -> str:
    # The register response already carries a usable token.
    token = get_api_client().register(name.strip(), email.strip(), password)
    log.info("🆕 Registration succeeded")
    return token


def revoke_token(token: str) -> None:
    get_api_client().logout(token)
