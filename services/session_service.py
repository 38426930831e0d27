import atexit
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import config
from infrastructure.api.errors import MissingCredentialError
from infrastructure.api.session_api import SessionApiClient
from infrastructure.storage.token_store import TOKEN_KEY, KeyValueStore
from use_cases.session_models import Session

log = logging.getLogger(__name__)

_api_client: Optional[SessionApiClient] = None
_save_executor: Optional[ThreadPoolExecutor] = None


def get_api_client() -> SessionApiClient:
    global _api_client
    base_url = config.api_base_url()
    if _api_client is None or _api_client.base_url != base_url:
        _api_client = SessionApiClient(base_url, timeout=config.api_timeout())
    return _api_client


def _get_save_executor() -> ThreadPoolExecutor:
    global _save_executor
    if _save_executor is None:
        _save_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="draft-save")
        atexit.register(_save_executor.shutdown, wait=False)
    return _save_executor


def require_token(store: KeyValueStore) -> str:
    """Protected calls never reach the server without a stored credential."""
    token = store.get(TOKEN_KEY)
    if not token:
        raise MissingCredentialError()
    return token


def list_published_sessions() -> list[Session]:
    return get_api_client().list_published()


def list_my_sessions(store: KeyValueStore) -> list[Session]:
    return get_api_client().list_mine(require_token(store))


def get_my_session(store: KeyValueStore, session_id: str) -> Session:
    return get_api_client().get_mine(require_token(store), session_id)


def submit_save_draft(store: KeyValueStore, body: dict) -> Future:
    """Run a save-draft request off the UI thread. The token is read before submitting."""
    token = require_token(store)
    client = get_api_client()
    log.info(f"💾 Saving draft ({'update ' + body['_id'] if body.get('_id') else 'new'})")
    return _get_save_executor().submit(client.save_draft, token, body)


def publish_session(store: KeyValueStore, session_id: str) -> None:
    get_api_client().publish(require_token(store), session_id)


def delete_session(store: KeyValueStore, session_id: str) -> None:
    get_api_client().delete(require_token(store), session_id)
