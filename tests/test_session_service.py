from unittest.mock import MagicMock, patch

import pytest

from infrastructure.api.errors import MissingCredentialError
from infrastructure.storage.token_store import TOKEN_KEY, MemoryKeyValueStore
from services import session_service


@pytest.fixture
def api():
    client = MagicMock()
    with patch("services.session_service.get_api_client", return_value=client):
        yield client


def test_protected_calls_need_credential(api):
    store = MemoryKeyValueStore()

    with pytest.raises(MissingCredentialError):
        session_service.list_my_sessions(store)
    with pytest.raises(MissingCredentialError):
        session_service.submit_save_draft(store, {"title": "Sets"})

    api.list_mine.assert_not_called()
    api.save_draft.assert_not_called()


def test_public_list_needs_no_credential(api):
    api.list_published.return_value = []
    assert session_service.list_published_sessions() == []


def test_token_passed_through(api):
    store = MemoryKeyValueStore({TOKEN_KEY: "tok"})

    session_service.get_my_session(store, "abc123")
    session_service.publish_session(store, "abc123")
    session_service.delete_session(store, "abc123")

    api.get_mine.assert_called_once_with("tok", "abc123")
    api.publish.assert_called_once_with("tok", "abc123")
    api.delete.assert_called_once_with("tok", "abc123")


def test_submit_save_draft_runs_in_background(api):
    store = MemoryKeyValueStore({TOKEN_KEY: "tok"})
    api.save_draft.return_value = {"data": {}}
    body = {"title": "Sets", "tags": [], "json_file_url": "https://x.test/a.json"}

    future = session_service.submit_save_draft(store, body)

    assert future.result(timeout=5) == {"data": {}}
    api.save_draft.assert_called_once_with("tok", body)


@patch("services.session_service.config.api_timeout", return_value=7.0)
@patch("services.session_service.config.api_base_url")
def test_api_client_rebuilt_when_origin_changes(mock_url, mock_timeout):
    session_service._api_client = None
    mock_url.return_value = "https://one.test"
    first = session_service.get_api_client()
    assert session_service.get_api_client() is first

    mock_url.return_value = "https://two.test"
    second = session_service.get_api_client()
    assert second is not first
    assert second.base_url == "https://two.test"
    assert second.timeout == 7.0
    session_service._api_client = None
