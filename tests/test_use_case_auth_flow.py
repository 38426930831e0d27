from unittest.mock import MagicMock

import pytest

from infrastructure.api.errors import NetworkError
from infrastructure.storage.token_store import TOKEN_KEY, MemoryKeyValueStore
from use_cases.auth_flow import AuthSession


def test_loading_until_check():
    session = AuthSession(MemoryKeyValueStore({TOKEN_KEY: "tok"}))
    assert session.is_loading is True
    assert session.is_authenticated is False

    session.check()

    assert session.is_loading is False
    assert session.is_authenticated is True


def test_check_without_credential():
    session = AuthSession(MemoryKeyValueStore()).check()
    assert session.is_authenticated is False


def test_login_stores_credential():
    store = MemoryKeyValueStore()
    session = AuthSession(store).check()

    session.login("tok")

    assert store.get(TOKEN_KEY) == "tok"
    assert session.is_authenticated is True
    assert session.token == "tok"


def test_login_rejects_empty_token():
    session = AuthSession(MemoryKeyValueStore()).check()
    with pytest.raises(ValueError):
        session.login("")


def test_logout_revokes_clears_and_navigates():
    store = MemoryKeyValueStore({TOKEN_KEY: "tok"})
    on_logout = MagicMock()
    revoke = MagicMock()
    session = AuthSession(store, on_logout=on_logout, revoke=revoke).check()

    session.logout()

    revoke.assert_called_once_with("tok")
    assert store.get(TOKEN_KEY) is None
    assert session.is_authenticated is False
    on_logout.assert_called_once()


def test_logout_completes_when_revoke_fails():
    store = MemoryKeyValueStore({TOKEN_KEY: "tok"})
    on_logout = MagicMock()
    revoke = MagicMock(side_effect=NetworkError("Network error"))
    session = AuthSession(store, on_logout=on_logout, revoke=revoke).check()

    session.logout()

    assert store.get(TOKEN_KEY) is None
    on_logout.assert_called_once()


def test_store_change_updates_state():
    store = MemoryKeyValueStore({TOKEN_KEY: "tok"})
    session = AuthSession(store).check()

    store.remove(TOKEN_KEY)
    assert session.is_authenticated is False

    store.set(TOKEN_KEY, "other")
    assert session.is_authenticated is True


def test_other_keys_ignored():
    store = MemoryKeyValueStore({TOKEN_KEY: "tok"})
    session = AuthSession(store).check()

    store.set("theme", "dark")

    assert session.is_authenticated is True
    assert session.token == "tok"
