from unittest.mock import MagicMock, patch

import pytest

import auth
from infrastructure.api.errors import HttpStatusError


@pytest.fixture
def api():
    client = MagicMock()
    with patch("auth.get_api_client", return_value=client):
        yield client


def test_login_user_strips_email(api):
    api.login.return_value = "tok"
    assert auth.login_user(" a@b.co ", "secret1") == "tok"
    api.login.assert_called_once_with("a@b.co", "secret1")


def test_login_user_propagates_server_message(api):
    api.login.side_effect = HttpStatusError("Invalid credentials", 401)
    with pytest.raises(HttpStatusError) as excinfo:
        auth.login_user("a@b.co", "wrong-pass")
    assert excinfo.value.message == "Invalid credentials"


def test_register_user(api):
    api.register.return_value = "tok"
    assert auth.register_user(" Ann ", "a@b.co", "secret1") == "tok"
    api.register.assert_called_once_with("Ann", "a@b.co", "secret1")


def test_revoke_token(api):
    auth.revoke_token("tok")
    api.logout.assert_called_once_with("tok")
