from unittest.mock import patch

import config


@patch("config.get_secret", return_value=None)
def test_defaults(mock_secret, monkeypatch):
    for key in ("API_BASE_URL", "AUTOSAVE_DEBOUNCE_SECONDS", "SAVE_REDIRECT_DELAY_SECONDS", "STATUS_CLEAR_SECONDS"):
        monkeypatch.delenv(key, raising=False)

    assert config.api_base_url() == config.DEFAULT_API_BASE_URL
    assert config.autosave_debounce() == 5.0
    assert config.save_redirect_delay() == 1.5
    assert config.status_clear_delay() == 2.0


@patch("config.get_secret", return_value=None)
def test_environment_overrides(mock_secret, monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://localhost:5000/")
    monkeypatch.setenv("AUTOSAVE_DEBOUNCE_SECONDS", "0.5")

    assert config.api_base_url() == "http://localhost:5000"
    assert config.autosave_debounce() == 0.5


@patch("config.get_secret", return_value="https://secrets.test")
def test_secrets_win_over_environment(mock_secret, monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://localhost:5000")
    assert config.api_base_url() == "https://secrets.test"


@patch("config.get_secret", return_value=None)
def test_bad_number_falls_back(mock_secret, monkeypatch):
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "soon")
    assert config.api_timeout() == 10.0
