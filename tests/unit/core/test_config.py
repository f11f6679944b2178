import pytest

from tournament_client.core.config.settings import Settings


def test_defaults():
    config = Settings(_env_file=None)

    assert config.NEXT_PUBLIC_API_URL == "http://localhost:3010/api/v1"
    assert config.request_timeout_seconds == 30.0
    assert config.API_REFRESH_TIMEOUT == 5.0
    assert config.API_REFRESH_WAIT_TIMEOUT is None
    assert config.AUTH_LOGIN_ROUTE == "/auth/login"
    assert config.AUTH_REDIRECT_SESSION_KEY == "redirectAfterLogin"
    assert config.is_production is False


def test_trailing_slash_is_stripped_from_base_url():
    config = Settings(_env_file=None, NEXT_PUBLIC_API_URL="https://api.example.com/api/v1/")

    assert config.NEXT_PUBLIC_API_URL == "https://api.example.com/api/v1"
    assert config.refresh_url == "https://api.example.com/api/v1/auth/refresh-token"


def test_environment_variables_override_defaults(monkeypatch):
    monkeypatch.setenv("NEXT_PUBLIC_API_URL", "https://staging.example.com/api/v1")
    monkeypatch.setenv("NEXT_PUBLIC_API_TIMEOUT", "2500")
    monkeypatch.setenv("API_REFRESH_WAIT_TIMEOUT", "7.5")
    monkeypatch.setenv("APP_ENV", "production")

    config = Settings(_env_file=None)

    assert config.NEXT_PUBLIC_API_URL == "https://staging.example.com/api/v1"
    assert config.request_timeout_seconds == 2.5
    assert config.API_REFRESH_WAIT_TIMEOUT == 7.5
    assert config.is_production is True


def test_invalid_timeout_is_rejected():
    with pytest.raises(ValueError):
        Settings(_env_file=None, NEXT_PUBLIC_API_TIMEOUT=0)
