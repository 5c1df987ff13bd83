from datetime import timedelta
from types import SimpleNamespace

import pytest

import config.production
from config import get_settings_module
from src.employee_system.employee_system.auth.settings import AuthSettings
from src.employee_system.employee_system.core.exceptions import ConfigurationError
from src.employee_system.employee_system.main import create_app


@pytest.mark.parametrize(
    "env,expected",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("test", "config.testing"),
        ("development", "config.development"),
        ("anything-else", "config.development"),
    ],
)
def test_app_env_selects_settings_module(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_auth_settings_from_module():
    module = SimpleNamespace(SECRET_KEY="s3cret", TOKEN_TTL_DAYS=3, OTP_EXPIRE_MINUTES=5, ENV_MODE="testing")

    settings = AuthSettings.from_module(module)

    assert settings.token_ttl == timedelta(days=3)
    assert settings.otp_expire_minutes == 5
    assert settings.expose_otp is False


def test_only_development_exposes_otp():
    assert AuthSettings(secret_key="s", env_mode="development").expose_otp is True
    assert AuthSettings(secret_key="s", env_mode="production").expose_otp is False
    assert AuthSettings(secret_key="s").expose_otp is False


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(secret_key=""),
        dict(secret_key="   "),
        dict(secret_key="s", env_mode="staging"),
        dict(secret_key="s", otp_expire_minutes=0),
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        AuthSettings(**kwargs)


def test_app_refuses_to_start_without_signing_secret(monkeypatch):
    monkeypatch.setattr(config.production, "SECRET_KEY", "")

    with pytest.raises(ConfigurationError):
        create_app(settings_module="config.production")
