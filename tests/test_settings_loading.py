"""
Test settings loading from the environment.

Verifies that every DispatchSettings field is read from its aliased
environment variable and that invalid values are rejected.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from push_dispatch.settings import DispatchSettings, get_settings


ENV = {
    "PUSH_DISPATCH_LOG_LEVEL": "DEBUG",
    "PUSH_DISPATCH_MAX_CONCURRENT_SENDS": "8",
    "PUSH_DISPATCH_WEBHOOK_ENABLED": "true",
    "PUSH_DISPATCH_WEBHOOK_IDENTIFIER": "com.example.relay",
    "PUSH_DISPATCH_WEBHOOK_URL": "https://relay.example.com/push",
    "PUSH_DISPATCH_WEBHOOK_TIMEOUT": "3.5",
    "PUSH_DISPATCH_WEBHOOK_TOKEN": "secret",
}


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = DispatchSettings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.max_concurrent_sends == 0
    assert settings.webhook_enabled is False
    assert settings.webhook_identifier == "webhook"
    assert settings.webhook_url == ""
    assert settings.webhook_timeout_seconds == 10.0
    assert settings.webhook_auth_token == ""


def test_every_env_key_is_mapped(clean_env):
    for key, value in ENV.items():
        clean_env.setenv(key, value)

    settings = DispatchSettings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.max_concurrent_sends == 8
    assert settings.webhook_enabled is True
    assert settings.webhook_identifier == "com.example.relay"
    assert settings.webhook_url == "https://relay.example.com/push"
    assert settings.webhook_timeout_seconds == 3.5
    assert settings.webhook_auth_token == "secret"


def test_env_file_is_read(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PUSH_DISPATCH_MAX_CONCURRENT_SENDS=4\n", encoding="utf-8")

    settings = DispatchSettings(_env_file=env_file)

    assert settings.max_concurrent_sends == 4


@pytest.mark.parametrize(
    "key, value",
    [
        ("PUSH_DISPATCH_MAX_CONCURRENT_SENDS", "-1"),
        ("PUSH_DISPATCH_WEBHOOK_TIMEOUT", "0"),
        ("PUSH_DISPATCH_WEBHOOK_IDENTIFIER", ""),
    ],
)
def test_invalid_values_are_rejected(clean_env, key, value):
    clean_env.setenv(key, value)

    with pytest.raises(ValidationError):
        DispatchSettings(_env_file=None)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
