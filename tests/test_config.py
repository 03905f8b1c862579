"""Tests for environment-driven settings."""

import pydantic
import pytest

from core.config import Settings, get_settings

ENV_NAMES = [
    "WRITE_DATABASE_URL",
    "READ_DATABASE_URL",
    "OPENAI_API_KEY",
    "MENU_PROVIDER_MAX_ATTEMPTS",
    "CHAT_HISTORY_WINDOW",
    "LOG_LEVEL",
    "CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_without_environment():
    settings = Settings(_env_file=None)
    assert settings.read_database_url == settings.write_database_url == "sqlite:///nutrition.db"
    assert not settings.ai_enabled
    assert settings.menu_provider_max_attempts == 3
    assert settings.cors_origin_list == ["*"]


def test_values_come_from_environment(monkeypatch):
    monkeypatch.setenv("WRITE_DATABASE_URL", "sqlite:///primary.db")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("CHAT_HISTORY_WINDOW", "4")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    settings = Settings(_env_file=None)
    assert settings.read_database_url == "sqlite:///primary.db"
    assert settings.ai_enabled
    assert settings.chat_history_window == 4
    assert settings.log_level == "DEBUG"
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]


def test_blank_api_key_disables_ai(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "  ")
    assert Settings(_env_file=None).openai_api_key is None


def test_invalid_attempt_count_is_rejected(monkeypatch):
    monkeypatch.setenv("MENU_PROVIDER_MAX_ATTEMPTS", "0")
    with pytest.raises(pydantic.ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached_until_cleared(monkeypatch):
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("READ_DATABASE_URL", "sqlite:///replica.db")
    get_settings.cache_clear()
    assert get_settings().read_database_url == "sqlite:///replica.db"
