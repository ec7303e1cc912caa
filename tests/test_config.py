"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from larder.config import Settings, get_settings


def test_defaults():
    settings = get_settings()

    assert settings.log_level == "INFO"
    assert settings.log_format == "plain"
    assert settings.currency_symbol == "$"
    assert settings.export_checkbox == "☐"
    assert settings.suggestion_limit == 5


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LARDER_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LARDER_LOG_FORMAT", "json")
    monkeypatch.setenv("LARDER_CURRENCY_SYMBOL", "£")
    monkeypatch.setenv("LARDER_SUGGESTION_LIMIT", "8")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"
    assert settings.currency_symbol == "£"
    assert settings.suggestion_limit == 8


def test_env_file_fallback(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text(
        "# local overrides\nLARDER_CURRENCY_SYMBOL=€\nLARDER_SUGGESTION_LIMIT=3\n",
        encoding="utf-8",
    )
    (tmp_path / ".env.local").write_text("LARDER_SUGGESTION_LIMIT=4\n", encoding="utf-8")
    monkeypatch.setenv("LARDER_CURRENCY_SYMBOL", "CHF ")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.currency_symbol == "CHF "
    assert settings.suggestion_limit == 4


@pytest.mark.parametrize("raw", ["zero", "0", "-2"])
def test_invalid_suggestion_limit_is_ignored(monkeypatch, raw):
    monkeypatch.setenv("LARDER_SUGGESTION_LIMIT", raw)
    get_settings.cache_clear()

    assert get_settings().suggestion_limit == 5


def test_settings_are_frozen():
    settings = get_settings()

    with pytest.raises(ValidationError):
        settings.log_level = "DEBUG"
