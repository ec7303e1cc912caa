"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global settings loaded from environment variables or .env files."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    currency_symbol: str = Field(
        default="$",
        description="Currency symbol used in the plain-text shopping list export.",
    )
    export_checkbox: str = Field(
        default="☐",
        description="Glyph prefixed to each line of the plain-text shopping list export.",
    )
    suggestion_limit: int = Field(
        default=5,
        ge=1,
        description="Number of recipe suggestions and top shared ingredients to surface.",
    )

    model_config = ConfigDict(frozen=True)


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (log_level := _env("LARDER_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("LARDER_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (currency_symbol := _env("LARDER_CURRENCY_SYMBOL")):
        payload["currency_symbol"] = currency_symbol
    if (checkbox := _env("LARDER_EXPORT_CHECKBOX")):
        payload["export_checkbox"] = checkbox
    if (suggestion_limit := _env("LARDER_SUGGESTION_LIMIT")):
        try:
            limit = int(suggestion_limit)
        except ValueError:
            limit = 0
        if limit >= 1:
            payload["suggestion_limit"] = limit
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
