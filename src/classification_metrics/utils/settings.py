"""Environment driven settings for the classification metrics toolkit."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from classification_metrics.averaging import AverageStrategy


class AppSettings(BaseSettings):
    """Settings resolved from ``CLASSIFICATION_METRICS_*`` variables and ``.env``."""

    log_level: str = Field(
        default="INFO",
        description="Minimum log level emitted by the application.",
    )
    log_format: Literal["console", "json", "plain"] = Field(
        default="console",
        description="Renderer used for structured log output.",
    )
    log_file_path: Path | None = Field(
        default=None,
        description="Optional file receiving a copy of every log line.",
    )
    default_average: AverageStrategy | None = Field(
        default=None,
        description=(
            "Averaging strategy applied by the CLI when ``--average`` is not "
            "provided. ``None`` reports raw per-label scores."
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="CLASSIFICATION_METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        """Upper-case and validate the configured log level."""
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unsupported log level: {value!r}"
            raise ValueError(msg)
        return normalized

    @field_validator("default_average", mode="before")
    @classmethod
    def _blank_average_is_raw(cls, value: object) -> object:
        """Treat empty strings and ``raw`` as no averaging."""
        if isinstance(value, str) and value.strip().lower() in {"", "raw", "none"}:
            return None
        return value


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return the cached application settings."""
    return AppSettings()


def reset_settings() -> None:
    """Clear cached settings so the next lookup re-reads the environment."""
    get_settings.cache_clear()


__all__ = ["AppSettings", "get_settings", "reset_settings"]
