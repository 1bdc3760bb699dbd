"""Environment-based configuration using pydantic-settings.

Example:
    >>> from opresults.settings import get_settings
    >>> settings = get_settings()
    >>> settings.include_traceback
    False

    # Or with environment variables:
    # OPRESULTS_INCLUDE_TRACEBACK=true
    # OPRESULTS_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OPRESULTS_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class OpResultsSettings(BaseSettings):
    """Root settings for opresults.

    Example environment variables:
        OPRESULTS_INCLUDE_TRACEBACK=true
        OPRESULTS_STRICT_VALUE_FAILURE=true
        OPRESULTS_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="OPRESULTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    include_traceback: bool = Field(
        default=False,
        description="Capture a formatted traceback in exception messages",
    )
    strict_value_failure: bool = Field(
        default=False,
        description="ValueResult.failure() rejects an empty message list",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> OpResultsSettings:
    """Get the global settings instance (cached)."""
    return OpResultsSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
