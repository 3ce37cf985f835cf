"""Configuration management using pydantic-settings.

Settings are read from environment variables (and ``.env`` / ``.env.local``).
Every field has an explicit ``ITEMLOOP_*`` alias. The defaults reproduce the
plain interactive behaviour: greeting, progress every 1000 insertions, and an
unbounded ``loop`` command.

Usage:
    from itemloop.config import load_settings
    settings = load_settings()
    print(settings.progress_interval)

    # CLI overrides
    effective = settings.with_overrides(loop_limit=5000)
"""

import logging
from typing import Any, Self

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(ValueError):
    """Raised when settings or CLI overrides fail validation."""


class Settings(BaseSettings):
    """Session settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        extra="ignore",
    )

    # ==========================================================================
    # DIALOGUE
    # ==========================================================================

    greeting: str = Field(
        default="Hello World!",
        validation_alias="ITEMLOOP_GREETING",
        description="Line printed once when the session starts",
    )

    # ==========================================================================
    # LOOP COMMAND
    # ==========================================================================

    progress_interval: int = Field(
        default=1000,
        gt=0,
        validation_alias="ITEMLOOP_PROGRESS_INTERVAL",
        description="Insertions between progress messages",
    )

    loop_limit: int | None = Field(
        default=None,
        gt=0,
        validation_alias="ITEMLOOP_LOOP_LIMIT",
        description="Stop the loop command after this many insertions (None = unbounded)",
    )

    loop_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        validation_alias="ITEMLOOP_LOOP_DELAY_SECONDS",
        description="Pause after each progress message",
    )

    # ==========================================================================
    # LOGGING
    # ==========================================================================

    log_level: str = Field(
        default="WARNING",
        validation_alias="ITEMLOOP_LOG_LEVEL",
        description="Root log level when not running with --verbose",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    def with_overrides(self, **overrides: Any) -> Self:
        """Return a validated copy with non-None overrides applied.

        Raises:
            ConfigurationError: If the merged values fail validation.
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        fields = type(self).model_fields
        try:
            return type(self)(
                **{str(fields[k].validation_alias): v for k, v in data.items()}
            )
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e


def load_settings() -> Settings:
    """Load settings from the environment.

    Raises:
        ConfigurationError: If an ``ITEMLOOP_*`` variable is invalid.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
