"""Configuration management for the Trash Odyssey engine.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from trash_odyssey.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.app_name)
    'Trash Odyssey'

Environment Variables:
    TRASH_ODYSSEY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    TRASH_ODYSSEY_JSON_LOGS: Emit JSON log lines instead of console output
    TRASH_ODYSSEY_GAME_RNG_SEED: Seed for the shared random source
    TRASH_ODYSSEY_GAME_FLEE_CHANCE: Probability that fleeing succeeds
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trash_odyssey.core.constants import FLEE_CHANCE, STARTING_LOCATION
from trash_odyssey.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Configuration for game engine behavior.

    Attributes:
        rng_seed: Seed for the shared random source. None means nondeterministic.
        flee_chance: Probability that fleeing a non-boss enemy succeeds.
        starting_location: Location id a new Act-2 session starts in.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRASH_ODYSSEY_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rng_seed: int | None = Field(
        default=None,
        description="Seed for the shared random source",
    )
    flee_chance: float = Field(
        default=FLEE_CHANCE,
        ge=0.0,
        le=1.0,
        description="Probability that fleeing succeeds",
    )
    starting_location: str = Field(
        default=STARTING_LOCATION,
        description="Location a new session starts in",
    )

    @field_validator("starting_location", mode="after")
    @classmethod
    def validate_starting_location(cls, value: str) -> str:
        """Reject blank starting locations.

        Raises:
            ConfigurationError: If the location id is empty.
        """
        if not value.strip():
            raise ConfigurationError(
                "starting_location must not be empty",
                config_key="starting_location",
            )
        return value


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON lines.
        game: Game engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRASH_ODYSSEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Trash Odyssey",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
