"""Core module providing configuration, logging, constants, and exceptions.

Exports:
    Exceptions:
        TrashOdysseyError: Base exception for all application errors.
        DataIntegrityError: Static data required by the engine is broken.
        EquipmentValidationError: Equipment stats unsafe for combat math.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        log_context: Bind logging context for a block.
"""

from __future__ import annotations

from trash_odyssey.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from trash_odyssey.core.exceptions import (
    CombatError,
    ConfigurationError,
    DataIntegrityError,
    EquipmentValidationError,
    GameEngineError,
    InvalidGameStateError,
    TrashOdysseyError,
    ValidationError,
)
from trash_odyssey.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    log_context,
)


__all__ = [
    # Base exception
    "TrashOdysseyError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    # Static data exceptions
    "DataIntegrityError",
    "EquipmentValidationError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
