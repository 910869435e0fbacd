"""Custom exception hierarchy for the Trash Odyssey RPG engine.

Invalid player requests (using an item you do not have, selling equipped
gear, attacking with no enemy present) are NOT exceptions: the engine
answers them with the unchanged state and a short message. The classes
here cover the failures that must halt an operation instead of returning
a corrupted state, such as broken static data reaching combat math.

Example:
    >>> from trash_odyssey.core.exceptions import EquipmentValidationError
    >>> raise EquipmentValidationError("Invalid atk stat", item_id="rusty_fork")
"""

from __future__ import annotations

from typing import Any


def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    """Copy ``details`` and add every context value that was supplied."""
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value is not None})
    return merged


class TrashOdysseyError(Exception):
    """Base exception for all Trash Odyssey errors.

    Attributes:
        message: Human-readable error description.
        details: Context about the failure (ids, offending values). Rendered
            after the message as ``[key=value, ...]``.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} [{detail_str}]"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine
# =============================================================================


class GameEngineError(TrashOdysseyError):
    """Base exception for all game engine errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when a state transition would violate an RPGState invariant.

    ``current_state`` names what the engine found (e.g. ``"combat"``) and
    ``expected_states`` what the operation needs.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(
                details, current_state=current_state, expected_states=expected_states
            ),
        )


class CombatError(GameEngineError):
    """Raised when a round cannot be resolved, e.g. combat with no enemy."""

    def __init__(
        self,
        message: str,
        *,
        enemy_id: str | None = None,
        turn_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, enemy_id=enemy_id, turn_number=turn_number),
        )


# =============================================================================
# Static Data
# =============================================================================


class DataIntegrityError(TrashOdysseyError):
    """Raised when static game data required by the engine is missing or broken.

    Examples are a missing starting-equipment definition or an enemy id
    referenced by a summon that does not exist in the enemy table.
    """

    def __init__(
        self,
        message: str,
        *,
        item_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, item_id=item_id))


class EquipmentValidationError(DataIntegrityError):
    """Raised when equipment would feed non-numeric stats into combat math.

    Args:
        message: Human-readable error description.
        item_id: Id of the equipment that failed validation.
        issues: One entry per problem found, e.g. ``"atk is None"``.
    """

    def __init__(
        self,
        message: str,
        *,
        item_id: str | None = None,
        issues: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, item_id=item_id, details=_with_context(details, issues=issues))


# =============================================================================
# Configuration & Input
# =============================================================================


class ConfigurationError(TrashOdysseyError):
    """Raised when a setting is out of range or inconsistent."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, config_key=config_key))


class ValidationError(TrashOdysseyError):
    """Raised when an argument passed to the engine is unusable, such as an empty roll range."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, field_name=field_name, invalid_value=invalid_value),
        )


__all__ = [
    "TrashOdysseyError",
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "DataIntegrityError",
    "EquipmentValidationError",
    "ConfigurationError",
    "ValidationError",
]
