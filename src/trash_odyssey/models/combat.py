"""Pydantic V2 schemas for the combat log.

Every combat operation returns a sequence of CombatAction entries that
the presentation layer renders as narrative lines.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Actor(StrEnum):
    """Who performed a logged action."""

    PLAYER = "player"
    ENEMY = "enemy"


class PlayerAction(StrEnum):
    """Actions the player can choose each combat round."""

    ATTACK = "attack"
    DEFEND = "defend"
    ITEM = "item"
    ABILITY = "ability"
    FLEE = "flee"


class ActionKind(StrEnum):
    """Kinds of logged combat actions."""

    ATTACK = "attack"
    DEFEND = "defend"
    ITEM = "item"
    ABILITY = "ability"
    FLEE = "flee"
    REVIVE = "revive"
    COUNTER = "counter"
    SPECIAL = "special"
    SUMMON = "summon"
    STATUS = "status"
    PHASE = "phase"


class CombatOutcome(StrEnum):
    """Result of a combat round."""

    CONTINUE = "continue"
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"


class CombatAction(BaseModel):
    """One line of the combat log.

    Attributes:
        actor: Who acted.
        action: What kind of action it was.
        damage: HP lost by the target, if any.
        heal_amount: HP gained, if any.
        success: Whether the action succeeded (None when not applicable).
        message: Human-readable narration.
        auto_used: True for automatically consumed items (revives).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    actor: Actor
    action: ActionKind
    damage: int | None = Field(default=None, ge=0)
    heal_amount: int | None = Field(default=None, ge=0)
    success: bool | None = None
    message: str
    auto_used: bool = False


__all__ = [
    "Actor",
    "PlayerAction",
    "ActionKind",
    "CombatOutcome",
    "CombatAction",
]
