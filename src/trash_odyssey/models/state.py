"""Pydantic V2 schema for the RPG session state.

RPGState is THE source of truth for an Act-2 session. It is frozen:
every engine operation takes a state and returns a new one, so a caller
holding the old value can keep reading it safely.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)

from trash_odyssey.core.constants import (
    STARTING_CURRENCY,
    STARTING_LEVEL,
    STARTING_LOCATION,
    STARTING_XP,
)
from trash_odyssey.models.enemies import Enemy
from trash_odyssey.models.items import EquipmentLoadout, InventoryItem, StatBlock


class StatBonus(BaseModel):
    """Passive modifier carried over from an Act-1 ingredient.

    Attributes:
        max_hp: Max HP delta (may be negative for cursed ingredients).
        attack: Attack delta.
        defense: Defense delta.
        speed: Speed delta.
        ability: Player ability id unlocked by the ingredient.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    max_hp: int = Field(default=0, alias="maxHp")
    attack: int = Field(default=0, alias="atk")
    defense: int = Field(default=0, alias="def")
    speed: int = Field(default=0, alias="spd")
    ability: str | None = None

    @property
    def stats(self) -> StatBlock:
        return StatBlock(attack=self.attack, defense=self.defense, speed=self.speed)


def freeze_mapping(value: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a read-only view over a private copy of ``value``."""
    return MappingProxyType(dict(value))


BonusMap = Annotated[
    Mapping[str, StatBonus],
    AfterValidator(freeze_mapping),
    PlainSerializer(dict, return_type=dict[str, StatBonus]),
]
PurchaseMap = Annotated[
    Mapping[str, int],
    AfterValidator(freeze_mapping),
    PlainSerializer(dict, return_type=dict[str, int]),
]


class StatusEffectKind(StrEnum):
    """Damage-over-time effects an enemy can leave on the player."""

    POISON = "poison"
    CONSTRICT = "constrict"


class StatusEffect(BaseModel):
    """A damage-over-time effect ticking on the player."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: StatusEffectKind
    damage: int = Field(ge=0)
    turns_remaining: int = Field(ge=0)
    source: str = ""


class RPGState(BaseModel):
    """Complete state of one Act-2 RPG session."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Character
    level: int = Field(default=STARTING_LEVEL, ge=1)
    xp: int = Field(default=STARTING_XP, ge=0)
    max_xp: int = Field(ge=1)
    hp: int = Field(ge=0)
    max_hp: int = Field(ge=1)
    stats: StatBlock

    # Inventory
    inventory: tuple[InventoryItem, ...] = ()
    equipment: EquipmentLoadout
    currency: int = Field(default=STARTING_CURRENCY, ge=0)

    # World progress
    current_location: str = STARTING_LOCATION
    visited_locations: frozenset[str] = frozenset({STARTING_LOCATION})
    checkpoints: tuple[str, ...] = (STARTING_LOCATION,)
    defeated_bosses: frozenset[str] = frozenset()

    # Combat
    in_combat: bool = False
    current_enemy: Enemy | None = None
    player_defending: bool = False
    player_effects: tuple[StatusEffect, ...] = ()
    combat_buffs: StatBlock = Field(default_factory=StatBlock)

    # Act-1 carry-over
    ingredient_bonuses: BonusMap = Field(default_factory=dict, validate_default=True)

    # Shop bookkeeping ("<location>:<item_id>" -> units bought)
    shop_purchases: PurchaseMap = Field(default_factory=dict, validate_default=True)

    @model_validator(mode="after")
    def validate_invariants(self) -> RPGState:
        if self.hp > self.max_hp:
            raise ValueError(f"hp ({self.hp}) exceeds max_hp ({self.max_hp})")
        ids = [item.id for item in self.inventory]
        if len(ids) != len(set(ids)):
            raise ValueError("inventory contains duplicate stacks")
        return self

    @property
    def effective_stats(self) -> StatBlock:
        """Stats including temporary combat buffs."""
        return self.stats + self.combat_buffs

    @property
    def abilities(self) -> tuple[str, ...]:
        """Player abilities unlocked by ingredients, in ingredient order."""
        return tuple(
            bonus.ability for bonus in self.ingredient_bonuses.values() if bonus.ability
        )

    def find_item(self, item_id: str) -> InventoryItem | None:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

    def item_quantity(self, item_id: str) -> int:
        item = self.find_item(item_id)
        return item.quantity if item else 0


__all__ = [
    "freeze_mapping",
    "StatBonus",
    "StatusEffectKind",
    "StatusEffect",
    "RPGState",
]
