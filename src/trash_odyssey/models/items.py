"""Pydantic V2 schemas for items, equipment, and the equipment loadout.

Item definitions are static and shared; inventory entries and equipped
gear are per-session values. Every model here is frozen: the engine
builds new values with ``model_copy(update=...)`` instead of mutating.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ItemType(StrEnum):
    """Kinds of items."""

    CONSUMABLE = "consumable"
    EQUIPMENT = "equipment"


class EquipmentSlot(StrEnum):
    """Slot an equipment definition fits into."""

    WEAPON = "weapon"
    ARMOR = "armor"
    SHIELD = "shield"
    ACCESSORY = "accessory"


class LoadoutSlot(StrEnum):
    """Named slots on the player's loadout (two accessory slots)."""

    WEAPON = "weapon"
    ARMOR = "armor"
    SHIELD = "shield"
    ACCESSORY = "accessory"
    ACCESSORY2 = "accessory2"


REQUIRED_SLOTS: tuple[LoadoutSlot, ...] = (
    LoadoutSlot.WEAPON,
    LoadoutSlot.ARMOR,
    LoadoutSlot.SHIELD,
)
"""Slots that always hold an item (starting gear when nothing else)."""


class StatBlock(BaseModel):
    """Attack/defense/speed triple.

    Static data and the wire format use the short keys ``atk``, ``def``
    and ``spd``; Python code uses the long attribute names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    attack: int = Field(default=0, alias="atk")
    defense: int = Field(default=0, alias="def")
    speed: int = Field(default=0, alias="spd")

    def __add__(self, other: StatBlock) -> StatBlock:
        return StatBlock(
            attack=self.attack + other.attack,
            defense=self.defense + other.defense,
            speed=self.speed + other.speed,
        )

    @property
    def is_zero(self) -> bool:
        return self.attack == 0 and self.defense == 0 and self.speed == 0


class ItemEffect(BaseModel):
    """What a consumable does when used.

    Attributes:
        heal_hp: Flat HP restored (capped at max HP).
        heal_hp_percent: Fraction of max HP restored, e.g. 0.5.
        buff_atk: Attack added for the rest of the current combat.
        buff_def: Defense added for the rest of the current combat.
        revive: Consumed automatically when the player falls in combat.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    heal_hp: int | None = Field(default=None, ge=0)
    heal_hp_percent: float | None = Field(default=None, ge=0.0, le=1.0)
    buff_atk: int | None = Field(default=None)
    buff_def: int | None = Field(default=None)
    revive: bool = Field(default=False)


class ItemDefinition(BaseModel):
    """Static definition of an item, keyed by its id in the item table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1, description="Authoritative id (the table key)")
    name: str = Field(description="Display name")
    description: str = Field(description="Flavor text")
    type: ItemType
    slot: EquipmentSlot | None = None
    effect: ItemEffect | None = None
    stats: StatBlock | None = None
    shop_price: int | None = Field(default=None, ge=0)
    sell_price: int | None = Field(default=None, ge=0)
    is_starting_equipment: bool = False
    is_boss_drop: bool = False
    dropped_by: str | None = None

    @property
    def is_equipment(self) -> bool:
        return self.type == ItemType.EQUIPMENT


class InventoryItem(BaseModel):
    """A stack of one item in the player's inventory."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    type: ItemType
    effect: ItemEffect | None = None
    quantity: int = Field(default=1, ge=1)


class Equipment(InventoryItem):
    """An equipped (or equippable) item with fully populated stats."""

    type: ItemType = ItemType.EQUIPMENT
    slot: EquipmentSlot
    stats: StatBlock = Field(default_factory=StatBlock)


class EquipmentLoadout(BaseModel):
    """What the player is wearing.

    Weapon, armor and shield are never empty; accessories may be.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    weapon: Equipment
    armor: Equipment
    shield: Equipment
    accessory: Equipment | None = None
    accessory2: Equipment | None = None

    def get(self, slot: LoadoutSlot | str) -> Equipment | None:
        return getattr(self, LoadoutSlot(slot).value)

    def with_slot(self, slot: LoadoutSlot | str, equipment: Equipment | None) -> EquipmentLoadout:
        """Return a copy of the loadout with ``slot`` replaced."""
        return self.model_copy(update={LoadoutSlot(slot).value: equipment})

    def items(self) -> Iterator[tuple[LoadoutSlot, Equipment]]:
        """Yield (slot, equipment) for every occupied slot."""
        for slot in LoadoutSlot:
            equipment = self.get(slot)
            if equipment is not None:
                yield slot, equipment

    def equipped_ids(self) -> set[str]:
        return {equipment.id for _, equipment in self.items()}

    def total_stats(self) -> StatBlock:
        total = StatBlock()
        for _, equipment in self.items():
            total = total + equipment.stats
        return total


class ShopListing(BaseModel):
    """One line of a location's shop inventory.

    Attributes:
        item_id: Item sold.
        stock: Units available, or "unlimited".
        respawns: Finite stock refills when the player returns to the location.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    item_id: str = Field(min_length=1)
    stock: int | Literal["unlimited"] = Field(default="unlimited")
    respawns: bool = False

    @property
    def is_unlimited(self) -> bool:
        return self.stock == "unlimited"


__all__ = [
    "ItemType",
    "EquipmentSlot",
    "LoadoutSlot",
    "REQUIRED_SLOTS",
    "StatBlock",
    "ItemEffect",
    "ItemDefinition",
    "InventoryItem",
    "Equipment",
    "EquipmentLoadout",
    "ShopListing",
]
