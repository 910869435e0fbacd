"""Pydantic V2 models for the Trash Odyssey engine.

Submodules:
    items: Item definitions, inventory stacks, equipment and the loadout.
    enemies: Enemy templates, live enemies, special ability variants, boss phases.
    state: The RPG session state and its ingredient/status sub-models.
    combat: Combat log entries and outcome enums.
"""

from __future__ import annotations

from trash_odyssey.models.combat import (
    ActionKind,
    Actor,
    CombatAction,
    CombatOutcome,
    PlayerAction,
)
from trash_odyssey.models.enemies import (
    AIPattern,
    BiteSpecial,
    BossPhase,
    ConstrictSpecial,
    CrushingBlowSpecial,
    CurrencyDrop,
    Enemy,
    EnemyData,
    EnemySpecial,
    EvasionSpecial,
    FrenzySpecial,
    LootDrop,
    NutThrowSpecial,
    PoisonSpecial,
    PounceSpecial,
    RabidBiteSpecial,
    SpecialType,
    SplashDamageSpecial,
    StealItemSpecial,
    SummonMinionsSpecial,
    UnknownSpecial,
    WrenchThrowSpecial,
)
from trash_odyssey.models.items import (
    REQUIRED_SLOTS,
    Equipment,
    EquipmentLoadout,
    EquipmentSlot,
    InventoryItem,
    ItemDefinition,
    ItemEffect,
    ItemType,
    LoadoutSlot,
    ShopListing,
    StatBlock,
)
from trash_odyssey.models.state import (
    RPGState,
    StatBonus,
    StatusEffect,
    StatusEffectKind,
)


__all__ = [
    # Combat log
    "Actor",
    "PlayerAction",
    "ActionKind",
    "CombatOutcome",
    "CombatAction",
    # Enemies
    "AIPattern",
    "SpecialType",
    "EnemySpecial",
    "PoisonSpecial",
    "ConstrictSpecial",
    "SplashDamageSpecial",
    "SummonMinionsSpecial",
    "PounceSpecial",
    "NutThrowSpecial",
    "WrenchThrowSpecial",
    "RabidBiteSpecial",
    "CrushingBlowSpecial",
    "BiteSpecial",
    "FrenzySpecial",
    "EvasionSpecial",
    "StealItemSpecial",
    "UnknownSpecial",
    "BossPhase",
    "LootDrop",
    "CurrencyDrop",
    "EnemyData",
    "Enemy",
    # Items
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
    # State
    "StatBonus",
    "StatusEffectKind",
    "StatusEffect",
    "RPGState",
]
