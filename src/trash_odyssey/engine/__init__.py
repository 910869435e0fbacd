"""Trash Odyssey RPG engine.

This package contains the combat, progression, inventory and shop
logic. Every operation is a pure transform from an :class:`RPGState` to a
new one, with randomness drawn from an injected :class:`RandomSource`.
"""

from __future__ import annotations

from trash_odyssey.engine.combat import CombatEndResult, CombatProcessor, CombatResult
from trash_odyssey.engine.enemy_database import EnemyDatabase
from trash_odyssey.engine.equipment_validator import (
    assert_equipment_valid,
    create_fallback_equipment,
    validate_equipment_stats,
)
from trash_odyssey.engine.game import GameEngine, RoundReport
from trash_odyssey.engine.inventory import InventoryManager, InventoryResult
from trash_odyssey.engine.item_database import (
    ItemDatabase,
    clear_item_database_cache,
    get_item_database,
)
from trash_odyssey.engine.rng import RandomSource
from trash_odyssey.engine.shop import ShopProcessor, ShopResult
from trash_odyssey.engine.special_abilities import (
    PhaseUpdate,
    SpecialAbilities,
    SpecialAbilityResult,
)
from trash_odyssey.engine.state_manager import RPGStateManager, XPResult


__all__ = [
    # Randomness
    "RandomSource",
    # Registries
    "ItemDatabase",
    "get_item_database",
    "clear_item_database_cache",
    "EnemyDatabase",
    # Equipment validation
    "validate_equipment_stats",
    "assert_equipment_valid",
    "create_fallback_equipment",
    # Processors
    "InventoryManager",
    "InventoryResult",
    "SpecialAbilities",
    "SpecialAbilityResult",
    "PhaseUpdate",
    "RPGStateManager",
    "XPResult",
    "CombatProcessor",
    "CombatResult",
    "CombatEndResult",
    "ShopProcessor",
    "ShopResult",
    # Session
    "GameEngine",
    "RoundReport",
]
