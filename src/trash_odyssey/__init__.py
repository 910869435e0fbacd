"""Trash Odyssey - RPG combat and progression engine.

Act 2 of Burger Bun Dungeon: the bun that survived Act 1 climbs out of
the garbage can and fights its way across the backyard. The ingredients
it collected in Act 1 become passive stat bonuses and abilities here.

DESIGN:
- RPGState is THE source of truth and is never mutated in place
- Every roll goes through one seedable RandomSource
- Static data is validated on load; bad records are logged and dropped

Example:
    >>> from trash_odyssey import GameEngine
    >>>
    >>> engine = GameEngine.from_settings()
    >>> state = engine.new_game(["cheese", "bacon", "pickle"])
    >>> state = engine.start_combat(state, "slime_mold")
    >>> report = engine.play_round(state, "ability", "poison_strike")
    >>> print(report.screen)

Modules:
    core: Configuration, logging, constants, and exceptions.
    data: Static item, enemy, shop, and ingredient tables.
    models: Pydantic V2 schemas for state, items, enemies, and the combat log.
    engine: Combat, inventory, progression, shop, and text rendering.
"""

from __future__ import annotations

# Core
from trash_odyssey.core.config import Settings, get_settings
from trash_odyssey.core.exceptions import TrashOdysseyError
from trash_odyssey.core.logging import configure_logging, get_logger

# Engine
from trash_odyssey.engine import (
    CombatProcessor,
    EnemyDatabase,
    GameEngine,
    InventoryManager,
    ItemDatabase,
    RandomSource,
    RPGStateManager,
    ShopProcessor,
    SpecialAbilities,
)

# Models
from trash_odyssey.models import (
    CombatAction,
    CombatOutcome,
    Enemy,
    PlayerAction,
    RPGState,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "TrashOdysseyError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Engine
    "GameEngine",
    "RandomSource",
    "ItemDatabase",
    "EnemyDatabase",
    "InventoryManager",
    "SpecialAbilities",
    "RPGStateManager",
    "CombatProcessor",
    "ShopProcessor",
    # Models
    "RPGState",
    "Enemy",
    "PlayerAction",
    "CombatAction",
    "CombatOutcome",
]
