"""Balancing constants for the Trash Odyssey RPG engine.

This module defines the numbers that drive combat math, progression,
starting stats, and the player ability catalog. Keeping them here makes
balancing a one-file change and keeps magic numbers out of the engine.
"""

from __future__ import annotations

# =============================================================================
# Combat Constants
# =============================================================================

DAMAGE_VARIANCE = 3
"""Random variance added to damage (uniform integer in 0..DAMAGE_VARIANCE-1)."""

DEFENSE_MULTIPLIER = 0.5
"""Damage multiplier applied while the target is defending."""

FLEE_CHANCE = 0.5
"""Base chance to flee from a non-boss combat."""

MIN_DAMAGE = 1
"""Minimum damage dealt by any direct attack."""

COUNTER_MULTIPLIER = 0.5
"""Damage multiplier for the counter-attack after a successful defend."""

DEFENSIVE_AI_DEFEND_CHANCE = 0.4
"""Chance that a defensive enemy defends instead of attacking."""

RANDOM_AI_DEFEND_CHANCE = 0.2
"""Chance that a random-pattern enemy defends instead of attacking."""

DEFAULT_EVASION_CHANCE = 0.2
"""Miss chance for the evasion special when the data omits one."""

REVIVE_ITEM_ID = "moldy_bread"
"""Item that is auto-consumed to revive the player on defeat."""

REVIVE_HP_RATIO = 0.5
"""Fraction of max HP restored by an automatic revive."""

# =============================================================================
# Progression Constants
# =============================================================================

MAX_LEVEL = 10
"""Level cap."""

LEVEL_UP_HP_GAIN = 10
LEVEL_UP_ATK_GAIN = 2
LEVEL_UP_DEF_GAIN = 1
LEVEL_UP_SPD_GAIN = 1

XP_CURVE: tuple[int, ...] = (0, 100, 250, 450, 700, 1000, 1350, 1750, 2200, 2700)
"""XP needed to clear each level, indexed by the level being entered."""

# =============================================================================
# Starting Stats
# =============================================================================

STARTING_HP = 50
STARTING_ATK = 5
STARTING_DEF = 3
STARTING_SPD = 5
STARTING_LEVEL = 1
STARTING_XP = 0
STARTING_CURRENCY = 0

STARTING_LOCATION = "garbage_can_start"
"""Where every Act-2 session begins (also the first checkpoint)."""

# =============================================================================
# Inventory Constants
# =============================================================================

MAX_INVENTORY_SIZE = 10
"""Maximum number of distinct stacks the player can carry."""

STARTING_WEAPON = "toothpick_shiv"
STARTING_ARMOR = "exposed_bun"
STARTING_SHIELD = "no_shield"

STARTING_EQUIPMENT: dict[str, str] = {
    "weapon": STARTING_WEAPON,
    "armor": STARTING_ARMOR,
    "shield": STARTING_SHIELD,
}
"""Fallback item id for each slot that can never be empty."""

# =============================================================================
# Player Abilities (granted by Act-1 ingredients)
# =============================================================================

POISON_STRIKE = "poison_strike"
POISON_STRIKE_DAMAGE = 5
"""Poison damage dealt to the enemy at the start of each of its turns."""
POISON_STRIKE_DURATION = 3

ONION_TEARS = "onion_tears"
ONION_TEARS_HP_COST = 10
ONION_TEARS_AOE_DAMAGE = 12

HEAL = "heal"
HEAL_HP_RESTORED = 20

ABILITY_NAMES: dict[str, str] = {
    POISON_STRIKE: "Poison Strike",
    ONION_TEARS: "Onion Tears",
    HEAL: "Special Sauce",
}

ABILITY_DESCRIPTIONS: dict[str, str] = {
    POISON_STRIKE: f"{POISON_STRIKE_DAMAGE} damage per turn for {POISON_STRIKE_DURATION} turns",
    ONION_TEARS: f"{ONION_TEARS_AOE_DAMAGE} AOE damage (costs {ONION_TEARS_HP_COST} HP)",
    HEAL: f"Restore {HEAL_HP_RESTORED} HP (unlimited)",
}


def calculate_base_stat(base_stat: int, level: int, growth_per_level: int) -> int:
    """Return a stat's base value at ``level`` before equipment and bonuses."""
    return base_stat + (level - 1) * growth_per_level


def max_xp_for_level(level: int) -> int:
    """Return the XP needed to clear ``level``, clamped to the last curve entry."""
    if 0 <= level < len(XP_CURVE):
        return XP_CURVE[level]
    return XP_CURVE[-1]


__all__ = [
    # Combat
    "DAMAGE_VARIANCE",
    "DEFENSE_MULTIPLIER",
    "FLEE_CHANCE",
    "MIN_DAMAGE",
    "COUNTER_MULTIPLIER",
    "DEFENSIVE_AI_DEFEND_CHANCE",
    "RANDOM_AI_DEFEND_CHANCE",
    "DEFAULT_EVASION_CHANCE",
    "REVIVE_ITEM_ID",
    "REVIVE_HP_RATIO",
    # Progression
    "MAX_LEVEL",
    "LEVEL_UP_HP_GAIN",
    "LEVEL_UP_ATK_GAIN",
    "LEVEL_UP_DEF_GAIN",
    "LEVEL_UP_SPD_GAIN",
    "XP_CURVE",
    # Starting stats
    "STARTING_HP",
    "STARTING_ATK",
    "STARTING_DEF",
    "STARTING_SPD",
    "STARTING_LEVEL",
    "STARTING_XP",
    "STARTING_CURRENCY",
    "STARTING_LOCATION",
    # Inventory
    "MAX_INVENTORY_SIZE",
    "STARTING_WEAPON",
    "STARTING_ARMOR",
    "STARTING_SHIELD",
    "STARTING_EQUIPMENT",
    # Abilities
    "POISON_STRIKE",
    "POISON_STRIKE_DAMAGE",
    "POISON_STRIKE_DURATION",
    "ONION_TEARS",
    "ONION_TEARS_HP_COST",
    "ONION_TEARS_AOE_DAMAGE",
    "HEAL",
    "HEAL_HP_RESTORED",
    "ABILITY_NAMES",
    "ABILITY_DESCRIPTIONS",
    # Helpers
    "calculate_base_stat",
    "max_xp_for_level",
]
