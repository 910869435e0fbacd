"""RPG session state creation and progression bookkeeping.

The state manager builds the initial Act-2 state from the ingredients the
player carried out of Act 1 and owns every progression rule: leveling,
XP, currency, HP clamping, locations, checkpoints, and defeated bosses.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from trash_odyssey.core.constants import (
    LEVEL_UP_ATK_GAIN,
    LEVEL_UP_DEF_GAIN,
    LEVEL_UP_HP_GAIN,
    LEVEL_UP_SPD_GAIN,
    MAX_LEVEL,
    STARTING_ATK,
    STARTING_DEF,
    STARTING_EQUIPMENT,
    STARTING_HP,
    STARTING_LEVEL,
    STARTING_LOCATION,
    STARTING_SPD,
    max_xp_for_level,
)
from trash_odyssey.core.exceptions import DataIntegrityError
from trash_odyssey.core.logging import get_logger
from trash_odyssey.data import INGREDIENT_POWERS
from trash_odyssey.engine.item_database import ItemDatabase
from trash_odyssey.models.items import EquipmentLoadout, StatBlock
from trash_odyssey.models.state import RPGState, StatBonus


logger = get_logger(__name__)


@dataclass(frozen=True)
class XPResult:
    """Outcome of granting experience.

    Attributes:
        new_state: State after XP and any level-ups were applied.
        leveled_up: At least one level was gained.
        levels_gained: Number of levels gained.
    """

    new_state: RPGState
    leveled_up: bool
    levels_gained: int


class RPGStateManager:
    """Creates and advances :class:`RPGState` values."""

    def __init__(
        self,
        items: ItemDatabase,
        *,
        ingredient_powers: Mapping[str, Mapping[str, Any]] | None = None,
        starting_location: str = STARTING_LOCATION,
    ) -> None:
        """Initialize the state manager.

        Args:
            items: Item registry used to resolve starting equipment.
            ingredient_powers: Ingredient id -> bonus record. Defaults to the
                bundled table.
            starting_location: Location (and first checkpoint) of a new session.
        """
        self._items = items
        self._ingredient_powers = (
            INGREDIENT_POWERS if ingredient_powers is None else ingredient_powers
        )
        self._starting_location = starting_location

    # =========================================================================
    # Session Creation
    # =========================================================================

    def convert_ingredients_to_bonuses(self, ingredients: Iterable[str]) -> dict[str, StatBonus]:
        """Map each known ingredient to its passive bonus. Unknown ones are skipped."""
        bonuses: dict[str, StatBonus] = {}
        for ingredient in ingredients:
            power = self._ingredient_powers.get(ingredient)
            if power is None:
                logger.debug("Ingredient grants no power", ingredient=ingredient)
                continue
            bonuses[ingredient] = StatBonus.model_validate(power)
        return bonuses

    @staticmethod
    def calculate_base_stats(bonuses: Mapping[str, StatBonus]) -> tuple[int, StatBlock]:
        """Return (max_hp, stats) for a level-1 character with ``bonuses``.

        Each value is clamped: max HP and attack at least 1, defense at
        least 0, speed at least 1.
        """
        max_hp = STARTING_HP + sum(bonus.max_hp for bonus in bonuses.values())
        total = StatBlock(attack=STARTING_ATK, defense=STARTING_DEF, speed=STARTING_SPD)
        for bonus in bonuses.values():
            total = total + bonus.stats
        stats = StatBlock(
            attack=max(1, total.attack),
            defense=max(0, total.defense),
            speed=max(1, total.speed),
        )
        return max(1, max_hp), stats

    def _starting_loadout(self) -> EquipmentLoadout:
        gear = {}
        for slot, item_id in STARTING_EQUIPMENT.items():
            equipment = self._items.to_equipment(item_id)
            if equipment is None:
                raise DataIntegrityError(
                    f"Starting {slot} '{item_id}' is missing from the item data",
                    item_id=item_id,
                    details={"slot": slot},
                )
            gear[slot] = equipment
        return EquipmentLoadout(**gear)

    def create_initial_state(self, ingredients: Iterable[str] = ()) -> RPGState:
        """Build a fresh level-1 session.

        Args:
            ingredients: Ingredient ids collected in Act 1.

        Raises:
            DataIntegrityError: If starting equipment is not defined.
        """
        bonuses = self.convert_ingredients_to_bonuses(ingredients)
        max_hp, stats = self.calculate_base_stats(bonuses)
        state = RPGState(
            level=STARTING_LEVEL,
            max_xp=max_xp_for_level(STARTING_LEVEL),
            hp=max_hp,
            max_hp=max_hp,
            stats=stats,
            equipment=self._starting_loadout(),
            current_location=self._starting_location,
            visited_locations=frozenset({self._starting_location}),
            checkpoints=(self._starting_location,),
            ingredient_bonuses=bonuses,
        )
        logger.info(
            "Initial state created",
            ingredients=list(bonuses),
            max_hp=max_hp,
            attack=stats.attack,
            defense=stats.defense,
            speed=stats.speed,
        )
        return state

    # =========================================================================
    # Progression
    # =========================================================================

    @staticmethod
    def level_up(state: RPGState) -> RPGState:
        """Gain one level. No-op at the level cap."""
        if state.level >= MAX_LEVEL:
            return state
        new_level = state.level + 1
        stats = state.stats + StatBlock(
            attack=LEVEL_UP_ATK_GAIN,
            defense=LEVEL_UP_DEF_GAIN,
            speed=LEVEL_UP_SPD_GAIN,
        )
        logger.info("Level up", level=new_level)
        return state.model_copy(
            update={
                "level": new_level,
                "max_hp": state.max_hp + LEVEL_UP_HP_GAIN,
                "hp": state.hp + LEVEL_UP_HP_GAIN,
                "stats": stats,
                "max_xp": max_xp_for_level(new_level),
            }
        )

    def add_xp(self, state: RPGState, amount: int) -> XPResult:
        """Grant XP, leveling up as many times as it pays for.

        At the level cap XP is clamped to ``max_xp``.
        """
        working = state
        remaining = state.xp + max(0, amount)
        levels = 0
        while remaining >= working.max_xp and working.level < MAX_LEVEL:
            remaining -= working.max_xp
            working = self.level_up(working)
            levels += 1
        if working.level >= MAX_LEVEL:
            remaining = min(remaining, working.max_xp)
        working = working.model_copy(update={"xp": remaining})
        return XPResult(new_state=working, leveled_up=levels > 0, levels_gained=levels)

    @staticmethod
    def add_currency(state: RPGState, amount: int) -> RPGState:
        return state.model_copy(update={"currency": max(0, state.currency + amount)})

    @staticmethod
    def update_player_hp(state: RPGState, hp: int) -> RPGState:
        return state.model_copy(update={"hp": max(0, min(state.max_hp, hp))})

    @staticmethod
    def update_enemy_hp(state: RPGState, hp: int) -> RPGState:
        enemy = state.current_enemy
        if enemy is None:
            return state
        enemy = enemy.model_copy(update={"hp": max(0, min(enemy.max_hp, hp))})
        return state.model_copy(update={"current_enemy": enemy})

    @staticmethod
    def set_defending(state: RPGState, defending: bool) -> RPGState:
        return state.model_copy(update={"player_defending": defending})

    @staticmethod
    def abilities(state: RPGState) -> tuple[str, ...]:
        return state.abilities

    # =========================================================================
    # World
    # =========================================================================

    @staticmethod
    def change_location(state: RPGState, location: str) -> RPGState:
        return state.model_copy(
            update={
                "current_location": location,
                "visited_locations": state.visited_locations | {location},
            }
        )

    @staticmethod
    def add_checkpoint(state: RPGState, location: str) -> RPGState:
        if location in state.checkpoints:
            return state
        return state.model_copy(update={"checkpoints": (*state.checkpoints, location)})

    @staticmethod
    def defeat_boss(state: RPGState, boss_id: str) -> RPGState:
        if boss_id in state.defeated_bosses:
            return state
        return state.model_copy(update={"defeated_bosses": state.defeated_bosses | {boss_id}})

    @staticmethod
    def clear_combat(state: RPGState) -> RPGState:
        """Leave combat: drop the enemy, stance, status effects and buffs."""
        return state.model_copy(
            update={
                "in_combat": False,
                "current_enemy": None,
                "player_defending": False,
                "player_effects": (),
                "combat_buffs": StatBlock(),
            }
        )

    def respawn(self, state: RPGState) -> RPGState:
        """Return to the last checkpoint at full HP after a defeat."""
        checkpoint = state.checkpoints[-1] if state.checkpoints else self._starting_location
        state = self.clear_combat(state)
        logger.info("Player respawned", checkpoint=checkpoint)
        return state.model_copy(update={"hp": state.max_hp, "current_location": checkpoint})


__all__ = [
    "XPResult",
    "RPGStateManager",
]
