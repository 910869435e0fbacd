"""Game engine wiring and the Act-2 session flow.

:class:`GameEngine` builds every registry and processor once from
:class:`~trash_odyssey.core.config.Settings` and exposes the session-level
flow a front end drives: start a game, move between locations, run into
enemies, play combat rounds, and recover from defeat.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from trash_odyssey.core.config import Settings, get_settings
from trash_odyssey.core.exceptions import InvalidGameStateError
from trash_odyssey.core.logging import get_logger, log_context
from trash_odyssey.engine import battle_scene
from trash_odyssey.engine.combat import CombatEndResult, CombatProcessor, CombatResult
from trash_odyssey.engine.enemy_database import EnemyDatabase
from trash_odyssey.engine.inventory import InventoryManager
from trash_odyssey.engine.item_database import ItemDatabase, get_item_database
from trash_odyssey.engine.rng import RandomSource
from trash_odyssey.engine.shop import ShopProcessor
from trash_odyssey.engine.special_abilities import SpecialAbilities
from trash_odyssey.engine.state_manager import RPGStateManager
from trash_odyssey.models.combat import CombatOutcome, PlayerAction
from trash_odyssey.models.state import RPGState


logger = get_logger(__name__)


@dataclass(frozen=True)
class RoundReport:
    """Everything a front end needs after one combat round.

    Attributes:
        state: State to continue from (back in exploration if combat ended).
        result: The raw round result.
        rewards: Victory rewards, or the cleanup result of a loss or escape.
        screen: Rendered text for the round.
    """

    state: RPGState
    result: CombatResult
    rewards: CombatEndResult | None
    screen: str


class GameEngine:
    """Owns the shared collaborators for one process.

    Example:
        >>> engine = GameEngine.from_settings()
        >>> state = engine.new_game(["cheese", "pickle"])
        >>> state = engine.start_combat(state, "slime_mold")
        >>> report = engine.play_round(state, "attack")
    """

    def __init__(
        self,
        *,
        rng: RandomSource,
        items: ItemDatabase,
        enemies: EnemyDatabase,
        flee_chance: float | None = None,
        starting_location: str | None = None,
    ) -> None:
        self.rng = rng
        self.items = items
        self.enemies = enemies
        self.inventory = InventoryManager(items)
        self.specials = SpecialAbilities(rng)
        state_kwargs = {} if starting_location is None else {"starting_location": starting_location}
        self.state_manager = RPGStateManager(items, **state_kwargs)
        combat_kwargs = {} if flee_chance is None else {"flee_chance": flee_chance}
        self.combat = CombatProcessor(
            items,
            enemies,
            rng,
            inventory=self.inventory,
            specials=self.specials,
            state_manager=self.state_manager,
            **combat_kwargs,
        )
        self.shop = ShopProcessor(items, self.inventory)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> GameEngine:
        """Build an engine from application settings (the cached ones by default)."""
        settings = settings or get_settings()
        game = settings.game
        logger.info(
            "Game engine created",
            rng_seed=game.rng_seed,
            flee_chance=game.flee_chance,
            starting_location=game.starting_location,
        )
        return cls(
            rng=RandomSource(seed=game.rng_seed),
            items=get_item_database(),
            enemies=EnemyDatabase(),
            flee_chance=game.flee_chance,
            starting_location=game.starting_location,
        )

    # =========================================================================
    # Exploration
    # =========================================================================

    def new_game(self, ingredients: Iterable[str] = ()) -> RPGState:
        return self.state_manager.create_initial_state(ingredients)

    def enter_location(self, state: RPGState, location: str) -> RPGState:
        """Move to ``location`` and restock its shop's respawning listings.

        Raises:
            InvalidGameStateError: If called during combat.
        """
        if state.in_combat:
            raise InvalidGameStateError(
                "Cannot travel during combat",
                current_state="combat",
                expected_states=["exploration"],
            )
        state = self.state_manager.change_location(state, location)
        return self.shop.restock(state, location)

    def random_encounter(self, state: RPGState) -> RPGState | None:
        """Start a fight with a random local enemy, or None if the area is empty."""
        enemy = self.enemies.random_encounter(state.current_location, self.rng)
        if enemy is None:
            return None
        return self.combat.start_combat(state, enemy)

    def start_combat(self, state: RPGState, enemy_id: str) -> RPGState:
        """Start a scripted fight (bosses, story encounters).

        Raises:
            InvalidGameStateError: If already in combat.
        """
        if state.in_combat:
            raise InvalidGameStateError(
                "Already in combat",
                current_state="combat",
                expected_states=["exploration"],
            )
        return self.combat.start_combat(state, enemy_id)

    # =========================================================================
    # Combat
    # =========================================================================

    def play_round(
        self,
        state: RPGState,
        action: PlayerAction | str,
        target_id: str | None = None,
    ) -> RoundReport:
        """Resolve a round and, when combat ends, settle it.

        Victory pays out rewards. Defeat clears combat and respawns the
        player at the last checkpoint with full HP. A successful escape
        simply returns to exploration.
        """
        enemy_id = state.current_enemy.id if state.current_enemy else None
        with log_context(enemy_id=enemy_id, location=state.current_location):
            return self._play_round(state, action, target_id)

    def _play_round(
        self,
        state: RPGState,
        action: PlayerAction | str,
        target_id: str | None,
    ) -> RoundReport:
        enemy = state.current_enemy
        result = self.combat.process_turn(state, action, target_id)
        outcome = result.outcome

        if outcome == CombatOutcome.VICTORY:
            rewards = self.combat.end_combat(result.new_state, victory=True)
            screen = battle_scene.victory_screen(
                enemy.name if enemy else "enemy",
                rewards.xp_gained,
                rewards.currency_gained,
                rewards.items_looted,
                rewards.leveled_up,
                rewards.new_level,
            )
            return RoundReport(rewards.new_state, result, rewards, screen)

        if outcome == CombatOutcome.DEFEAT:
            rewards = self.combat.end_combat(result.new_state, victory=False)
            respawned = self.state_manager.respawn(rewards.new_state)
            return RoundReport(respawned, result, rewards, battle_scene.defeat_screen())

        if outcome == CombatOutcome.FLED:
            screen = battle_scene.flee_screen(enemy.name if enemy else "enemy")
            return RoundReport(result.new_state, result, None, screen)

        screen = battle_scene.battle_scene(result.new_state, result.actions)
        return RoundReport(result.new_state, result, None, screen)


__all__ = [
    "RoundReport",
    "GameEngine",
]
