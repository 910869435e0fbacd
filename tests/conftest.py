"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Trash Odyssey test suite.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest

from trash_odyssey.engine.combat import CombatProcessor
from trash_odyssey.engine.enemy_database import EnemyDatabase
from trash_odyssey.engine.inventory import InventoryManager
from trash_odyssey.engine.item_database import ItemDatabase
from trash_odyssey.engine.rng import RandomSource
from trash_odyssey.engine.shop import ShopProcessor
from trash_odyssey.engine.special_abilities import SpecialAbilities
from trash_odyssey.engine.state_manager import RPGStateManager
from trash_odyssey.models.enemies import Enemy
from trash_odyssey.models.state import RPGState


if TYPE_CHECKING:
    from collections.abc import Generator


class ScriptedRandom(RandomSource):
    """RandomSource that replays queued values instead of drawing.

    Every helper (``chance``, ``randint``, ``index``, ``choice``) is built
    on ``random()``, so queuing floats steers each branch exactly. Once
    the queue runs dry ``default`` is returned.
    """

    def __init__(self, *values: float, default: float = 0.0) -> None:
        super().__init__(seed=0)
        self.values = list(values)
        self.default = default
        self.draws = 0

    def queue(self, *values: float) -> None:
        self.values.extend(values)

    def random(self) -> float:
        self.draws += 1
        if self.values:
            return self.values.pop(0)
        return self.default


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings and item registry caches around each test."""
    from trash_odyssey.core.config import clear_settings_cache
    from trash_odyssey.engine.item_database import clear_item_database_cache

    clear_settings_cache()
    clear_item_database_cache()
    yield
    clear_settings_cache()
    clear_item_database_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "TRASH_ODYSSEY_DEBUG": "true",
        "TRASH_ODYSSEY_LOG_LEVEL": "DEBUG",
        "TRASH_ODYSSEY_GAME_RNG_SEED": "1234",
        "TRASH_ODYSSEY_GAME_FLEE_CHANCE": "0.75",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Randomness Fixtures
# =============================================================================


@pytest.fixture
def seeded_rng() -> RandomSource:
    """Provide a deterministic random source."""
    return RandomSource(seed=42)


@pytest.fixture
def scripted_rng() -> ScriptedRandom:
    """Provide a random source that replays queued values (0.0 when empty)."""
    return ScriptedRandom()


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def items() -> ItemDatabase:
    """Provide a fresh item registry over the bundled data."""
    return ItemDatabase()


@pytest.fixture
def enemies() -> EnemyDatabase:
    """Provide a fresh enemy registry over the bundled data."""
    return EnemyDatabase()


@pytest.fixture
def inventory(items: ItemDatabase) -> InventoryManager:
    return InventoryManager(items)


@pytest.fixture
def specials(scripted_rng: ScriptedRandom) -> SpecialAbilities:
    return SpecialAbilities(scripted_rng)


@pytest.fixture
def state_manager(items: ItemDatabase) -> RPGStateManager:
    return RPGStateManager(items)


@pytest.fixture
def combat(
    items: ItemDatabase,
    enemies: EnemyDatabase,
    scripted_rng: ScriptedRandom,
    inventory: InventoryManager,
    specials: SpecialAbilities,
    state_manager: RPGStateManager,
) -> CombatProcessor:
    """Provide a combat processor driven by the scripted random source."""
    return CombatProcessor(
        items,
        enemies,
        scripted_rng,
        inventory=inventory,
        specials=specials,
        state_manager=state_manager,
    )


@pytest.fixture
def shop(items: ItemDatabase, inventory: InventoryManager) -> ShopProcessor:
    return ShopProcessor(items, inventory)


# =============================================================================
# State Fixtures
# =============================================================================


@pytest.fixture
def initial_state(state_manager: RPGStateManager) -> RPGState:
    """Provide a level-1 state with no ingredient bonuses.

    HP 50/50, ATK 5, DEF 3, SPD 5, starting gear, no items, no Crumbs.
    """
    return state_manager.create_initial_state()


@pytest.fixture
def make_enemy(enemies: EnemyDatabase) -> Callable[..., Enemy]:
    """Factory for live enemies with field overrides.

    Example:
        >>> rat_king = make_enemy("rat_king", hp=40, turn_counter=2)
    """

    def _make(enemy_id: str = "slime_mold", **overrides: Any) -> Enemy:
        enemy = enemies.create_enemy(enemy_id)
        if overrides:
            enemy = enemy.model_copy(update=overrides)
        return enemy

    return _make


@pytest.fixture
def in_combat(initial_state: RPGState) -> Callable[..., RPGState]:
    """Factory placing a state in combat against an exact enemy instance.

    Unlike ``CombatProcessor.start_combat`` the enemy is used as given, so
    tests can start from a wounded or mid-phase enemy.
    """

    def _fight(enemy: Enemy, state: RPGState | None = None, **updates: Any) -> RPGState:
        base = state or initial_state
        return base.model_copy(update={"in_combat": True, "current_enemy": enemy, **updates})

    return _fight
