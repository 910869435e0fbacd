"""Validated registry of enemy templates and location encounter tables."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from trash_odyssey.core.exceptions import DataIntegrityError
from trash_odyssey.core.logging import get_logger
from trash_odyssey.data import ENCOUNTERS, ENEMIES
from trash_odyssey.engine.rng import RandomSource
from trash_odyssey.models.enemies import Enemy, EnemyData


logger = get_logger(__name__)


class EnemyDatabase:
    """Enemy templates keyed by id.

    Templates are immutable; every encounter gets a fresh :class:`Enemy`
    at full HP from :meth:`create_enemy`.
    """

    def __init__(
        self,
        table: Mapping[str, Any] | None = None,
        encounters: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self._table = ENEMIES if table is None else table
        self._encounters = ENCOUNTERS if encounters is None else encounters
        self._cache: dict[str, EnemyData] | None = None

    def _ensure_loaded(self) -> dict[str, EnemyData]:
        if self._cache is None:
            enemies: dict[str, EnemyData] = {}
            for enemy_id, record in self._table.items():
                if not isinstance(record, Mapping):
                    continue
                try:
                    enemies[enemy_id] = EnemyData.model_validate({**record, "id": enemy_id})
                except PydanticValidationError as exc:
                    logger.warning(
                        "Enemy rejected",
                        enemy_id=enemy_id,
                        errors=exc.error_count(),
                    )
            self._cache = enemies
            logger.info("Enemy database loaded", enemies=len(enemies))
        return self._cache

    def clear_cache(self) -> None:
        self._cache = None

    def get_enemy(self, enemy_id: str) -> EnemyData | None:
        return self._ensure_loaded().get(enemy_id)

    def has_enemy(self, enemy_id: str) -> bool:
        return enemy_id in self._ensure_loaded()

    def all_enemies(self) -> tuple[EnemyData, ...]:
        return tuple(self._ensure_loaded().values())

    def bosses(self) -> tuple[EnemyData, ...]:
        return tuple(enemy for enemy in self._ensure_loaded().values() if enemy.is_boss)

    def create_enemy(self, enemy: str | EnemyData) -> Enemy:
        """Create a fresh enemy instance.

        Args:
            enemy: An enemy id or a template (or live enemy) to copy.

        Raises:
            DataIntegrityError: If an id is given that is not defined.
        """
        if isinstance(enemy, EnemyData):
            return Enemy.from_data(enemy)
        data = self.get_enemy(enemy)
        if data is None:
            raise DataIntegrityError(f"Enemy '{enemy}' is not defined", item_id=enemy)
        return Enemy.from_data(data)

    def encounter_table(self, location: str) -> tuple[str, ...]:
        return tuple(
            enemy_id for enemy_id in self._encounters.get(location, ()) if self.has_enemy(enemy_id)
        )

    def random_encounter(self, location: str, rng: RandomSource) -> Enemy | None:
        """Pick a fresh regular enemy for ``location``, or None if nothing lives there."""
        table = self.encounter_table(location)
        if not table:
            return None
        return self.create_enemy(rng.choice(table))


__all__ = ["EnemyDatabase"]
