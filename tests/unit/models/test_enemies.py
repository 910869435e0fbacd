"""Tests for enemy models and the special-ability union."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from trash_odyssey.models.enemies import (
    AIPattern,
    CurrencyDrop,
    Enemy,
    EnemyData,
    PoisonSpecial,
    SummonMinionsSpecial,
    UnknownSpecial,
)


def template(**overrides: Any) -> EnemyData:
    record = {"id": "slime", "name": "Slime", "max_hp": 20, "attack": 6, "defense": 1}
    return EnemyData.model_validate({**record, **overrides})


class TestSpecialUnion:
    """Tests for special ability parsing."""

    def test_known_variant(self) -> None:
        """Test the type tag selects the variant."""
        enemy = template(special={"type": "poison", "chance": 0.5, "damage": 2, "duration": 3})

        assert isinstance(enemy.special, PoisonSpecial)
        assert enemy.special.chance == 0.5

    def test_variant_defaults(self) -> None:
        """Test omitted variant fields take their defaults."""
        enemy = template(special={"type": "summon_minions", "summon_id": "sewer_rat"})

        assert isinstance(enemy.special, SummonMinionsSpecial)
        assert enemy.special.summon_interval == 3
        assert enemy.special.chance is None

    def test_unknown_variant(self) -> None:
        """Test unrecognized types load instead of failing."""
        enemy = template(special={"type": "laser_eyes", "beam": 9})

        assert isinstance(enemy.special, UnknownSpecial)
        assert enemy.special.type == "laser_eyes"

    def test_chance_out_of_range(self) -> None:
        """Test trigger chances are probabilities."""
        with pytest.raises(ValidationError):
            template(special={"type": "poison", "chance": 1.5})


class TestEnemyData:
    """Tests for enemy templates."""

    def test_defaults(self) -> None:
        """Test a minimal template."""
        enemy = template()

        assert enemy.ai_pattern == AIPattern.AGGRESSIVE
        assert enemy.special is None
        assert enemy.is_boss is False

    def test_phases_sorted(self) -> None:
        """Test phases are ordered from mildest to most severe."""
        enemy = template(
            phases=[{"health_threshold": 0.25}, {"health_threshold": 0.5, "attack_bonus": 2}]
        )

        assert [phase.health_threshold for phase in enemy.phases] == [0.5, 0.25]

    def test_currency_range(self) -> None:
        """Test an inverted currency range is rejected."""
        assert CurrencyDrop(min_amount=2, max_amount=2).max_amount == 2
        with pytest.raises(ValidationError):
            CurrencyDrop(min_amount=5, max_amount=2)

    def test_invalid_stats(self) -> None:
        """Test enemies need positive HP."""
        with pytest.raises(ValidationError):
            template(max_hp=0)


class TestEnemy:
    """Tests for live enemy instances."""

    def test_from_data(self) -> None:
        """Test a fresh instance starts at full HP with clean counters."""
        enemy = Enemy.from_data(template(special={"type": "frenzy"}))

        assert enemy.hp == enemy.max_hp == 20
        assert enemy.current_phase == 0
        assert enemy.turn_counter == 0
        assert enemy.minions == ()
        assert enemy.special.type == "frenzy"

    def test_from_live_enemy(self) -> None:
        """Test copying a wounded instance resets it."""
        wounded = Enemy.from_data(template()).model_copy(update={"hp": 3, "charging": True})

        fresh = Enemy.from_data(wounded)

        assert fresh.hp == 20
        assert fresh.charging is False

    def test_living_minions(self) -> None:
        """Test fallen minions are filtered out."""
        rat = Enemy.from_data(template(id="rat", name="Rat", max_hp=10))
        enemy = Enemy.from_data(template()).model_copy(
            update={"minions": (rat, rat.model_copy(update={"hp": 0}))}
        )

        assert enemy.living_minions == (rat,)

    def test_health(self) -> None:
        """Test liveness and the HP fraction."""
        enemy = Enemy.from_data(template()).model_copy(update={"hp": 5})

        assert enemy.is_alive
        assert enemy.hp_fraction == 0.25
        assert not enemy.model_copy(update={"hp": 0}).is_alive
