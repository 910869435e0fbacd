"""Tests for enemy special abilities and boss phases."""

from __future__ import annotations

from collections.abc import Callable

from trash_odyssey.engine.inventory import InventoryManager
from trash_odyssey.engine.special_abilities import SpecialAbilities
from trash_odyssey.models.combat import ActionKind
from trash_odyssey.models.enemies import (
    BiteSpecial,
    Enemy,
    FrenzySpecial,
    PounceSpecial,
    UnknownSpecial,
)
from trash_odyssey.models.state import RPGState, StatusEffectKind


MakeEnemy = Callable[..., Enemy]


class TestDispatch:
    """Tests for chance gating and pass-through."""

    def test_no_special(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test enemies without a special deal their base damage."""
        result = specials.process_special_ability(initial_state, make_enemy("slime_mold"), 4)

        assert result.damage == 4
        assert result.actions == ()

    def test_unknown_special_ignored(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test unrecognized specials do nothing."""
        enemy = make_enemy("slime_mold", special=UnknownSpecial(type="laser_eyes"))

        result = specials.process_special_ability(initial_state, enemy, 4)

        assert result.damage == 4
        assert result.enemy is enemy

    def test_chance_failed(
        self,
        specials: SpecialAbilities,
        scripted_rng,
        initial_state: RPGState,
        make_enemy: MakeEnemy,
    ) -> None:
        """Test a failed trigger roll passes the base damage through."""
        scripted_rng.queue(0.9)

        result = specials.process_special_ability(initial_state, make_enemy("wasp"), 5)

        assert result.damage == 5
        assert result.player_effect is None


class TestDamageSpecials:
    """Tests for specials that change the hit."""

    def test_splash_damage(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test splash damage replaces the base damage."""
        result = specials.process_special_ability(initial_state, make_enemy("lawn_sprinkler"), 1)

        assert result.damage == 6
        assert result.actions[0].damage == 6

    def test_nut_throw(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test half of the player's defense is added back."""
        result = specials.process_special_ability(initial_state, make_enemy("angry_squirrel"), 5)

        assert result.damage == 6
        assert result.actions[0].message == "Angry Squirrel throws an acorn! Ignores 1 DEF!"

    def test_multiplier(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test multiplier specials floor the scaled damage."""
        result = specials.process_special_ability(initial_state, make_enemy("rabid_raccoon"), 7)

        assert result.damage == 10
        assert result.actions[0].message == "Rabid Raccoon bites with rabid fury! 10 damage!"

    def test_crushing_blow(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test the gnome doubles its hit."""
        result = specials.process_special_ability(initial_state, make_enemy("garden_gnome"), 5)

        assert result.damage == 10

    def test_pounce_charge_then_release(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test pounce spends a turn charging, then hits double."""
        charge = specials.process_special_ability(initial_state, make_enemy("feral_cat"), 7)

        assert charge.damage == 0
        assert charge.enemy.charging is True

        release = specials.process_special_ability(initial_state, charge.enemy, 7)

        assert release.damage == 14
        assert release.enemy.charging is False

    def test_pounce_release_ignores_chance(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test a charged pounce always lands."""
        enemy = make_enemy(
            "feral_cat", special=PounceSpecial(chance=0.0, damage_multiplier=2), charging=True
        )

        result = specials.process_special_ability(initial_state, enemy, 5)

        assert result.damage == 10

    def test_frenzy(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test frenzy requests a second attack."""
        enemy = make_enemy("hungry_dog", special=FrenzySpecial())

        result = specials.process_special_ability(initial_state, enemy, 9)

        assert result.extra_attack is True
        assert result.damage == 9

    def test_evasion_is_passive(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test evasion does not change the enemy's own attack."""
        result = specials.process_special_ability(initial_state, make_enemy("fruit_fly_swarm"), 3)

        assert result.damage == 3
        assert result.actions == ()


class TestStatusSpecials:
    """Tests for damage-over-time specials."""

    def test_poison(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test poison keeps the hit and poisons the player."""
        result = specials.process_special_ability(initial_state, make_enemy("wasp"), 5)

        assert result.damage == 5
        assert result.player_effect.kind == StatusEffectKind.POISON
        assert result.player_effect.damage == 2
        assert result.player_effect.turns_remaining == 3
        assert result.player_effect.source == "wasp"

    def test_constrict(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test constrict grapples the player and tracks it on the enemy."""
        result = specials.process_special_ability(initial_state, make_enemy("garden_snake"), 4)

        assert result.damage == 4
        assert result.player_effect.kind == StatusEffectKind.CONSTRICT
        assert result.enemy.constrict_turns == 2


class TestUtilitySpecials:
    """Tests for stealing and summoning."""

    def test_steal(
        self,
        specials: SpecialAbilities,
        scripted_rng,
        inventory: InventoryManager,
        initial_state: RPGState,
        make_enemy: MakeEnemy,
    ) -> None:
        """Test a random stack is flagged for theft."""
        state = inventory.add_item(initial_state, "stale_crumb").new_state
        state = inventory.add_item(state, "ketchup_packet").new_state
        scripted_rng.queue(0.0, 0.6)

        result = specials.process_special_ability(state, make_enemy("crow"), 4)

        assert result.stolen_item_index == 1
        assert result.actions[0].message == "Crow steals Ketchup Packet!"

    def test_steal_empty_inventory(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test nothing is stolen from an empty inventory."""
        result = specials.process_special_ability(initial_state, make_enemy("crow"), 4)

        assert result.stolen_item_index is None
        assert result.damage == 4

    def test_summon_waits_for_interval(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test no summon before the interval elapses."""
        result = specials.process_special_ability(
            initial_state, make_enemy("rat_king", turn_counter=1), 8
        )

        assert result.summon_id is None
        assert result.damage == 8

    def test_summon(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test summoning replaces the attack and resets the counter."""
        result = specials.process_special_ability(
            initial_state, make_enemy("rat_king", turn_counter=2), 8
        )

        assert result.summon_id == "sewer_rat"
        assert result.damage == 0
        assert result.enemy.turn_counter == 0
        assert result.actions[0].action == ActionKind.SUMMON

    def test_summon_capped(
        self, specials: SpecialAbilities, initial_state: RPGState, make_enemy: MakeEnemy
    ) -> None:
        """Test no summon while the minion cap is reached."""
        rats = (make_enemy("sewer_rat"), make_enemy("sewer_rat"))
        enemy = make_enemy("rat_king", turn_counter=2, minions=rats)

        result = specials.process_special_ability(initial_state, enemy, 8)

        assert result.summon_id is None
        assert result.damage == 8


class TestEvasion:
    """Tests for the evasion check."""

    def test_evasion_roll(
        self, specials: SpecialAbilities, scripted_rng, make_enemy: MakeEnemy
    ) -> None:
        """Test evasion uses the miss chance."""
        swarm = make_enemy("fruit_fly_swarm")
        scripted_rng.queue(0.1, 0.5)

        assert specials.check_evasion(swarm) is True
        assert specials.check_evasion(swarm) is False

    def test_no_evasion(
        self, specials: SpecialAbilities, scripted_rng, make_enemy: MakeEnemy
    ) -> None:
        """Test enemies without evasion never dodge and draw nothing."""
        assert specials.check_evasion(make_enemy("slime_mold")) is False
        assert scripted_rng.draws == 0


class TestBossPhases:
    """Tests for health-threshold phase transitions."""

    def test_above_threshold(self, make_enemy: MakeEnemy) -> None:
        """Test no phase while HP is above every threshold."""
        update = SpecialAbilities.update_boss_phase(make_enemy("hungry_dog", hp=100))

        assert update.phase_changed is False
        assert update.enemy.current_phase == 0

    def test_first_phase(self, make_enemy: MakeEnemy) -> None:
        """Test reaching a threshold swaps the special."""
        update = SpecialAbilities.update_boss_phase(make_enemy("hungry_dog", hp=75))

        assert update.phase_changed is True
        assert update.enemy.current_phase == 1
        assert isinstance(update.enemy.special, BiteSpecial)
        assert update.message == "The Hungry Dog's eyes narrow. It bares its teeth!"
        assert update.actions[0].action == ActionKind.PHASE

    def test_skips_to_most_severe(self, make_enemy: MakeEnemy) -> None:
        """Test a big hit jumps straight to the deepest qualifying phase."""
        update = SpecialAbilities.update_boss_phase(make_enemy("hungry_dog", hp=30))

        assert update.enemy.current_phase == 2
        assert isinstance(update.enemy.special, FrenzySpecial)
        assert update.enemy.attack == 17

    def test_never_reverts(self, make_enemy: MakeEnemy) -> None:
        """Test healing does not undo a phase."""
        phased = SpecialAbilities.update_boss_phase(make_enemy("hungry_dog", hp=30)).enemy
        healed = phased.model_copy(update={"hp": 150})

        update = SpecialAbilities.update_boss_phase(healed)

        assert update.phase_changed is False
        assert update.enemy.current_phase == 2

    def test_no_phases(self, make_enemy: MakeEnemy) -> None:
        """Test enemies without phases are untouched."""
        enemy = make_enemy("rat_king", hp=1)

        assert SpecialAbilities.update_boss_phase(enemy).enemy is enemy
