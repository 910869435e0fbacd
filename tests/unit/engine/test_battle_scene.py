"""Tests for plain-text combat rendering."""

from __future__ import annotations

from collections.abc import Callable

from trash_odyssey.engine import battle_scene
from trash_odyssey.engine.state_manager import RPGStateManager
from trash_odyssey.models.combat import ActionKind, Actor, CombatAction
from trash_odyssey.models.enemies import Enemy
from trash_odyssey.models.state import RPGState, StatusEffect, StatusEffectKind


MakeEnemy = Callable[..., Enemy]
InCombat = Callable[..., RPGState]


class TestHpBar:
    """Tests for the HP bar."""

    def test_proportional(self) -> None:
        """Test the bar fills in proportion."""
        assert battle_scene.hp_bar(5, 10) == "[█████░░░░░]"
        assert battle_scene.hp_bar(10, 10) == "[██████████]"
        assert battle_scene.hp_bar(1, 3, length=3) == "[█░░]"

    def test_clamped(self) -> None:
        """Test out-of-range values do not overflow the bar."""
        assert battle_scene.hp_bar(15, 10) == "[██████████]"
        assert battle_scene.hp_bar(-2, 10) == "[░░░░░░░░░░]"
        assert battle_scene.hp_bar(0, 0) == "[░░░░░░░░░░]"


class TestCombatLog:
    """Tests for the combat log lines."""

    def test_prefixes(self) -> None:
        """Test each line is prefixed by its actor."""
        actions = [
            CombatAction(actor=Actor.PLAYER, action=ActionKind.ATTACK, message="Hit!"),
            CombatAction(actor=Actor.ENEMY, action=ActionKind.DEFEND, message="Braced."),
        ]

        assert battle_scene.combat_log(actions) == "You: Hit!\nEnemy: Braced."


class TestBattleScene:
    """Tests for the main battle screen."""

    def test_no_enemy(self, initial_state: RPGState) -> None:
        """Test the screen without an enemy."""
        assert battle_scene.battle_scene(initial_state) == "No enemy in combat."

    def test_screen(self, make_enemy: MakeEnemy, in_combat: InCombat) -> None:
        """Test enemy, player and prompt are shown."""
        screen = battle_scene.battle_scene(in_combat(make_enemy("slime_mold")))

        assert "Slime Mold (Level 1)" in screen
        assert "Enemy HP: [██████████] 20/20" in screen
        assert "Your HP: [██████████] 50/50" in screen
        assert "ATK: 5 | DEF: 3 | SPD: 5" in screen
        assert screen.endswith("What will you do?")

    def test_status_lines(self, make_enemy: MakeEnemy, in_combat: InCombat) -> None:
        """Test stance, effects, minions and the round log are shown."""
        poison = StatusEffect(kind=StatusEffectKind.POISON, damage=2, turns_remaining=3)
        state = in_combat(
            make_enemy("rat_king", minions=(make_enemy("sewer_rat"),)),
            player_defending=True,
            player_effects=(poison,),
        )
        log = [CombatAction(actor=Actor.PLAYER, action=ActionKind.DEFEND, message="Braced.")]

        screen = battle_scene.battle_scene(state, log)

        assert "DEFENDING (50% damage reduction)" in screen
        assert "POISON: 2/turn, 3 turns left" in screen
        assert "  Sewer Rat: [██████████] 10/10" in screen
        assert "-> Braced." in screen


class TestEndScreens:
    """Tests for victory, defeat and escape screens."""

    def test_victory(self) -> None:
        """Test rewards and level-up lines."""
        screen = battle_scene.victory_screen(
            "Rat King", 250, 30, ["rat_crown"], leveled_up=True, new_level=4
        )

        assert "You defeated the Rat King!" in screen
        assert "XP Gained: +250" in screen
        assert "Crumbs: +30" in screen
        assert "  -> rat_crown" in screen
        assert "LEVEL UP! You are now Level 4!" in screen

    def test_victory_plain(self) -> None:
        """Test a victory without loot or level-up."""
        screen = battle_scene.victory_screen("Slime Mold", 25, 3)

        assert "Items Found:" not in screen
        assert "LEVEL UP" not in screen

    def test_defeat_and_flee(self) -> None:
        """Test the fixed screens."""
        assert "DEFEAT" in battle_scene.defeat_screen()
        flee = battle_scene.flee_screen("Crow")
        assert "FLED FROM BATTLE" in flee
        assert "You successfully escaped from the Crow." in flee


class TestEnemyIntro:
    """Tests for encounter banners."""

    def test_regular(self, make_enemy: MakeEnemy, in_combat: InCombat) -> None:
        """Test a regular encounter."""
        intro = battle_scene.enemy_intro(in_combat(make_enemy("crow")))

        assert "ENEMY ENCOUNTER!" in intro
        assert "A wild Crow appears!" in intro

    def test_mini_boss(self, make_enemy: MakeEnemy, in_combat: InCombat) -> None:
        """Test low-level bosses are mini-bosses."""
        intro = battle_scene.enemy_intro(in_combat(make_enemy("garden_gnome")))

        assert "MINI-BOSS ENCOUNTER" in intro
        assert "But its hammer does." in intro

    def test_boss(self, make_enemy: MakeEnemy, in_combat: InCombat) -> None:
        """Test full bosses announce the battle."""
        intro = battle_scene.enemy_intro(in_combat(make_enemy("hungry_dog")))

        assert "!!!  BOSS ENCOUNTER  !!!" in intro
        assert "The boss battle begins!" in intro

    def test_secret_boss(self, make_enemy: MakeEnemy, in_combat: InCombat) -> None:
        """Test secret bosses skip the battle line."""
        intro = battle_scene.enemy_intro(in_combat(make_enemy("rat_king", is_secret_boss=True)))

        assert "SECRET BOSS ENCOUNTER" in intro
        assert "The boss battle begins!" not in intro

    def test_no_enemy(self, initial_state: RPGState) -> None:
        """Test the fallback line."""
        assert battle_scene.enemy_intro(initial_state) == "An enemy appears!"


class TestStatusDisplay:
    """Tests for the character sheet."""

    def test_no_ingredients(self, initial_state: RPGState) -> None:
        """Test an empty ingredient list."""
        sheet = battle_scene.status_display(initial_state)

        assert "CHARACTER STATUS" in sheet
        assert "  (none)" in sheet
        assert "Abilities:" not in sheet
        assert "Location: garbage_can_start" in sheet

    def test_with_ingredients(self, state_manager: RPGStateManager) -> None:
        """Test ingredients and abilities are listed."""
        state = state_manager.create_initial_state(["bacon", "pickle"])

        sheet = battle_scene.status_display(state.model_copy(update={"currency": 12}))

        assert "  -> bacon" in sheet
        assert "  -> Poison Strike" in sheet
        assert "Crumbs: 12" in sheet
        assert "  ATK: 10" in sheet
