"""Plain-text rendering of combat and character state.

Every function here is pure: it reads a state (or a few values) and
returns a string. Nothing is mutated and nothing is printed.
"""

from __future__ import annotations

from collections.abc import Sequence
from math import floor

from trash_odyssey.core.constants import (
    ABILITY_NAMES,
    LEVEL_UP_ATK_GAIN,
    LEVEL_UP_DEF_GAIN,
    LEVEL_UP_HP_GAIN,
    LEVEL_UP_SPD_GAIN,
)
from trash_odyssey.models.combat import Actor, CombatAction
from trash_odyssey.models.state import RPGState


HEAVY_RULE = "=" * 43
LIGHT_RULE = "-" * 43
MINI_BOSS_MAX_LEVEL = 4
"""Bosses at or below this level are introduced as mini-bosses."""


def _banner(title: str, body: Sequence[str]) -> str:
    return "\n".join([HEAVY_RULE, title, HEAVY_RULE, "", *body, "", HEAVY_RULE])


def hp_bar(current: int, maximum: int, length: int = 10) -> str:
    """Render ``[████░░░░░░]`` filled in proportion to current/maximum.

    A non-positive maximum renders an empty bar.
    """
    fraction = 0.0 if maximum <= 0 else max(0.0, min(1.0, current / maximum))
    filled = floor(fraction * length)
    return "[" + "█" * filled + "░" * (length - filled) + "]"


def combat_log(actions: Sequence[CombatAction]) -> str:
    """One ``You: ...`` or ``Enemy: ...`` line per action."""
    lines = []
    for action in actions:
        prefix = "You" if action.actor == Actor.PLAYER else "Enemy"
        lines.append(f"{prefix}: {action.message}")
    return "\n".join(lines)


def battle_scene(state: RPGState, actions: Sequence[CombatAction] = ()) -> str:
    """The main battle screen: enemy, minions, player, and the latest log."""
    enemy = state.current_enemy
    if enemy is None:
        return "No enemy in combat."

    body = [
        f"{enemy.name} (Level {enemy.level})",
        enemy.description,
        "",
        f"Enemy HP: {hp_bar(enemy.hp, enemy.max_hp)} {enemy.hp}/{enemy.max_hp}",
    ]
    if enemy.minions:
        body += ["", "Minions:"]
        body += [
            f"  {minion.name}: {hp_bar(minion.hp, minion.max_hp)} {minion.hp}/{minion.max_hp}"
            for minion in enemy.minions
        ]

    stats = state.effective_stats
    body += [
        "",
        LIGHT_RULE,
        "",
        f"Your HP: {hp_bar(state.hp, state.max_hp)} {state.hp}/{state.max_hp}",
        f"ATK: {stats.attack} | DEF: {stats.defense} | SPD: {stats.speed}",
    ]
    if state.player_defending:
        body.append("DEFENDING (50% damage reduction)")
    for effect in state.player_effects:
        body.append(
            f"{effect.kind.value.upper()}: {effect.damage}/turn, "
            f"{effect.turns_remaining} turns left"
        )
    if actions:
        body.append("")
        body += [f"-> {action.message}" for action in actions]

    return _banner("BATTLE", body) + "\n\nWhat will you do?"


def victory_screen(
    enemy_name: str,
    xp_gained: int,
    currency_gained: int,
    items_looted: Sequence[str] = (),
    leveled_up: bool = False,
    new_level: int | None = None,
) -> str:
    body = [
        f"You defeated the {enemy_name}!",
        "",
        f"XP Gained: +{xp_gained}",
        f"Crumbs: +{currency_gained}",
    ]
    if items_looted:
        body.append("Items Found:")
        body += [f"  -> {item}" for item in items_looted]
    if leveled_up:
        body += [
            "",
            f"LEVEL UP! You are now Level {new_level}!",
            f"   HP+{LEVEL_UP_HP_GAIN}, ATK+{LEVEL_UP_ATK_GAIN}, "
            f"DEF+{LEVEL_UP_DEF_GAIN}, SPD+{LEVEL_UP_SPD_GAIN}",
        ]
    return _banner("VICTORY!", body)


def defeat_screen() -> str:
    return _banner(
        "DEFEAT",
        [
            "You have been defeated...",
            "",
            "The darkness takes you.",
            "",
            "But you're not done yet.",
        ],
    )


def flee_screen(enemy_name: str) -> str:
    return _banner(
        "FLED FROM BATTLE",
        [
            f"You successfully escaped from the {enemy_name}.",
            "",
            "Sometimes survival is more important than victory.",
        ],
    )


def enemy_intro(state: RPGState) -> str:
    """Encounter banner; bosses get their scripted intro lines."""
    enemy = state.current_enemy
    if enemy is None:
        return "An enemy appears!"

    if enemy.is_boss and enemy.boss_intro:
        if enemy.is_secret_boss:
            title = "!!!  SECRET BOSS ENCOUNTER  !!!"
        elif enemy.level <= MINI_BOSS_MAX_LEVEL:
            title = "!!!  MINI-BOSS ENCOUNTER  !!!"
        else:
            title = "!!!  BOSS ENCOUNTER  !!!"
        body = [
            *enemy.boss_intro,
            "",
            enemy.description,
            "",
            f"Level {enemy.level} | HP: {enemy.max_hp}",
            f"ATK: {enemy.attack} | DEF: {enemy.defense} | SPD: {enemy.speed}",
        ]
        if not enemy.is_secret_boss:
            body += ["", "The boss battle begins!"]
        return _banner(title, body)

    return _banner(
        "ENEMY ENCOUNTER!",
        [
            f"A wild {enemy.name} appears!",
            "",
            enemy.description,
            "",
            f"Level {enemy.level}",
            f"HP: {enemy.max_hp} | ATK: {enemy.attack} | DEF: {enemy.defense}",
            "",
            "Prepare for battle!",
        ],
    )


def status_display(state: RPGState) -> str:
    """Out-of-combat character sheet."""
    powers = [f"  -> {ingredient}" for ingredient in state.ingredient_bonuses] or ["  (none)"]
    abilities = [f"  -> {ABILITY_NAMES.get(ability, ability)}" for ability in state.abilities]
    lines = [
        LIGHT_RULE,
        "CHARACTER STATUS",
        LIGHT_RULE,
        "",
        f"Level {state.level}",
        f"HP: {hp_bar(state.hp, state.max_hp, 15)} {state.hp}/{state.max_hp}",
        f"XP: {hp_bar(state.xp, state.max_xp, 15)} {state.xp}/{state.max_xp}",
        "",
        "Stats:",
        f"  ATK: {state.stats.attack}",
        f"  DEF: {state.stats.defense}",
        f"  SPD: {state.stats.speed}",
        "",
        f"Crumbs: {state.currency}",
        "",
        "Ingredient Powers Active:",
        *powers,
    ]
    if abilities:
        lines += ["", "Abilities:", *abilities]
    lines += ["", f"Location: {state.current_location}", LIGHT_RULE]
    return "\n".join(lines)


__all__ = [
    "hp_bar",
    "combat_log",
    "battle_scene",
    "victory_screen",
    "defeat_screen",
    "flee_screen",
    "enemy_intro",
    "status_display",
]
