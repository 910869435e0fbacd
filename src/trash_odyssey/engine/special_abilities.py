"""Enemy special abilities and boss phase transitions.

Each enemy carries at most one special, a variant of
:data:`~trash_odyssey.models.enemies.EnemySpecial`. Once per enemy turn the
combat loop hands the special and the enemy's base damage to
:meth:`SpecialAbilities.process_special_ability`, which returns the
modified damage, narration, and any side effects the loop must apply
(stolen item, summoned minion, status effect on the player, extra attack).

Handlers are registered per :class:`SpecialType`; an unknown type is
logged and ignored so data written for a newer engine still loads.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from math import floor
from typing import Any

from trash_odyssey.core.logging import get_logger
from trash_odyssey.engine.rng import RandomSource
from trash_odyssey.models.combat import ActionKind, Actor, CombatAction
from trash_odyssey.models.enemies import (
    BiteSpecial,
    ConstrictSpecial,
    CrushingBlowSpecial,
    Enemy,
    EvasionSpecial,
    NutThrowSpecial,
    PoisonSpecial,
    PounceSpecial,
    RabidBiteSpecial,
    SpecialType,
    SplashDamageSpecial,
    SummonMinionsSpecial,
    UnknownSpecial,
    WrenchThrowSpecial,
)
from trash_odyssey.models.state import RPGState, StatusEffect, StatusEffectKind


logger = get_logger(__name__)


@dataclass(frozen=True)
class SpecialAbilityResult:
    """What a special ability did this turn.

    Attributes:
        damage: Damage the enemy's attack deals after the special.
        enemy: Enemy with updated special-related counters.
        actions: Narration entries to append to the combat log.
        stolen_item_index: Inventory index the enemy steals, if any.
        summon_id: Enemy id of a minion to spawn, if any.
        player_effect: Damage-over-time effect to put on the player, if any.
        extra_attack: The enemy attacks a second time this turn.
    """

    damage: int
    enemy: Enemy
    actions: tuple[CombatAction, ...] = ()
    stolen_item_index: int | None = None
    summon_id: str | None = None
    player_effect: StatusEffect | None = None
    extra_attack: bool = False


@dataclass(frozen=True)
class PhaseUpdate:
    enemy: Enemy
    phase_changed: bool = False
    message: str | None = None
    actions: tuple[CombatAction, ...] = ()


def _special_action(message: str, damage: int | None = None) -> CombatAction:
    return CombatAction(
        actor=Actor.ENEMY,
        action=ActionKind.SPECIAL,
        damage=damage,
        message=message,
    )


_MULTIPLIER_MESSAGES: dict[SpecialType, str] = {
    SpecialType.WRENCH_THROW: (
        "{name} throws itself at you like a metal projectile! {damage} damage!"
    ),
    SpecialType.RABID_BITE: "{name} bites with rabid fury! {damage} damage!",
    SpecialType.CRUSHING_BLOW: "{name} delivers a CRUSHING BLOW! {damage} damage!",
    SpecialType.BITE: "{name} BITES with terrifying force! {damage} damage!",
}

Handler = Callable[[RPGState, Enemy, Any, int], SpecialAbilityResult]


class SpecialAbilities:
    """Resolves enemy specials using an injected random source.

    Example:
        >>> specials = SpecialAbilities(RandomSource(seed=7))
        >>> result = specials.process_special_ability(state, enemy, base_damage=4)
        >>> result.damage
        8
    """

    def __init__(self, rng: RandomSource) -> None:
        self._rng = rng
        self._handlers: dict[SpecialType, Handler] = {
            SpecialType.POISON: self._poison,
            SpecialType.SPLASH_DAMAGE: self._splash_damage,
            SpecialType.SUMMON_MINIONS: self._summon_minions,
            SpecialType.POUNCE: self._pounce,
            SpecialType.CONSTRICT: self._constrict,
            SpecialType.NUT_THROW: self._nut_throw,
            SpecialType.WRENCH_THROW: self._multiplied,
            SpecialType.RABID_BITE: self._multiplied,
            SpecialType.CRUSHING_BLOW: self._multiplied,
            SpecialType.BITE: self._multiplied,
            SpecialType.FRENZY: self._frenzy,
            SpecialType.EVASION: self._passive,
            SpecialType.STEAL_ITEM: self._steal_item,
        }

    # =========================================================================
    # Dispatch
    # =========================================================================

    def process_special_ability(
        self,
        state: RPGState,
        enemy: Enemy,
        base_damage: int,
    ) -> SpecialAbilityResult:
        """Apply ``enemy``'s special to this turn's attack.

        Args:
            state: Current state (read for the player's defense and inventory).
            enemy: The acting enemy.
            base_damage: Damage from the normal attack formula.

        Returns:
            The special's effect. With no special, or when the chance roll
            fails, the base damage passes through unchanged.
        """
        special = enemy.special
        if special is None:
            return SpecialAbilityResult(damage=base_damage, enemy=enemy)

        if isinstance(special, UnknownSpecial):
            logger.warning("Unknown special ability ignored", enemy_id=enemy.id, type=special.type)
            return SpecialAbilityResult(damage=base_damage, enemy=enemy)

        releasing_pounce = isinstance(special, PounceSpecial) and enemy.charging
        if not releasing_pounce and not self._rng.chance(special.chance):
            return SpecialAbilityResult(damage=base_damage, enemy=enemy)

        handler = self._handlers[SpecialType(special.type)]
        result = handler(state, enemy, special, base_damage)
        logger.debug(
            "Special ability resolved",
            enemy_id=enemy.id,
            special=special.type,
            base_damage=base_damage,
            damage=result.damage,
        )
        return result

    # =========================================================================
    # Handlers
    # =========================================================================

    def _poison(
        self,
        state: RPGState,
        enemy: Enemy,
        special: PoisonSpecial,
        damage: int,
    ) -> SpecialAbilityResult:
        effect = StatusEffect(
            kind=StatusEffectKind.POISON,
            damage=special.damage,
            turns_remaining=special.duration,
            source=enemy.id,
        )
        message = (
            f"{enemy.name} inflicts POISON! "
            f"You'll take {special.damage} damage for {special.duration} turns!"
        )
        return SpecialAbilityResult(
            damage=damage,
            enemy=enemy,
            actions=(_special_action(message),),
            player_effect=effect,
        )

    def _constrict(
        self,
        state: RPGState,
        enemy: Enemy,
        special: ConstrictSpecial,
        damage: int,
    ) -> SpecialAbilityResult:
        effect = StatusEffect(
            kind=StatusEffectKind.CONSTRICT,
            damage=special.damage,
            turns_remaining=special.duration,
            source=enemy.id,
        )
        message = (
            f"{enemy.name} CONSTRICTS you! "
            f"{special.damage} damage per turn for {special.duration} turns!"
        )
        return SpecialAbilityResult(
            damage=damage,
            enemy=enemy.model_copy(update={"constrict_turns": special.duration}),
            actions=(_special_action(message),),
            player_effect=effect,
        )

    def _splash_damage(
        self,
        state: RPGState,
        enemy: Enemy,
        special: SplashDamageSpecial,
        damage: int,
    ) -> SpecialAbilityResult:
        message = f"{enemy.name} uses SPLASH DAMAGE! {special.damage} unblockable damage!"
        return SpecialAbilityResult(
            damage=special.damage,
            enemy=enemy,
            actions=(_special_action(message, special.damage),),
        )

    def _summon_minions(
        self,
        state: RPGState,
        enemy: Enemy,
        special: SummonMinionsSpecial,
        damage: int,
    ) -> SpecialAbilityResult:
        if enemy.turn_counter < special.summon_interval:
            return SpecialAbilityResult(damage=damage, enemy=enemy)
        if len(enemy.living_minions) >= special.summon_count:
            return SpecialAbilityResult(damage=damage, enemy=enemy)

        minion_name = special.summon_id.replace("_", " ")
        action = CombatAction(
            actor=Actor.ENEMY,
            action=ActionKind.SUMMON,
            damage=0,
            message=f"{enemy.name} summons {minion_name}s to aid in battle!",
        )
        return SpecialAbilityResult(
            damage=0,
            enemy=enemy.model_copy(update={"turn_counter": 0}),
            actions=(action,),
            summon_id=special.summon_id,
        )

    def _pounce(
        self,
        state: RPGState,
        enemy: Enemy,
        special: PounceSpecial,
        damage: int,
    ) -> SpecialAbilityResult:
        if enemy.charging:
            pounce_damage = floor(damage * special.damage_multiplier)
            return SpecialAbilityResult(
                damage=pounce_damage,
                enemy=enemy.model_copy(update={"charging": False}),
                actions=(
                    _special_action(
                        f"{enemy.name} POUNCES! {pounce_damage} damage!", pounce_damage
                    ),
                ),
            )
        return SpecialAbilityResult(
            damage=0,
            enemy=enemy.model_copy(update={"charging": True}),
            actions=(_special_action(f"{enemy.name} crouches low, preparing to pounce..."),),
        )

    def _nut_throw(
        self,
        state: RPGState,
        enemy: Enemy,
        special: NutThrowSpecial,
        damage: int,
    ) -> SpecialAbilityResult:
        ignored = floor(state.effective_stats.defense * special.defense_ignore)
        total = damage + ignored
        message = f"{enemy.name} throws an acorn! Ignores {ignored} DEF!"
        return SpecialAbilityResult(
            damage=total,
            enemy=enemy,
            actions=(_special_action(message, total),),
        )

    def _multiplied(
        self,
        state: RPGState,
        enemy: Enemy,
        special: WrenchThrowSpecial | RabidBiteSpecial | CrushingBlowSpecial | BiteSpecial,
        damage: int,
    ) -> SpecialAbilityResult:
        total = floor(damage * special.damage_multiplier)
        template = _MULTIPLIER_MESSAGES[SpecialType(special.type)]
        message = template.format(name=enemy.name, damage=total)
        return SpecialAbilityResult(
            damage=total,
            enemy=enemy,
            actions=(_special_action(message, total),),
        )

    def _frenzy(
        self,
        state: RPGState,
        enemy: Enemy,
        special: Any,
        damage: int,
    ) -> SpecialAbilityResult:
        return SpecialAbilityResult(
            damage=damage,
            enemy=enemy,
            actions=(_special_action(f"{enemy.name} attacks in a FRENZY!"),),
            extra_attack=True,
        )

    def _passive(
        self,
        state: RPGState,
        enemy: Enemy,
        special: Any,
        damage: int,
    ) -> SpecialAbilityResult:
        return SpecialAbilityResult(damage=damage, enemy=enemy)

    def _steal_item(
        self,
        state: RPGState,
        enemy: Enemy,
        special: Any,
        damage: int,
    ) -> SpecialAbilityResult:
        if not state.inventory:
            return SpecialAbilityResult(damage=damage, enemy=enemy)
        index = self._rng.index(len(state.inventory))
        stolen = state.inventory[index]
        return SpecialAbilityResult(
            damage=damage,
            enemy=enemy,
            actions=(_special_action(f"{enemy.name} steals {stolen.name}!"),),
            stolen_item_index=index,
        )

    # =========================================================================
    # Evasion & Phases
    # =========================================================================

    def check_evasion(self, enemy: Enemy) -> bool:
        """Roll whether ``enemy`` dodges the player's attack."""
        special = enemy.special
        if not isinstance(special, EvasionSpecial):
            return False
        return self._rng.chance(special.miss_chance)

    @staticmethod
    def update_boss_phase(enemy: Enemy) -> PhaseUpdate:
        """Advance a boss to the most severe phase its HP qualifies for.

        Phases only ever advance; healing above a threshold does not
        revert one.
        """
        if not enemy.phases:
            return PhaseUpdate(enemy=enemy)

        fraction = enemy.hp_fraction
        for number in range(len(enemy.phases), enemy.current_phase, -1):
            phase = enemy.phases[number - 1]
            if fraction > phase.health_threshold:
                continue

            update: dict[str, object] = {
                "current_phase": number,
                "attack": enemy.attack + phase.attack_bonus,
                "defense": max(0, enemy.defense + phase.defense_bonus),
            }
            if phase.special is not None:
                update["special"] = phase.special
            message = phase.phase_message or f"{enemy.name} enters a new phase!"
            logger.info("Boss phase changed", enemy_id=enemy.id, phase=number)
            action = CombatAction(actor=Actor.ENEMY, action=ActionKind.PHASE, message=message)
            return PhaseUpdate(
                enemy=enemy.model_copy(update=update),
                phase_changed=True,
                message=message,
                actions=(action,),
            )

        return PhaseUpdate(enemy=enemy)


__all__ = [
    "SpecialAbilityResult",
    "PhaseUpdate",
    "SpecialAbilities",
]
