"""Turn-based combat resolution.

This module implements the combat round state machine:

    exploration -> combat -> {victory | defeat | fled} -> exploration

:meth:`CombatProcessor.process_turn` runs one full round (player action,
enemy turn, counter-attack, defeat check) and returns the new state, the
round's combat log, and an outcome. :meth:`CombatProcessor.end_combat`
pays out rewards and returns the player to exploration.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from math import floor

from trash_odyssey.core.constants import (
    ABILITY_NAMES,
    COUNTER_MULTIPLIER,
    DAMAGE_VARIANCE,
    DEFENSE_MULTIPLIER,
    DEFENSIVE_AI_DEFEND_CHANCE,
    FLEE_CHANCE,
    HEAL,
    HEAL_HP_RESTORED,
    MIN_DAMAGE,
    ONION_TEARS,
    ONION_TEARS_AOE_DAMAGE,
    ONION_TEARS_HP_COST,
    POISON_STRIKE,
    POISON_STRIKE_DAMAGE,
    POISON_STRIKE_DURATION,
    RANDOM_AI_DEFEND_CHANCE,
    REVIVE_HP_RATIO,
    REVIVE_ITEM_ID,
)
from trash_odyssey.core.exceptions import CombatError
from trash_odyssey.core.logging import get_logger
from trash_odyssey.engine.enemy_database import EnemyDatabase
from trash_odyssey.engine.inventory import InventoryManager
from trash_odyssey.engine.item_database import ItemDatabase
from trash_odyssey.engine.rng import RandomSource
from trash_odyssey.engine.special_abilities import SpecialAbilities
from trash_odyssey.engine.state_manager import RPGStateManager
from trash_odyssey.models.combat import (
    ActionKind,
    Actor,
    CombatAction,
    CombatOutcome,
    PlayerAction,
)
from trash_odyssey.models.enemies import AIPattern, Enemy, EnemyData
from trash_odyssey.models.items import StatBlock
from trash_odyssey.models.state import RPGState, StatusEffect, StatusEffectKind


logger = get_logger(__name__)


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class CombatResult:
    """Result of one combat round.

    Attributes:
        new_state: State after the round.
        actions: Combat log for the round, in order.
        outcome: Whether combat continues or how it ended.
    """

    new_state: RPGState
    actions: tuple[CombatAction, ...]
    outcome: CombatOutcome = CombatOutcome.CONTINUE


@dataclass(frozen=True)
class CombatEndResult:
    """Rewards paid out when a combat ends.

    Attributes:
        new_state: State back in exploration.
        xp_gained: Experience awarded.
        currency_gained: Crumbs awarded.
        items_looted: Item ids that made it into the inventory.
        leveled_up: At least one level was gained.
        new_level: Level after rewards.
    """

    new_state: RPGState
    xp_gained: int = 0
    currency_gained: int = 0
    items_looted: tuple[str, ...] = ()
    leveled_up: bool = False
    new_level: int = 1


@dataclass
class _Step:
    """Working state threaded through the phases of a round."""

    state: RPGState
    actions: list[CombatAction] = field(default_factory=list)
    outcome: CombatOutcome | None = None
    end_round: bool = False

    @property
    def enemy(self) -> Enemy:
        enemy = self.state.current_enemy
        if enemy is None:
            raise CombatError("Combat round has no current enemy")
        return enemy

    def log(self, actor: Actor, action: ActionKind, message: str, **kwargs: object) -> None:
        self.actions.append(CombatAction(actor=actor, action=action, message=message, **kwargs))

    def update(self, **changes: object) -> None:
        self.state = self.state.model_copy(update=changes)

    def set_enemy(self, enemy: Enemy) -> None:
        self.update(current_enemy=enemy)


# =============================================================================
# Combat Processor
# =============================================================================


class CombatProcessor:
    """Resolves combat rounds against the current enemy.

    Example:
        >>> combat = CombatProcessor(items, enemies, RandomSource(seed=1))
        >>> state = combat.start_combat(state, "slime_mold")
        >>> result = combat.process_turn(state, "attack")
        >>> result.outcome
        <CombatOutcome.CONTINUE: 'continue'>
    """

    def __init__(
        self,
        items: ItemDatabase,
        enemies: EnemyDatabase,
        rng: RandomSource,
        *,
        inventory: InventoryManager | None = None,
        specials: SpecialAbilities | None = None,
        state_manager: RPGStateManager | None = None,
        flee_chance: float = FLEE_CHANCE,
    ) -> None:
        self._items = items
        self._enemies = enemies
        self._rng = rng
        self._inventory = inventory or InventoryManager(items)
        self._specials = specials or SpecialAbilities(rng)
        self._state_manager = state_manager or RPGStateManager(items)
        self._flee_chance = flee_chance
        self._player_actions: dict[PlayerAction, Callable[[_Step, str | None], None]] = {
            PlayerAction.ATTACK: self._player_attack,
            PlayerAction.DEFEND: self._player_defend,
            PlayerAction.ITEM: self._player_item,
            PlayerAction.ABILITY: self._player_ability,
            PlayerAction.FLEE: self._player_flee,
        }

    # =========================================================================
    # Damage
    # =========================================================================

    def calculate_damage(self, attack: int, defense: int, defending: bool = False) -> int:
        """Roll one hit.

        ``floor((attack - defense + variance) * multiplier)`` where variance
        is a uniform integer in ``[0, DAMAGE_VARIANCE - 1]`` and the
        multiplier halves the hit against a defending target. Never less
        than ``MIN_DAMAGE``.
        """
        variance = floor(self._rng.random() * DAMAGE_VARIANCE)
        multiplier = DEFENSE_MULTIPLIER if defending else 1.0
        damage = floor((attack - defense + variance) * multiplier)
        return max(MIN_DAMAGE, damage)

    # =========================================================================
    # Start / End
    # =========================================================================

    def start_combat(self, state: RPGState, enemy: str | EnemyData) -> RPGState:
        """Enter combat against a fresh instance of ``enemy``.

        Raises:
            DataIntegrityError: If ``enemy`` is an unknown id.
        """
        instance = self._enemies.create_enemy(enemy)
        logger.info("Combat started", enemy_id=instance.id, is_boss=instance.is_boss)
        return state.model_copy(
            update={
                "in_combat": True,
                "current_enemy": instance,
                "player_defending": False,
                "player_effects": (),
                "combat_buffs": StatBlock(),
            }
        )

    def end_combat(self, state: RPGState, victory: bool) -> CombatEndResult:
        """Leave combat, paying out rewards on victory.

        Currency is rolled uniformly in the enemy's range, each loot entry
        is an independent roll, and loot that does not fit in the
        inventory is left behind.
        """
        enemy = state.current_enemy
        if not victory or enemy is None:
            new_state = self._state_manager.clear_combat(state)
            logger.info("Combat ended", victory=False)
            return CombatEndResult(new_state=new_state, new_level=new_state.level)

        currency = 0
        if enemy.currency_drop is not None:
            currency = self._rng.randint(
                enemy.currency_drop.min_amount, enemy.currency_drop.max_amount
            )
        dropped = [drop.item_id for drop in enemy.loot_table if self._rng.chance(drop.chance)]

        xp_result = self._state_manager.add_xp(state, enemy.xp_reward)
        working = self._state_manager.add_currency(xp_result.new_state, currency)

        looted: list[str] = []
        for item_id in dropped:
            added = self._inventory.add_item(working, item_id, 1)
            if added.success:
                working = added.new_state
                looted.append(item_id)
            else:
                logger.info("Loot left behind", item_id=item_id, reason=added.message)

        if enemy.is_boss:
            working = self._state_manager.defeat_boss(working, enemy.id)
        working = self._state_manager.clear_combat(working)

        logger.info(
            "Combat ended",
            victory=True,
            enemy_id=enemy.id,
            xp_gained=enemy.xp_reward,
            currency_gained=currency,
            items_looted=looted,
            level=working.level,
        )
        return CombatEndResult(
            new_state=working,
            xp_gained=enemy.xp_reward,
            currency_gained=currency,
            items_looted=tuple(looted),
            leveled_up=xp_result.leveled_up,
            new_level=working.level,
        )

    # =========================================================================
    # Round
    # =========================================================================

    def process_turn(
        self,
        state: RPGState,
        action: PlayerAction | str,
        target_id: str | None = None,
    ) -> CombatResult:
        """Resolve one full combat round.

        Args:
            state: Current state (must be in combat).
            action: The player's action.
            target_id: Item id for ``item``, ability id for ``ability``.

        Returns:
            The new state, the round's log and the outcome. Invalid requests
            return the input state with an explanatory message.
        """
        try:
            player_action = PlayerAction(action)
        except ValueError:
            message = f"Unknown action '{action}'."
            log = CombatAction(
                actor=Actor.PLAYER,
                action=ActionKind.ATTACK,
                success=False,
                message=message,
            )
            return CombatResult(state, (log,))

        if state.current_enemy is None:
            log = CombatAction(
                actor=Actor.PLAYER,
                action=ActionKind(player_action.value),
                message="No enemy to fight!",
            )
            return CombatResult(state, (log,))

        step = _Step(state=state)
        self._player_actions[player_action](step, target_id)

        if step.outcome is None and not step.enemy.is_alive:
            step.outcome = CombatOutcome.VICTORY

        if step.outcome is None:
            if not step.end_round:
                self._enemy_turn(step)
                if step.outcome is None:
                    self._counter_attack(step)
            step.update(player_defending=False)
            if step.outcome is None:
                self._check_defeat(step)

        outcome = step.outcome or CombatOutcome.CONTINUE
        logger.debug(
            "Combat round resolved",
            action=player_action.value,
            outcome=outcome.value,
            player_hp=step.state.hp,
            enemy_hp=step.state.current_enemy.hp if step.state.current_enemy else None,
        )
        return CombatResult(step.state, tuple(step.actions), outcome)

    # =========================================================================
    # Player Actions
    # =========================================================================

    def _apply_boss_phase(self, step: _Step) -> None:
        update = self._specials.update_boss_phase(step.enemy)
        if update.phase_changed:
            step.set_enemy(update.enemy)
            step.actions.extend(update.actions)

    def _player_attack(self, step: _Step, target_id: str | None) -> None:
        enemy = step.enemy
        living = enemy.living_minions
        target = living[0] if living else enemy

        if self._specials.check_evasion(target):
            step.log(
                Actor.PLAYER,
                ActionKind.ATTACK,
                f"The {target.name} dodges your attack!",
                damage=0,
                success=False,
            )
            return

        damage = self.calculate_damage(
            step.state.effective_stats.attack, target.defense, target.defending
        )
        message = f"You attack the {target.name} for {damage} damage!"

        if target is enemy:
            step.set_enemy(enemy.model_copy(update={"hp": max(0, enemy.hp - damage)}))
            step.log(Actor.PLAYER, ActionKind.ATTACK, message, damage=damage, success=True)
            self._apply_boss_phase(step)
            return

        hit = target.model_copy(update={"hp": max(0, target.hp - damage)})
        if not hit.is_alive:
            message += f" The {target.name} is defeated!"
        minions = tuple(hit if minion is target else minion for minion in living)
        minions = tuple(minion for minion in minions if minion.is_alive)
        step.set_enemy(enemy.model_copy(update={"minions": minions}))
        step.log(Actor.PLAYER, ActionKind.ATTACK, message, damage=damage, success=True)

    def _player_defend(self, step: _Step, target_id: str | None) -> None:
        step.update(player_defending=True)
        step.log(
            Actor.PLAYER,
            ActionKind.DEFEND,
            "You brace yourself. Incoming damage will be reduced by 50%.",
            success=True,
        )

    def _player_item(self, step: _Step, item_id: str | None) -> None:
        if not item_id:
            step.log(Actor.PLAYER, ActionKind.ITEM, "No item specified to use!", success=False)
            return
        used = self._inventory.use_consumable(step.state, item_id)
        step.state = used.new_state
        step.log(
            Actor.PLAYER,
            ActionKind.ITEM,
            used.message,
            success=used.success,
            heal_amount=used.heal_amount if used.heal_amount else None,
        )

    def _player_ability(self, step: _Step, ability_id: str | None) -> None:
        if not ability_id:
            step.log(Actor.PLAYER, ActionKind.ABILITY, "No ability specified!", success=False)
            return
        name = ABILITY_NAMES.get(ability_id, ability_id)
        if ability_id not in step.state.abilities:
            step.log(Actor.PLAYER, ActionKind.ABILITY, f"You don't know {name}!", success=False)
            return

        enemy = step.enemy
        state = step.state

        if ability_id == POISON_STRIKE:
            step.set_enemy(
                enemy.model_copy(
                    update={
                        "poison_turns": POISON_STRIKE_DURATION,
                        "poison_damage": POISON_STRIKE_DAMAGE,
                    }
                )
            )
            step.log(
                Actor.PLAYER,
                ActionKind.ABILITY,
                f"You use {name}! The {enemy.name} is poisoned for {POISON_STRIKE_DURATION} turns!",
                success=True,
            )

        elif ability_id == ONION_TEARS:
            if state.hp <= ONION_TEARS_HP_COST:
                step.log(
                    Actor.PLAYER,
                    ActionKind.ABILITY,
                    f"Not enough HP to use {name}! (costs {ONION_TEARS_HP_COST} HP)",
                    success=False,
                )
                return
            minions = tuple(
                minion.model_copy(update={"hp": max(0, minion.hp - ONION_TEARS_AOE_DAMAGE)})
                for minion in enemy.living_minions
            )
            hit = enemy.model_copy(
                update={
                    "hp": max(0, enemy.hp - ONION_TEARS_AOE_DAMAGE),
                    "minions": tuple(minion for minion in minions if minion.is_alive),
                }
            )
            step.update(hp=state.hp - ONION_TEARS_HP_COST, current_enemy=hit)
            step.log(
                Actor.PLAYER,
                ActionKind.ABILITY,
                f"You unleash {name}! Everything takes {ONION_TEARS_AOE_DAMAGE} damage! "
                f"(-{ONION_TEARS_HP_COST} HP)",
                damage=ONION_TEARS_AOE_DAMAGE,
                success=True,
            )
            self._apply_boss_phase(step)

        elif ability_id == HEAL:
            new_hp = min(state.max_hp, state.hp + HEAL_HP_RESTORED)
            healed = new_hp - state.hp
            step.update(hp=new_hp)
            step.log(
                Actor.PLAYER,
                ActionKind.ABILITY,
                f"You use {name}! Healed {healed} HP!",
                heal_amount=healed,
                success=True,
            )

        else:
            logger.warning("Unknown player ability ignored", ability_id=ability_id)
            step.log(Actor.PLAYER, ActionKind.ABILITY, "Nothing happens.", success=False)

    def _player_flee(self, step: _Step, target_id: str | None) -> None:
        enemy = step.enemy
        if enemy.is_boss:
            step.log(
                Actor.PLAYER,
                ActionKind.FLEE,
                "You cannot flee from a boss battle!",
                success=False,
            )
            return

        if self._rng.chance(self._flee_chance):
            step.state = self._state_manager.clear_combat(step.state)
            step.log(
                Actor.PLAYER,
                ActionKind.FLEE,
                "You successfully fled from battle!",
                success=True,
            )
            step.outcome = CombatOutcome.FLED
            logger.info("Player fled", enemy_id=enemy.id)
            return

        step.log(Actor.PLAYER, ActionKind.FLEE, "You failed to escape!", success=False)
        damage = self.calculate_damage(enemy.attack, step.state.effective_stats.defense)
        step.update(hp=max(0, step.state.hp - damage), player_defending=False)
        step.log(
            Actor.ENEMY,
            ActionKind.ATTACK,
            f"The {enemy.name} attacks while you flee, dealing {damage} damage!",
            damage=damage,
        )
        step.end_round = True

    # =========================================================================
    # Enemy Turn
    # =========================================================================

    def _tick_enemy_poison(self, step: _Step) -> None:
        enemy = step.enemy
        if enemy.poison_turns <= 0:
            return
        damage = enemy.poison_damage
        turns = enemy.poison_turns - 1
        step.set_enemy(
            enemy.model_copy(
                update={
                    "hp": max(0, enemy.hp - damage),
                    "poison_turns": turns,
                    "poison_damage": damage if turns else 0,
                }
            )
        )
        step.log(
            Actor.ENEMY,
            ActionKind.STATUS,
            f"The {enemy.name} takes {damage} poison damage!",
            damage=damage,
        )
        self._apply_boss_phase(step)
        if not step.enemy.is_alive:
            step.outcome = CombatOutcome.VICTORY

    def _tick_player_effects(self, step: _Step) -> int:
        effects = step.state.player_effects
        if not effects:
            return 0
        total = 0
        remaining: list[StatusEffect] = []
        constricted = False
        for effect in effects:
            total += effect.damage
            if effect.kind == StatusEffectKind.CONSTRICT:
                constricted = True
                message = f"You are squeezed for {effect.damage} damage!"
            else:
                message = f"Poison deals {effect.damage} damage to you!"
            step.log(Actor.ENEMY, ActionKind.STATUS, message, damage=effect.damage)
            if effect.turns_remaining > 1:
                remaining.append(
                    effect.model_copy(update={"turns_remaining": effect.turns_remaining - 1})
                )
        step.update(player_effects=tuple(remaining))
        if constricted:
            enemy = step.enemy
            step.set_enemy(
                enemy.model_copy(update={"constrict_turns": max(0, enemy.constrict_turns - 1)})
            )
        return total

    def _enemy_defends(self, enemy: Enemy) -> bool:
        if enemy.ai_pattern == AIPattern.DEFENSIVE:
            return self._rng.chance(DEFENSIVE_AI_DEFEND_CHANCE)
        if enemy.ai_pattern == AIPattern.RANDOM:
            return self._rng.chance(RANDOM_AI_DEFEND_CHANCE)
        return False

    def _enemy_turn(self, step: _Step) -> None:
        enemy = step.enemy
        step.set_enemy(enemy.model_copy(update={"turn_counter": enemy.turn_counter + 1}))

        self._tick_enemy_poison(step)
        if step.outcome is not None:
            return

        total_damage = self._tick_player_effects(step)
        player_defense = step.state.effective_stats.defense
        defending = step.state.player_defending
        enemy = step.enemy

        if self._enemy_defends(enemy):
            step.set_enemy(enemy.model_copy(update={"defending": True}))
            step.log(Actor.ENEMY, ActionKind.DEFEND, f"The {enemy.name} takes a defensive stance.")
            stolen_index = None
            summon_id = None
        else:
            enemy = enemy.model_copy(update={"defending": False})
            step.set_enemy(enemy)
            base_damage = self.calculate_damage(enemy.attack, player_defense, defending)
            special = self._specials.process_special_ability(step.state, enemy, base_damage)
            step.set_enemy(special.enemy)
            step.actions.extend(special.actions)
            if special.damage > 0 and not any(a.damage is not None for a in special.actions):
                step.log(
                    Actor.ENEMY,
                    ActionKind.ATTACK,
                    f"The {enemy.name} attacks you for {special.damage} damage!",
                    damage=special.damage,
                )
            total_damage += special.damage

            if special.extra_attack:
                extra = self.calculate_damage(special.enemy.attack, player_defense, defending)
                total_damage += extra
                step.log(
                    Actor.ENEMY,
                    ActionKind.ATTACK,
                    f"The {enemy.name} attacks again for {extra} damage!",
                    damage=extra,
                )

            if special.player_effect is not None:
                kept = tuple(
                    effect
                    for effect in step.state.player_effects
                    if effect.kind != special.player_effect.kind
                )
                step.update(player_effects=(*kept, special.player_effect))

            stolen_index = special.stolen_item_index
            summon_id = special.summon_id

        for minion in step.enemy.living_minions:
            damage = self.calculate_damage(minion.attack, player_defense, defending)
            total_damage += damage
            step.log(
                Actor.ENEMY,
                ActionKind.ATTACK,
                f"The {minion.name} attacks you for {damage} damage!",
                damage=damage,
            )

        if stolen_index is not None and stolen_index < len(step.state.inventory):
            inventory = step.state.inventory
            step.update(inventory=inventory[:stolen_index] + inventory[stolen_index + 1 :])

        if summon_id is not None:
            minion = self._enemies.create_enemy(summon_id)
            enemy = step.enemy
            step.set_enemy(enemy.model_copy(update={"minions": (*enemy.living_minions, minion)}))

        step.update(hp=max(0, step.state.hp - total_damage))

    def _counter_attack(self, step: _Step) -> None:
        state = step.state
        enemy = step.enemy
        if not state.player_defending or state.hp <= 0 or not enemy.is_alive:
            return
        roll = self.calculate_damage(state.effective_stats.attack, enemy.defense, enemy.defending)
        damage = max(1, floor(roll * COUNTER_MULTIPLIER))
        step.set_enemy(enemy.model_copy(update={"hp": max(0, enemy.hp - damage)}))
        step.log(
            Actor.PLAYER,
            ActionKind.COUNTER,
            f"You counter-attack the {enemy.name} for {damage} damage!",
            damage=damage,
            success=True,
        )
        self._apply_boss_phase(step)
        if not step.enemy.is_alive:
            step.outcome = CombatOutcome.VICTORY

    def _check_defeat(self, step: _Step) -> None:
        state = step.state
        if state.hp > 0:
            return
        if state.item_quantity(REVIVE_ITEM_ID) > 0:
            removed = self._inventory.remove_item(state, REVIVE_ITEM_ID, 1)
            revive_hp = floor(state.max_hp * REVIVE_HP_RATIO)
            step.state = removed.new_state.model_copy(update={"hp": revive_hp})
            step.log(
                Actor.PLAYER,
                ActionKind.REVIVE,
                f"You were defeated! But Moldy Bread activated, reviving you to {revive_hp} HP!",
                heal_amount=revive_hp,
                success=True,
                auto_used=True,
            )
            logger.info("Player revived", hp=revive_hp)
            return
        step.outcome = CombatOutcome.DEFEAT
        logger.info("Player defeated", enemy_id=step.enemy.id)


__all__ = [
    "CombatResult",
    "CombatEndResult",
    "CombatProcessor",
]
