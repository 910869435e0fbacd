"""Pydantic V2 schemas for enemies, their special abilities, and boss phases.

An enemy's ``special`` is a tagged union discriminated by ``type``. Each
variant is its own model so the dispatcher in
:mod:`trash_odyssey.engine.special_abilities` can register one handler per
variant. Types the engine does not know are parsed into
:class:`UnknownSpecial` rather than rejected, so newer data files still
load on older engines.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)


class AIPattern(StrEnum):
    """How an enemy chooses between attacking and defending."""

    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    RANDOM = "random"


class SpecialType(StrEnum):
    """Every special ability variant the engine resolves."""

    POISON = "poison"
    SPLASH_DAMAGE = "splash_damage"
    SUMMON_MINIONS = "summon_minions"
    POUNCE = "pounce"
    CONSTRICT = "constrict"
    NUT_THROW = "nut_throw"
    WRENCH_THROW = "wrench_throw"
    RABID_BITE = "rabid_bite"
    CRUSHING_BLOW = "crushing_blow"
    BITE = "bite"
    FRENZY = "frenzy"
    EVASION = "evasion"
    STEAL_ITEM = "steal_item"


# =============================================================================
# Special Ability Variants
# =============================================================================


class SpecialBase(BaseModel):
    """Fields shared by every special ability.

    Attributes:
        chance: Probability the special triggers on a given turn.
            None means it always triggers.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    chance: float | None = Field(default=None, ge=0.0, le=1.0)


class PoisonSpecial(SpecialBase):
    """Normal hit that also poisons the player for ``duration`` turns."""

    type: Literal["poison"] = "poison"
    damage: int = Field(default=2, ge=0)
    duration: int = Field(default=3, ge=1)


class ConstrictSpecial(SpecialBase):
    """Normal hit that also grapples the player for ``duration`` turns."""

    type: Literal["constrict"] = "constrict"
    damage: int = Field(default=3, ge=0)
    duration: int = Field(default=2, ge=1)


class SplashDamageSpecial(SpecialBase):
    """Fixed damage that ignores defense entirely."""

    type: Literal["splash_damage"] = "splash_damage"
    damage: int = Field(ge=0)


class SummonMinionsSpecial(SpecialBase):
    """Spawns a minion every ``summon_interval`` turns up to ``summon_count``."""

    type: Literal["summon_minions"] = "summon_minions"
    summon_id: str = Field(min_length=1)
    summon_interval: int = Field(default=3, ge=1)
    summon_count: int = Field(default=2, ge=1)


class PounceSpecial(SpecialBase):
    """Charges for a turn, then hits for ``damage_multiplier`` times damage."""

    type: Literal["pounce"] = "pounce"
    damage_multiplier: float = Field(default=2.0, gt=0)


class NutThrowSpecial(SpecialBase):
    """Adds a fraction of the player's defense back onto the hit."""

    type: Literal["nut_throw"] = "nut_throw"
    defense_ignore: float = Field(default=0.5, ge=0.0, le=1.0)


class WrenchThrowSpecial(SpecialBase):
    type: Literal["wrench_throw"] = "wrench_throw"
    damage_multiplier: float = Field(default=1.5, gt=0)


class RabidBiteSpecial(SpecialBase):
    type: Literal["rabid_bite"] = "rabid_bite"
    damage_multiplier: float = Field(default=1.5, gt=0)


class CrushingBlowSpecial(SpecialBase):
    type: Literal["crushing_blow"] = "crushing_blow"
    damage_multiplier: float = Field(default=2.0, gt=0)


class BiteSpecial(SpecialBase):
    type: Literal["bite"] = "bite"
    damage_multiplier: float = Field(default=2.0, gt=0)


class FrenzySpecial(SpecialBase):
    """Attacks twice in one turn (the second roll is made by the combat loop)."""

    type: Literal["frenzy"] = "frenzy"


class EvasionSpecial(SpecialBase):
    """Passive: the player's attacks miss with probability ``miss_chance``."""

    type: Literal["evasion"] = "evasion"
    miss_chance: float = Field(default=0.2, ge=0.0, le=1.0)


class StealItemSpecial(SpecialBase):
    """Steals one random inventory stack."""

    type: Literal["steal_item"] = "steal_item"


class UnknownSpecial(SpecialBase):
    """A special type this engine version does not recognize."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str


_KNOWN_SPECIAL_TYPES = frozenset(SpecialType)


def _special_discriminator(value: Any) -> str:
    if isinstance(value, dict):
        special_type = value.get("type")
    else:
        special_type = getattr(value, "type", None)
    if special_type in _KNOWN_SPECIAL_TYPES:
        return str(special_type)
    return "unknown"


EnemySpecial = Annotated[
    Union[
        Annotated[PoisonSpecial, Tag("poison")],
        Annotated[ConstrictSpecial, Tag("constrict")],
        Annotated[SplashDamageSpecial, Tag("splash_damage")],
        Annotated[SummonMinionsSpecial, Tag("summon_minions")],
        Annotated[PounceSpecial, Tag("pounce")],
        Annotated[NutThrowSpecial, Tag("nut_throw")],
        Annotated[WrenchThrowSpecial, Tag("wrench_throw")],
        Annotated[RabidBiteSpecial, Tag("rabid_bite")],
        Annotated[CrushingBlowSpecial, Tag("crushing_blow")],
        Annotated[BiteSpecial, Tag("bite")],
        Annotated[FrenzySpecial, Tag("frenzy")],
        Annotated[EvasionSpecial, Tag("evasion")],
        Annotated[StealItemSpecial, Tag("steal_item")],
        Annotated[UnknownSpecial, Tag("unknown")],
    ],
    Discriminator(_special_discriminator),
]


# =============================================================================
# Enemy Data
# =============================================================================


class BossPhase(BaseModel):
    """A health-threshold-triggered, permanent change to a boss.

    Attributes:
        health_threshold: Fraction of max HP at or below which the phase starts.
        special: Special ability that replaces the current one.
        phase_message: Narrative line shown when the phase starts.
        attack_bonus: Attack added when the phase starts.
        defense_bonus: Defense added when the phase starts.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    health_threshold: float = Field(ge=0.0, le=1.0)
    special: EnemySpecial | None = None
    phase_message: str | None = None
    attack_bonus: int = 0
    defense_bonus: int = 0


class LootDrop(BaseModel):
    """One independent drop roll in a loot table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    item_id: str = Field(min_length=1)
    chance: float = Field(ge=0.0, le=1.0)


class CurrencyDrop(BaseModel):
    """Inclusive range of Crumbs an enemy drops."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    min_amount: int = Field(default=0, ge=0)
    max_amount: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_range(self) -> CurrencyDrop:
        if self.max_amount < self.min_amount:
            raise ValueError(
                f"max_amount ({self.max_amount}) must be >= min_amount ({self.min_amount})"
            )
        return self


class EnemyData(BaseModel):
    """Static template for an enemy, as stored in the enemy table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    level: int = Field(default=1, ge=1)
    max_hp: int = Field(ge=1)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    speed: int = Field(default=1, ge=0)
    xp_reward: int = Field(default=0, ge=0)
    currency_drop: CurrencyDrop | None = None
    loot_table: tuple[LootDrop, ...] = ()
    ai_pattern: AIPattern = AIPattern.AGGRESSIVE
    special: EnemySpecial | None = None
    phases: tuple[BossPhase, ...] = ()
    is_boss: bool = False
    is_secret_boss: bool = False
    boss_intro: tuple[str, ...] = ()

    @field_validator("phases", mode="after")
    @classmethod
    def order_phases_by_severity(cls, phases: tuple[BossPhase, ...]) -> tuple[BossPhase, ...]:
        """Keep phases ordered from mildest (highest threshold) to most severe."""
        return tuple(sorted(phases, key=lambda phase: -phase.health_threshold))


class Enemy(EnemyData):
    """A live enemy instance in an encounter.

    Attributes:
        hp: Current hit points.
        current_phase: Number of boss phases entered (0 = base form, n = ``phases[n-1]``).
        turn_counter: Enemy turns taken since the last summon (or combat start).
        charging: Pounce wind-up in progress.
        poison_turns: Remaining turns of player-applied poison.
        poison_damage: Damage each poison tick deals.
        constrict_turns: Remaining turns the enemy holds the player in a constrict.
        defending: Enemy braced last turn; halves the player's next hit.
        minions: Summoned helpers fighting alongside this enemy.
    """

    hp: int = Field(ge=0)
    current_phase: int = Field(default=0, ge=0)
    turn_counter: int = Field(default=0, ge=0)
    charging: bool = False
    poison_turns: int = Field(default=0, ge=0)
    poison_damage: int = Field(default=0, ge=0)
    constrict_turns: int = Field(default=0, ge=0)
    defending: bool = False
    minions: tuple[Enemy, ...] = ()

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def hp_fraction(self) -> float:
        return self.hp / self.max_hp

    @property
    def living_minions(self) -> tuple[Enemy, ...]:
        return tuple(minion for minion in self.minions if minion.hp > 0)

    @classmethod
    def from_data(cls, data: EnemyData) -> Enemy:
        """Create a fresh instance at full HP with all combat counters reset."""
        template = {name: getattr(data, name) for name in EnemyData.model_fields}
        return cls(**template, hp=data.max_hp)


__all__ = [
    "AIPattern",
    "SpecialType",
    "SpecialBase",
    "PoisonSpecial",
    "ConstrictSpecial",
    "SplashDamageSpecial",
    "SummonMinionsSpecial",
    "PounceSpecial",
    "NutThrowSpecial",
    "WrenchThrowSpecial",
    "RabidBiteSpecial",
    "CrushingBlowSpecial",
    "BiteSpecial",
    "FrenzySpecial",
    "EvasionSpecial",
    "StealItemSpecial",
    "UnknownSpecial",
    "EnemySpecial",
    "BossPhase",
    "LootDrop",
    "CurrencyDrop",
    "EnemyData",
    "Enemy",
]
