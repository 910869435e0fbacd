"""Seedable random source for every roll the engine makes.

Damage variance, special triggers, AI choices, flee attempts, currency
and loot all draw from one injected :class:`RandomSource`, so a seeded
source replays a whole fight exactly.
"""

from __future__ import annotations

import random

from trash_odyssey.core.exceptions import ValidationError
from trash_odyssey.core.logging import get_logger


logger = get_logger(__name__)


class RandomSource:
    """Uniform random numbers for game rolls.

    Example:
        >>> rng = RandomSource(seed=42)
        >>> 0.0 <= rng.random() < 1.0
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the source.

        Args:
            seed: Optional seed for reproducible rolls.
        """
        self._seed = seed
        self._random = random.Random(seed)
        logger.debug("RandomSource initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def random(self) -> float:
        """Return a uniform float in [0, 1)."""
        return self._random.random()

    def chance(self, probability: float | None) -> bool:
        """Return True with the given probability. None means always."""
        if probability is None:
            return True
        return self.random() < probability

    def randint(self, low: int, high: int) -> int:
        """Return an integer in the inclusive range [low, high].

        Raises:
            ValidationError: If the range is empty.
        """
        if high < low:
            raise ValidationError(
                f"Empty roll range {low}..{high}", field_name="high", invalid_value=high
            )
        return int(self.random() * (high - low + 1)) + low

    def index(self, length: int) -> int:
        """Return a uniform index into a sequence of ``length`` elements."""
        return int(self.random() * length)

    def choice(self, options: list[str] | tuple[str, ...]) -> str:
        return options[self.index(len(options))]


__all__ = ["RandomSource"]
