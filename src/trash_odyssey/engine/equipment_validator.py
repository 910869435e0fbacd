"""Equipment stat validation.

Combat math adds equipment stats together. A single ``None`` or string in
a data file would poison every later calculation, so raw records are
normalized on load and equipped items are asserted valid before any stat
recomputation.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping
from typing import Any

from trash_odyssey.core.exceptions import EquipmentValidationError
from trash_odyssey.core.logging import get_logger
from trash_odyssey.models.items import Equipment, EquipmentSlot, StatBlock


logger = get_logger(__name__)

STAT_KEYS: tuple[str, ...] = ("atk", "def", "spd")
"""Wire keys every equipment stat block must carry."""

VALID_SLOTS = frozenset(slot.value for slot in EquipmentSlot)


def _is_valid_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def validate_equipment_stats(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return a normalized copy of an item record.

    Missing, ``None``, non-numeric, boolean, NaN and infinite stat values
    become 0 and fractional values are truncated toward zero. Each
    replacement is logged. The input is never mutated.

    Args:
        record: Raw item record from the item table.

    Returns:
        Deep copy of the record with a fully populated ``stats`` mapping.
    """
    normalized = copy.deepcopy(dict(record))
    raw_stats = normalized.get("stats")
    if not isinstance(raw_stats, Mapping):
        if raw_stats is not None:
            logger.warning(
                "Equipment stats are not a mapping, using zeros",
                item_id=normalized.get("id"),
                stats=repr(raw_stats),
            )
        raw_stats = {}

    stats: dict[str, Any] = {}
    for key in STAT_KEYS:
        value = raw_stats.get(key)
        if _is_valid_number(value):
            stats[key] = int(value)
            if stats[key] != value:
                logger.warning(
                    "Fractional equipment stat truncated",
                    item_id=normalized.get("id"),
                    stat=key,
                    value=value,
                    truncated=stats[key],
                )
        else:
            if value is not None:
                logger.warning(
                    "Invalid equipment stat replaced with 0",
                    item_id=normalized.get("id"),
                    stat=key,
                    value=repr(value),
                )
            stats[key] = 0
    normalized["stats"] = stats
    return normalized


def assert_equipment_valid(equipment: Any, context: str = "") -> None:
    """Raise if ``equipment`` would be unsafe in combat math.

    Args:
        equipment: An :class:`Equipment` or a raw mapping.
        context: Where the check ran, included in the error.

    Raises:
        EquipmentValidationError: On a bad slot or non-numeric stats.
    """
    if isinstance(equipment, Equipment):
        item_id: Any = equipment.id
        slot: Any = equipment.slot
        stats: Any = equipment.stats.model_dump(by_alias=True)
    elif isinstance(equipment, Mapping):
        item_id = equipment.get("id")
        slot = equipment.get("slot")
        stats = equipment.get("stats")
    else:
        raise EquipmentValidationError(
            f"Expected equipment, got {type(equipment).__name__}",
            details={"context": context},
        )

    issues: list[str] = []
    if str(slot) not in VALID_SLOTS:
        issues.append(f"invalid slot {slot!r}")
    if not isinstance(stats, Mapping):
        issues.append("stats missing")
    else:
        for key in STAT_KEYS:
            if not _is_valid_number(stats.get(key)):
                issues.append(f"{key} is {stats.get(key)!r}")

    if issues:
        raise EquipmentValidationError(
            f"Equipment {item_id!r} failed validation",
            item_id=str(item_id) if item_id else None,
            issues=issues,
            details={"context": context} if context else None,
        )


def create_fallback_equipment(slot: EquipmentSlot | str, item_id: str) -> Equipment:
    """Build a zero-stat equipment entry for ``slot``."""
    slot = EquipmentSlot(slot)
    return Equipment(
        id=item_id,
        name=item_id.replace("_", " ").title(),
        description="",
        slot=slot,
        stats=StatBlock(),
    )


__all__ = [
    "STAT_KEYS",
    "VALID_SLOTS",
    "validate_equipment_stats",
    "assert_equipment_valid",
    "create_fallback_equipment",
]
