"""Validated registry of item definitions.

The item table is nested (category -> item id -> record). The registry
flattens it into id -> :class:`ItemDefinition` the first time it is
queried, discarding malformed records with a warning instead of failing
the whole load.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from trash_odyssey.core.constants import STARTING_EQUIPMENT
from trash_odyssey.core.exceptions import DataIntegrityError
from trash_odyssey.core.logging import get_logger
from trash_odyssey.data import ITEMS, SHOP_INVENTORY_CATEGORY
from trash_odyssey.engine.equipment_validator import VALID_SLOTS, validate_equipment_stats
from trash_odyssey.models.items import (
    Equipment,
    EquipmentSlot,
    InventoryItem,
    ItemDefinition,
    ItemType,
    StatBlock,
)


logger = get_logger(__name__)

_VALID_TYPES = frozenset(item_type.value for item_type in ItemType)


class ItemDatabase:
    """Lazily built id -> definition registry.

    Example:
        >>> items = ItemDatabase()
        >>> items.get_item("stale_crumb").name
        'Stale Crumb'
    """

    def __init__(self, table: Mapping[str, Any] | None = None) -> None:
        """Initialize the registry.

        Args:
            table: Nested item table. Defaults to the bundled game data.
        """
        self._table = ITEMS if table is None else table
        self._cache: dict[str, ItemDefinition] | None = None
        self._invalid: dict[str, str] = {}

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _ensure_loaded(self) -> dict[str, ItemDefinition]:
        if self._cache is None:
            self._cache = self._build()
            logger.info(
                "Item database loaded",
                items=len(self._cache),
                rejected=len(self._invalid),
            )
        return self._cache

    def _build(self) -> dict[str, ItemDefinition]:
        items: dict[str, ItemDefinition] = {}
        self._invalid = {}
        for category, records in self._table.items():
            if category == SHOP_INVENTORY_CATEGORY or not isinstance(records, Mapping):
                continue
            for item_id, record in records.items():
                if not isinstance(record, Mapping) or "name" not in record:
                    continue
                definition = self._parse_record(str(item_id), record)
                if definition is not None:
                    items[definition.id] = definition
        return items

    def _reject(self, item_id: str, reason: str) -> None:
        self._invalid[item_id] = reason
        logger.warning("Item rejected", item_id=item_id, reason=reason)

    def _parse_record(self, item_id: str, record: Mapping[str, Any]) -> ItemDefinition | None:
        if not record.get("name") or "description" not in record:
            self._reject(item_id, "missing name or description")
            return None
        if record.get("type") not in _VALID_TYPES:
            self._reject(item_id, f"invalid type {record.get('type')!r}")
            return None

        data = dict(record)
        if "id" in data and data["id"] != item_id:
            logger.warning("Item id does not match its key", key=item_id, record_id=data["id"])
        data["id"] = item_id

        slot = data.get("slot")
        if slot is not None and slot not in VALID_SLOTS:
            logger.warning("Invalid item slot dropped", item_id=item_id, slot=slot)
            data["slot"] = None

        if data["type"] == ItemType.EQUIPMENT:
            data = validate_equipment_stats(data)

        try:
            return ItemDefinition.model_validate(data)
        except PydanticValidationError as exc:
            self._reject(item_id, f"{exc.error_count()} validation error(s)")
            return None

    def clear_cache(self) -> None:
        """Drop the built registry so the next query rebuilds it."""
        self._cache = None
        self._invalid = {}

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_item(self, item_id: str) -> ItemDefinition | None:
        return self._ensure_loaded().get(item_id)

    def has_item(self, item_id: str) -> bool:
        return item_id in self._ensure_loaded()

    def require_item(self, item_id: str) -> ItemDefinition:
        """Return a definition or raise when the data set lacks it.

        Raises:
            DataIntegrityError: If ``item_id`` is not defined.
        """
        definition = self.get_item(item_id)
        if definition is None:
            raise DataIntegrityError(f"Item '{item_id}' is not defined", item_id=item_id)
        return definition

    def all_items(self) -> tuple[ItemDefinition, ...]:
        return tuple(self._ensure_loaded().values())

    def items_by_type(self, item_type: ItemType | str) -> tuple[ItemDefinition, ...]:
        item_type = ItemType(item_type)
        return tuple(item for item in self._ensure_loaded().values() if item.type == item_type)

    def items_by_slot(self, slot: EquipmentSlot | str) -> tuple[ItemDefinition, ...]:
        slot = EquipmentSlot(slot)
        return tuple(item for item in self._ensure_loaded().values() if item.slot == slot)

    def is_starting_equipment(self, item_id: str) -> bool:
        """True for items flagged as starting gear or named as a slot fallback."""
        definition = self.get_item(item_id)
        if definition is not None and definition.is_starting_equipment:
            return True
        return item_id in STARTING_EQUIPMENT.values()

    def stats(self) -> dict[str, Any]:
        """Summary of the loaded data set."""
        items = self._ensure_loaded()
        categories = [
            category for category in self._table if category != SHOP_INVENTORY_CATEGORY
        ]
        return {"item_count": len(items), "categories": categories}

    def validate_all(self) -> dict[str, Any]:
        """Report which records loaded and which were rejected (and why)."""
        items = self._ensure_loaded()
        return {"valid": sorted(items), "invalid": dict(self._invalid)}

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def to_inventory_item(self, item_id: str, quantity: int = 1) -> InventoryItem | None:
        """Build an inventory stack for ``item_id``, or None if unknown."""
        definition = self.get_item(item_id)
        if definition is None:
            return None
        if definition.is_equipment and definition.slot is not None:
            return self._equipment_from(definition, quantity)
        return InventoryItem(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            type=definition.type,
            effect=definition.effect,
            quantity=quantity,
        )

    def to_equipment(self, item_id: str) -> Equipment | None:
        """Build an equippable entry for ``item_id``, or None if it is not gear."""
        definition = self.get_item(item_id)
        if definition is None or not definition.is_equipment or definition.slot is None:
            return None
        return self._equipment_from(definition, 1)

    @staticmethod
    def _equipment_from(definition: ItemDefinition, quantity: int) -> Equipment:
        return Equipment(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            slot=definition.slot,
            stats=definition.stats or StatBlock(),
            quantity=quantity,
        )


@lru_cache
def get_item_database() -> ItemDatabase:
    """Get the process-wide item registry built from the bundled data."""
    return ItemDatabase()


def clear_item_database_cache() -> None:
    get_item_database.cache_clear()


__all__ = [
    "ItemDatabase",
    "get_item_database",
    "clear_item_database_cache",
]
