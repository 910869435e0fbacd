"""Static data tables for Trash Odyssey.

These are loaded once at startup and treated as read-only. Registries in
:mod:`trash_odyssey.engine` validate them; nothing here is trusted as-is.
"""

from __future__ import annotations

from trash_odyssey.data.enemies import ENCOUNTERS, ENEMIES
from trash_odyssey.data.ingredients import INGREDIENT_POWERS
from trash_odyssey.data.items import ITEMS


SHOP_INVENTORY_CATEGORY = "shop_inventory"
"""Category of the item table that holds shop listings, not items."""


__all__ = [
    "ITEMS",
    "ENEMIES",
    "ENCOUNTERS",
    "INGREDIENT_POWERS",
    "SHOP_INVENTORY_CATEGORY",
]
