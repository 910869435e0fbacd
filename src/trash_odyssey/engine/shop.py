"""Shop economy: buying and selling for Crumbs.

Each location with a shop lists the items it sells. Finite stock is
tracked per session in ``RPGState.shop_purchases``; listings flagged
``respawns`` refill when the player comes back to the location.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from trash_odyssey.core.logging import get_logger
from trash_odyssey.data import ITEMS, SHOP_INVENTORY_CATEGORY
from trash_odyssey.engine.inventory import InventoryManager
from trash_odyssey.engine.item_database import ItemDatabase
from trash_odyssey.models.items import InventoryItem, ItemDefinition, ShopListing
from trash_odyssey.models.state import RPGState, freeze_mapping


logger = get_logger(__name__)


@dataclass(frozen=True)
class ShopResult:
    new_state: RPGState
    success: bool
    message: str


def purchase_key(location: str, item_id: str) -> str:
    return f"{location}:{item_id}"


class ShopProcessor:
    """All-or-nothing buy and sell transactions."""

    def __init__(
        self,
        items: ItemDatabase,
        inventory: InventoryManager,
        shops: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
    ) -> None:
        """Initialize the shop processor.

        Args:
            items: Item registry for prices and names.
            inventory: Inventory manager used to add and remove stock.
            shops: Location id -> raw listings. Defaults to the bundled
                ``shop_inventory`` table.
        """
        self._items = items
        self._inventory = inventory
        self._raw_shops = ITEMS.get(SHOP_INVENTORY_CATEGORY, {}) if shops is None else shops
        self._shops: dict[str, tuple[ShopListing, ...]] | None = None

    # =========================================================================
    # Listings
    # =========================================================================

    def _ensure_loaded(self) -> dict[str, tuple[ShopListing, ...]]:
        if self._shops is None:
            shops: dict[str, tuple[ShopListing, ...]] = {}
            for location, raw_listings in self._raw_shops.items():
                listings: list[ShopListing] = []
                for raw in raw_listings:
                    try:
                        listing = ShopListing.model_validate(raw)
                    except PydanticValidationError as exc:
                        logger.warning(
                            "Shop listing rejected",
                            location=location,
                            errors=exc.error_count(),
                        )
                        continue
                    if not self._items.has_item(listing.item_id):
                        logger.warning(
                            "Shop lists unknown item",
                            location=location,
                            item_id=listing.item_id,
                        )
                        continue
                    listings.append(listing)
                shops[location] = tuple(listings)
            self._shops = shops
        return self._shops

    def shop_inventory(self, location: str) -> tuple[ShopListing, ...]:
        return self._ensure_loaded().get(location, ())

    def has_shop(self, location: str) -> bool:
        return location in self._ensure_loaded()

    def _listing(self, location: str, item_id: str) -> ShopListing | None:
        for listing in self.shop_inventory(location):
            if listing.item_id == item_id:
                return listing
        return None

    def remaining_stock(self, state: RPGState, location: str, item_id: str) -> int | None:
        """Units left for sale. None means unlimited; 0 for unlisted items."""
        listing = self._listing(location, item_id)
        if listing is None:
            return 0
        if listing.is_unlimited:
            return None
        bought = state.shop_purchases.get(purchase_key(location, item_id), 0)
        return max(0, int(listing.stock) - bought)

    def available_items(self, location: str, currency: int) -> tuple[ItemDefinition, ...]:
        """Items listed at ``location`` that have a price the player can pay."""
        available: list[ItemDefinition] = []
        for listing in self.shop_inventory(location):
            definition = self._items.get_item(listing.item_id)
            if definition is None or not definition.shop_price:
                continue
            if definition.shop_price <= currency:
                available.append(definition)
        return tuple(available)

    def sellable_items(self, state: RPGState) -> tuple[InventoryItem, ...]:
        equipped = state.equipment.equipped_ids()
        sellable: list[InventoryItem] = []
        for entry in state.inventory:
            definition = self._items.get_item(entry.id)
            if definition is None or not definition.sell_price:
                continue
            if self._items.is_starting_equipment(entry.id) or entry.id in equipped:
                continue
            sellable.append(entry)
        return tuple(sellable)

    def restock(self, state: RPGState, location: str) -> RPGState:
        """Refill respawning listings at ``location``."""
        respawning = {
            purchase_key(location, listing.item_id)
            for listing in self.shop_inventory(location)
            if listing.respawns
        }
        if not respawning.intersection(state.shop_purchases):
            return state
        purchases = {
            key: count for key, count in state.shop_purchases.items() if key not in respawning
        }
        logger.debug("Shop restocked", location=location)
        return state.model_copy(update={"shop_purchases": freeze_mapping(purchases)})

    # =========================================================================
    # Transactions
    # =========================================================================

    def buy_item(self, state: RPGState, item_id: str, location: str) -> ShopResult:
        """Buy one unit of ``item_id`` from the shop at ``location``."""
        definition = self._items.get_item(item_id)
        if definition is None:
            return ShopResult(state, False, f"Item {item_id} not found.")

        listing = self._listing(location, item_id)
        if listing is None:
            return ShopResult(state, False, f"{definition.name} is not available in this shop.")

        price = definition.shop_price
        if not price:
            return ShopResult(state, False, f"{definition.name} cannot be purchased.")

        if state.currency < price:
            return ShopResult(
                state,
                False,
                f"Not enough Crumbs! Need {price}, have {state.currency}.",
            )

        if self.remaining_stock(state, location, item_id) == 0:
            return ShopResult(state, False, f"{definition.name} is sold out!")

        added = self._inventory.add_item(state, item_id, 1)
        if not added.success:
            return ShopResult(state, False, added.message or "Could not add item to inventory.")

        update: dict[str, Any] = {"currency": added.new_state.currency - price}
        if not listing.is_unlimited:
            key = purchase_key(location, item_id)
            purchases = dict(state.shop_purchases)
            purchases[key] = purchases.get(key, 0) + 1
            update["shop_purchases"] = freeze_mapping(purchases)

        new_state = added.new_state.model_copy(update=update)
        logger.info("Item purchased", item_id=item_id, location=location, price=price)
        return ShopResult(new_state, True, f"Purchased {definition.name} for {price} Crumbs!")

    def sell_item(self, state: RPGState, item_id: str) -> ShopResult:
        """Sell one unit of ``item_id`` for its sell price."""
        definition = self._items.get_item(item_id)
        if definition is None:
            return ShopResult(state, False, f"Item {item_id} not found.")

        price = definition.sell_price
        if not price:
            return ShopResult(state, False, f"{definition.name} cannot be sold.")

        if self._items.is_starting_equipment(item_id):
            return ShopResult(
                state,
                False,
                f"{definition.name} is starting equipment and cannot be sold.",
            )

        if item_id in state.equipment.equipped_ids():
            return ShopResult(
                state,
                False,
                f"{definition.name} is currently equipped. Unequip it first.",
            )

        if state.item_quantity(item_id) < 1:
            return ShopResult(state, False, f"You don't have {definition.name} to sell.")

        removed = self._inventory.remove_item(state, item_id, 1)
        if not removed.success:
            return ShopResult(state, False, "Could not remove item from inventory.")

        new_state = removed.new_state.model_copy(update={"currency": state.currency + price})
        logger.info("Item sold", item_id=item_id, price=price)
        return ShopResult(new_state, True, f"Sold {definition.name} for {price} Crumbs!")


__all__ = [
    "ShopResult",
    "ShopProcessor",
    "purchase_key",
]
