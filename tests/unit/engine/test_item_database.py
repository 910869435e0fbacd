"""Tests for the item registry."""

from __future__ import annotations

from typing import Any

import pytest

from trash_odyssey.core.exceptions import DataIntegrityError
from trash_odyssey.engine.item_database import (
    ItemDatabase,
    clear_item_database_cache,
    get_item_database,
)
from trash_odyssey.models.items import (
    Equipment,
    EquipmentSlot,
    InventoryItem,
    ItemType,
    StatBlock,
)


@pytest.fixture
def messy_table() -> dict[str, Any]:
    """An item table with one good record per category and several broken ones."""
    return {
        "consumables": {
            "good_crumb": {
                "name": "Good Crumb",
                "description": "Fine.",
                "type": "consumable",
                "effect": {"heal_hp": 5},
                "shop_price": 3,
            },
            "no_description": {"name": "Mystery", "type": "consumable"},
            "bad_type": {"name": "Oddity", "description": "?", "type": "relic"},
            "slotted_crumb": {
                "name": "Slotted Crumb",
                "description": "Has a slot it should not.",
                "type": "consumable",
                "slot": "hat",
            },
            "not_a_record": "just a string",
        },
        "weapons": {
            "stick": {
                "id": "branch",
                "name": "Stick",
                "description": "Pointy enough.",
                "type": "equipment",
                "slot": "weapon",
                "stats": {"atk": "lots", "def": 1},
            },
        },
        "shop_inventory": {
            "somewhere": [{"item_id": "good_crumb", "stock": "unlimited"}],
        },
    }


class TestItemDatabaseLoading:
    """Tests for building the registry from raw tables."""

    def test_valid_records_loaded(self, messy_table: dict[str, Any]) -> None:
        """Test good records load and broken ones are reported."""
        items = ItemDatabase(messy_table)

        report = items.validate_all()

        assert report["valid"] == ["good_crumb", "slotted_crumb", "stick"]
        assert set(report["invalid"]) == {"no_description", "bad_type"}

    def test_key_is_authoritative_id(self, messy_table: dict[str, Any]) -> None:
        """Test a mismatched record id loses to the table key."""
        items = ItemDatabase(messy_table)

        assert items.get_item("stick").id == "stick"
        assert items.get_item("branch") is None

    def test_equipment_stats_normalized(self, messy_table: dict[str, Any]) -> None:
        """Test non-numeric stats are zeroed on load."""
        stick = ItemDatabase(messy_table).get_item("stick")

        assert stick.stats.attack == 0
        assert stick.stats.defense == 1
        assert stick.stats.speed == 0

    def test_infinite_stat_does_not_abort_load(self) -> None:
        """Test one infinite stat is zeroed and the rest of the table still loads."""
        table = {
            "weapons": {
                "endless_spork": {
                    "name": "Endless Spork",
                    "description": "Goes on forever.",
                    "type": "equipment",
                    "slot": "weapon",
                    "stats": {"atk": float("inf"), "spd": 2},
                },
                "twig": {
                    "name": "Twig",
                    "description": "A twig.",
                    "type": "equipment",
                    "slot": "weapon",
                    "stats": {"atk": 1},
                },
            },
        }
        items = ItemDatabase(table)

        spork = items.get_item("endless_spork")
        assert spork.stats == StatBlock(attack=0, defense=0, speed=2)
        assert items.get_item("twig").stats.attack == 1

    def test_invalid_slot_dropped(self, messy_table: dict[str, Any]) -> None:
        """Test an unknown slot is cleared instead of rejecting the item."""
        assert ItemDatabase(messy_table).get_item("slotted_crumb").slot is None

    def test_shop_inventory_skipped(self, messy_table: dict[str, Any]) -> None:
        """Test shop listings are never parsed as items."""
        items = ItemDatabase(messy_table)

        assert not items.has_item("somewhere")
        assert items.stats()["categories"] == ["consumables", "weapons"]

    def test_clear_cache_rebuilds(self, messy_table: dict[str, Any]) -> None:
        """Test clearing the cache picks up table changes."""
        items = ItemDatabase(messy_table)
        assert not items.has_item("late_addition")

        messy_table["consumables"]["late_addition"] = {
            "name": "Late",
            "description": "Added later.",
            "type": "consumable",
        }
        items.clear_cache()

        assert items.has_item("late_addition")


class TestBundledItems:
    """Tests against the bundled item data."""

    def test_lookup(self, items: ItemDatabase) -> None:
        """Test basic lookups."""
        crumb = items.get_item("stale_crumb")

        assert crumb.name == "Stale Crumb"
        assert crumb.type == ItemType.CONSUMABLE
        assert crumb.effect.heal_hp == 10
        assert items.get_item("golden_bun") is None

    def test_everything_valid(self, items: ItemDatabase) -> None:
        """Test the bundled data loads without rejects."""
        report = items.validate_all()

        assert report["invalid"] == {}
        assert items.stats()["item_count"] == 18

    def test_require_item(self, items: ItemDatabase) -> None:
        """Test require_item raises for unknown ids."""
        assert items.require_item("moldy_bread").name == "Moldy Bread"
        with pytest.raises(DataIntegrityError) as exc_info:
            items.require_item("golden_bun")
        assert exc_info.value.details["item_id"] == "golden_bun"

    def test_filters(self, items: ItemDatabase) -> None:
        """Test type and slot filters."""
        accessories = {item.id for item in items.items_by_slot(EquipmentSlot.ACCESSORY)}

        assert accessories == {"twist_tie_ring", "rubber_band_bracelet", "rat_crown"}
        assert len(items.items_by_type("consumable")) == 5

    def test_starting_equipment(self, items: ItemDatabase) -> None:
        """Test starting gear detection."""
        assert items.is_starting_equipment("toothpick_shiv")
        assert items.is_starting_equipment("no_shield")
        assert not items.is_starting_equipment("plastic_fork")

    def test_boss_drops(self, items: ItemDatabase) -> None:
        """Test boss drops are flagged and cannot be bought."""
        skewer = items.get_item("bbq_skewer")

        assert skewer.is_boss_drop
        assert skewer.dropped_by == "hungry_dog"
        assert skewer.shop_price is None


class TestConversions:
    """Tests for building inventory and equipment entries."""

    def test_consumable_stack(self, items: ItemDatabase) -> None:
        """Test consumables become plain inventory stacks."""
        stack = items.to_inventory_item("ketchup_packet", 3)

        assert type(stack) is InventoryItem
        assert stack.quantity == 3
        assert stack.effect.heal_hp == 25

    def test_gear_stack(self, items: ItemDatabase) -> None:
        """Test gear keeps its slot and stats in the inventory."""
        stack = items.to_inventory_item("plastic_fork", 2)

        assert isinstance(stack, Equipment)
        assert stack.quantity == 2
        assert stack.stats.attack == 3

    def test_to_equipment(self, items: ItemDatabase) -> None:
        """Test only gear converts to equipment."""
        assert items.to_equipment("foil_wrapper").stats.speed == -1
        assert items.to_equipment("stale_crumb") is None
        assert items.to_equipment("golden_bun") is None
        assert items.to_inventory_item("golden_bun") is None


class TestGetItemDatabase:
    """Tests for the process-wide registry."""

    def test_cached(self) -> None:
        """Test the registry is built once."""
        assert get_item_database() is get_item_database()

    def test_cache_clear(self) -> None:
        """Test the cache can be cleared."""
        first = get_item_database()
        clear_item_database_cache()

        assert get_item_database() is not first
