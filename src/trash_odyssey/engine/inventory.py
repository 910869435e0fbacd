"""Inventory, consumables, equipment, and stat recomputation.

Every operation takes an :class:`RPGState` and returns an
:class:`InventoryResult`. A failed operation returns the very same state
object it was given along with a message explaining why.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import floor

from trash_odyssey.core.constants import (
    LEVEL_UP_ATK_GAIN,
    LEVEL_UP_DEF_GAIN,
    LEVEL_UP_SPD_GAIN,
    MAX_INVENTORY_SIZE,
    STARTING_ATK,
    STARTING_DEF,
    STARTING_EQUIPMENT,
    STARTING_SPD,
    calculate_base_stat,
)
from trash_odyssey.core.logging import get_logger
from trash_odyssey.engine.equipment_validator import (
    assert_equipment_valid,
    create_fallback_equipment,
)
from trash_odyssey.engine.item_database import ItemDatabase
from trash_odyssey.models.items import (
    REQUIRED_SLOTS,
    Equipment,
    EquipmentSlot,
    InventoryItem,
    ItemType,
    LoadoutSlot,
    StatBlock,
)
from trash_odyssey.models.state import RPGState


logger = get_logger(__name__)


@dataclass(frozen=True)
class InventoryResult:
    """Outcome of an inventory operation.

    Attributes:
        new_state: State after the operation (the input state on failure).
        success: Whether the operation was applied.
        message: Narration for the player.
        heal_amount: HP actually restored by a consumable.
    """

    new_state: RPGState
    success: bool
    message: str
    heal_amount: int = 0


class InventoryManager:
    """Pure transforms over the player's inventory and loadout."""

    def __init__(self, items: ItemDatabase) -> None:
        self._items = items

    # =========================================================================
    # Stacks
    # =========================================================================

    def add_item(self, state: RPGState, item_id: str, quantity: int = 1) -> InventoryResult:
        """Add ``quantity`` units, stacking onto an existing entry when possible."""
        definition = self._items.get_item(item_id)
        if definition is None:
            return InventoryResult(state, False, f"Item {item_id} not found")
        if quantity < 1:
            return InventoryResult(state, False, "Quantity must be at least 1")

        inventory = list(state.inventory)
        for index, entry in enumerate(inventory):
            if entry.id == item_id:
                inventory[index] = entry.model_copy(update={"quantity": entry.quantity + quantity})
                break
        else:
            if len(inventory) >= MAX_INVENTORY_SIZE:
                return InventoryResult(state, False, "Inventory is full!")
            new_entry = self._items.to_inventory_item(item_id, quantity)
            inventory.append(new_entry)

        new_state = state.model_copy(update={"inventory": tuple(inventory)})
        return InventoryResult(new_state, True, f"Received {quantity}x {definition.name}")

    def remove_item(self, state: RPGState, item_id: str, quantity: int = 1) -> InventoryResult:
        """Remove ``quantity`` units, deleting the stack when it reaches zero."""
        entry = state.find_item(item_id)
        if entry is None:
            return InventoryResult(state, False, "Item not found in inventory")
        if quantity < 1 or entry.quantity < quantity:
            return InventoryResult(state, False, f"Not enough {entry.name}")

        remaining = entry.quantity - quantity
        inventory: list[InventoryItem] = []
        for item in state.inventory:
            if item.id != item_id:
                inventory.append(item)
            elif remaining > 0:
                inventory.append(item.model_copy(update={"quantity": remaining}))

        new_state = state.model_copy(update={"inventory": tuple(inventory)})
        return InventoryResult(new_state, True, f"Removed {quantity}x {entry.name}")

    # =========================================================================
    # Consumables
    # =========================================================================

    def use_consumable(self, state: RPGState, item_id: str) -> InventoryResult:
        """Apply a consumable's effect and remove one unit.

        Flat and percentage heals are capped at max HP. Attack and defense
        buffs go into ``combat_buffs`` and last until the fight ends, so
        they can only be used in combat.
        """
        entry = state.find_item(item_id)
        if entry is None:
            return InventoryResult(state, False, "Item not found in inventory")
        if entry.type != ItemType.CONSUMABLE:
            return InventoryResult(state, False, "This item cannot be used")
        effect = entry.effect
        if effect is None:
            return InventoryResult(state, False, "This item has no effect")

        heal = effect.heal_hp or 0
        if effect.heal_hp_percent:
            heal += floor(state.max_hp * effect.heal_hp_percent)
        buff = StatBlock(attack=effect.buff_atk or 0, defense=effect.buff_def or 0)

        if heal == 0 and not buff.is_zero and not state.in_combat:
            return InventoryResult(state, False, f"{entry.name} only works in battle")

        update: dict[str, object] = {}
        messages: list[str] = []
        heal_amount = 0

        if heal > 0:
            new_hp = min(state.max_hp, state.hp + heal)
            heal_amount = new_hp - state.hp
            update["hp"] = new_hp
            messages.append(f"Healed {heal_amount} HP!")

        if not buff.is_zero:
            update["combat_buffs"] = state.combat_buffs + buff
            if buff.attack:
                messages.append(f"ATK +{buff.attack} for this battle!")
            if buff.defense:
                messages.append(f"DEF +{buff.defense} for this battle!")

        if not messages:
            logger.debug("Consumable had nothing to apply", item_id=item_id)
            messages.append(f"You use the {entry.name}. Nothing happens.")

        removed = self.remove_item(state.model_copy(update=update), item_id, 1)
        logger.debug("Consumable used", item_id=item_id, heal_amount=heal_amount)
        return InventoryResult(removed.new_state, True, " ".join(messages), heal_amount)

    def usable_consumables(self, state: RPGState) -> tuple[InventoryItem, ...]:
        return tuple(
            item
            for item in state.inventory
            if item.type == ItemType.CONSUMABLE and item.effect is not None
        )

    # =========================================================================
    # Equipment
    # =========================================================================

    def equippable_items(self, state: RPGState) -> tuple[InventoryItem, ...]:
        return tuple(
            item for item in state.inventory if self._items.to_equipment(item.id) is not None
        )

    def _target_slot(self, state: RPGState, equipment: Equipment) -> LoadoutSlot:
        if equipment.slot != EquipmentSlot.ACCESSORY:
            return LoadoutSlot(equipment.slot.value)
        if state.equipment.accessory is None:
            return LoadoutSlot.ACCESSORY
        if state.equipment.accessory2 is None:
            return LoadoutSlot.ACCESSORY2
        return LoadoutSlot.ACCESSORY

    def equip_item(self, state: RPGState, item_id: str) -> InventoryResult:
        """Move an item from the inventory into its slot.

        The displaced item goes back into the inventory unless it is
        starting equipment, which simply disappears from the loadout.
        """
        equipment = self._items.to_equipment(item_id)
        if equipment is None:
            return InventoryResult(state, False, "Item cannot be equipped")
        if state.find_item(item_id) is None:
            return InventoryResult(state, False, "Item not found in inventory")
        assert_equipment_valid(equipment, context="equip_item")

        slot = self._target_slot(state, equipment)
        current = state.equipment.get(slot)

        working = self.remove_item(state, item_id, 1).new_state
        if current is not None and not self._items.is_starting_equipment(current.id):
            returned = self.add_item(working, current.id, 1)
            if not returned.success:
                return InventoryResult(state, False, returned.message)
            working = returned.new_state

        working = working.model_copy(
            update={"equipment": state.equipment.with_slot(slot, equipment)}
        )
        new_state = self.recalculate_stats(working)
        logger.debug("Item equipped", item_id=item_id, slot=slot.value)
        return InventoryResult(new_state, True, f"Equipped {equipment.name}")

    def unequip_item(self, state: RPGState, slot: LoadoutSlot | str) -> InventoryResult:
        """Return a slot's item to the inventory.

        Weapon, armor and shield fall back to their starting item;
        accessory slots become empty.
        """
        try:
            slot = LoadoutSlot(slot)
        except ValueError:
            return InventoryResult(state, False, f"Unknown equipment slot '{slot}'")

        current = state.equipment.get(slot)
        if current is None:
            return InventoryResult(state, False, "No item equipped in this slot")
        if self._items.is_starting_equipment(current.id):
            return InventoryResult(state, False, "Cannot unequip starting equipment")

        returned = self.add_item(state, current.id, 1)
        if not returned.success:
            return InventoryResult(state, False, "Inventory is full")

        replacement: Equipment | None = None
        if slot in REQUIRED_SLOTS:
            starting_id = STARTING_EQUIPMENT[slot.value]
            replacement = self._items.to_equipment(starting_id) or create_fallback_equipment(
                slot.value, starting_id
            )

        working = returned.new_state.model_copy(
            update={"equipment": state.equipment.with_slot(slot, replacement)}
        )
        new_state = self.recalculate_stats(working)
        logger.debug("Item unequipped", item_id=current.id, slot=slot.value)
        return InventoryResult(new_state, True, f"Unequipped {current.name}")

    # =========================================================================
    # Stats
    # =========================================================================

    def recalculate_stats(self, state: RPGState) -> RPGState:
        """Rebuild attack/defense/speed from level, loadout and ingredients.

        Raises:
            EquipmentValidationError: If any equipped item has unusable stats.
        """
        for slot, equipment in state.equipment.items():
            assert_equipment_valid(equipment, context=f"recalculate_stats:{slot.value}")

        base = StatBlock(
            attack=calculate_base_stat(STARTING_ATK, state.level, LEVEL_UP_ATK_GAIN),
            defense=calculate_base_stat(STARTING_DEF, state.level, LEVEL_UP_DEF_GAIN),
            speed=calculate_base_stat(STARTING_SPD, state.level, LEVEL_UP_SPD_GAIN),
        )
        total = base + state.equipment.total_stats()
        for bonus in state.ingredient_bonuses.values():
            total = total + bonus.stats

        stats = StatBlock(
            attack=max(1, total.attack),
            defense=max(0, total.defense),
            speed=max(1, total.speed),
        )
        return state.model_copy(update={"stats": stats})


__all__ = [
    "InventoryResult",
    "InventoryManager",
]
