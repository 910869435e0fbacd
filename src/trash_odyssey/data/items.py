"""Trash Odyssey item and shop data.

Item records are grouped by category; the key of each record is the
item's authoritative id. ``shop_inventory`` is not an item category: it
maps a location id to the entries that location's shop sells.
"""

ITEMS = {
    # =========================================================================
    # Consumables
    # =========================================================================
    "consumables": {
        "stale_crumb": {
            "name": "Stale Crumb",
            "description": "A crumb that has seen things. Restores 10 HP.",
            "type": "consumable",
            "effect": {"heal_hp": 10},
            "shop_price": 5,
            "sell_price": 2,
        },
        "ketchup_packet": {
            "name": "Ketchup Packet",
            "description": "Slightly expired, deeply restorative. Restores 25 HP.",
            "type": "consumable",
            "effect": {"heal_hp": 25},
            "shop_price": 15,
            "sell_price": 7,
        },
        "mustard_packet": {
            "name": "Mustard Packet",
            "description": "Sharp and angry. +3 ATK for the rest of the fight.",
            "type": "consumable",
            "effect": {"buff_atk": 3},
            "shop_price": 20,
            "sell_price": 8,
        },
        "soy_sauce_packet": {
            "name": "Soy Sauce Packet",
            "description": "Salty resolve. +3 DEF for the rest of the fight.",
            "type": "consumable",
            "effect": {"buff_def": 3},
            "shop_price": 20,
            "sell_price": 8,
        },
        "moldy_bread": {
            "name": "Moldy Bread",
            "description": "Fuzzy. Alive, in a way. Revives you at half HP when you fall.",
            "type": "consumable",
            "effect": {"revive": True, "heal_hp_percent": 0.5},
            "shop_price": 50,
            "sell_price": 20,
        },
    },
    # =========================================================================
    # Weapons
    # =========================================================================
    "weapons": {
        "toothpick_shiv": {
            "name": "Toothpick Shiv",
            "description": "A splintered toothpick. Better than nothing.",
            "type": "equipment",
            "slot": "weapon",
            "stats": {"atk": 0, "def": 0, "spd": 0},
            "is_starting_equipment": True,
        },
        "plastic_fork": {
            "name": "Plastic Fork",
            "description": "Three tines of pure menace.",
            "type": "equipment",
            "slot": "weapon",
            "stats": {"atk": 3},
            "shop_price": 30,
            "sell_price": 12,
        },
        "butter_knife": {
            "name": "Rusty Butter Knife",
            "description": "Dull, heavy, reliable.",
            "type": "equipment",
            "slot": "weapon",
            "stats": {"atk": 5, "spd": -1},
            "shop_price": 60,
            "sell_price": 25,
        },
        "bbq_skewer": {
            "name": "BBQ Skewer",
            "description": "Still smells of victory. Pried from the Hungry Dog's bowl.",
            "type": "equipment",
            "slot": "weapon",
            "stats": {"atk": 8, "def": 0, "spd": 1},
            "sell_price": 60,
            "is_boss_drop": True,
            "dropped_by": "hungry_dog",
        },
    },
    # =========================================================================
    # Armor
    # =========================================================================
    "armor": {
        "exposed_bun": {
            "name": "Exposed Bun",
            "description": "Just you. Soft and vulnerable.",
            "type": "equipment",
            "slot": "armor",
            "stats": {"atk": 0, "def": 0, "spd": 0},
            "is_starting_equipment": True,
        },
        "wax_paper_wrap": {
            "name": "Wax Paper Wrap",
            "description": "Crinkly protection.",
            "type": "equipment",
            "slot": "armor",
            "stats": {"def": 2},
            "shop_price": 25,
            "sell_price": 10,
        },
        "foil_wrapper": {
            "name": "Foil Wrapper",
            "description": "Shiny, sturdy, a little noisy.",
            "type": "equipment",
            "slot": "armor",
            "stats": {"def": 4, "spd": -1},
            "shop_price": 55,
            "sell_price": 22,
        },
    },
    # =========================================================================
    # Shields
    # =========================================================================
    "shields": {
        "no_shield": {
            "name": "No Shield",
            "description": "Your bare crust.",
            "type": "equipment",
            "slot": "shield",
            "stats": {"atk": 0, "def": 0, "spd": 0},
            "is_starting_equipment": True,
        },
        "bottle_cap_shield": {
            "name": "Bottle Cap Shield",
            "description": "Round, ridged, surprisingly protective.",
            "type": "equipment",
            "slot": "shield",
            "stats": {"def": 2},
            "shop_price": 30,
            "sell_price": 12,
        },
        "pizza_box_lid": {
            "name": "Pizza Box Lid",
            "description": "Greasy cardboard bulwark.",
            "type": "equipment",
            "slot": "shield",
            "stats": {"def": 4, "spd": -1},
            "shop_price": 70,
            "sell_price": 28,
        },
    },
    # =========================================================================
    # Accessories
    # =========================================================================
    "accessories": {
        "twist_tie_ring": {
            "name": "Twist Tie Ring",
            "description": "Bent into a loop. You feel nimble.",
            "type": "equipment",
            "slot": "accessory",
            "stats": {"spd": 2},
            "shop_price": 40,
            "sell_price": 15,
        },
        "rubber_band_bracelet": {
            "name": "Rubber Band Bracelet",
            "description": "Snappy.",
            "type": "equipment",
            "slot": "accessory",
            "stats": {"atk": 1, "spd": 1},
            "shop_price": 35,
            "sell_price": 14,
        },
        "rat_crown": {
            "name": "Rat Crown",
            "description": "A bottle-cap crown. Heavy is the bun that wears it.",
            "type": "equipment",
            "slot": "accessory",
            "stats": {"atk": 2, "def": 1},
            "sell_price": 40,
            "is_boss_drop": True,
            "dropped_by": "rat_king",
        },
    },
    # =========================================================================
    # Shop inventories (location id -> entries)
    # =========================================================================
    "shop_inventory": {
        "backyard_shed_shop": [
            {"item_id": "stale_crumb", "stock": "unlimited"},
            {"item_id": "ketchup_packet", "stock": "unlimited"},
            {"item_id": "mustard_packet", "stock": 3, "respawns": True},
            {"item_id": "soy_sauce_packet", "stock": 3, "respawns": True},
            {"item_id": "moldy_bread", "stock": 1},
            {"item_id": "plastic_fork", "stock": 1},
            {"item_id": "wax_paper_wrap", "stock": 1},
            {"item_id": "bottle_cap_shield", "stock": 1},
            {"item_id": "twist_tie_ring", "stock": 1},
        ],
        "garden_shop": [
            {"item_id": "stale_crumb", "stock": "unlimited"},
            {"item_id": "ketchup_packet", "stock": "unlimited"},
            {"item_id": "moldy_bread", "stock": 2},
            {"item_id": "butter_knife", "stock": 1},
            {"item_id": "foil_wrapper", "stock": 1},
            {"item_id": "pizza_box_lid", "stock": 1},
            {"item_id": "rubber_band_bracelet", "stock": 1},
        ],
    },
}
