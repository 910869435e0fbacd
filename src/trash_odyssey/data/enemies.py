"""Trash Odyssey enemy and encounter data.

Enemy records are keyed by enemy id. ``ENCOUNTERS`` lists the regular
enemies that can ambush the player at each location; bosses are started
explicitly by the story layer.
"""

ENEMIES = {
    # =========================================================================
    # Garbage Can
    # =========================================================================
    "slime_mold": {
        "name": "Slime Mold",
        "description": "A quivering green blob that used to be a sandwich.",
        "level": 1,
        "max_hp": 20,
        "attack": 6,
        "defense": 1,
        "speed": 2,
        "xp_reward": 25,
        "currency_drop": {"min_amount": 2, "max_amount": 5},
        "loot_table": [{"item_id": "stale_crumb", "chance": 0.5}],
        "ai_pattern": "aggressive",
    },
    "fruit_fly_swarm": {
        "name": "Fruit Fly Swarm",
        "description": "A buzzing cloud. Hard to hit, easy to hate.",
        "level": 1,
        "max_hp": 15,
        "attack": 6,
        "defense": 0,
        "speed": 8,
        "xp_reward": 20,
        "currency_drop": {"min_amount": 1, "max_amount": 4},
        "loot_table": [{"item_id": "stale_crumb", "chance": 0.3}],
        "ai_pattern": "random",
        "special": {"type": "evasion", "miss_chance": 0.3},
    },
    # =========================================================================
    # Backyard
    # =========================================================================
    "angry_squirrel": {
        "name": "Angry Squirrel",
        "description": "It has acorns and it has grievances.",
        "level": 2,
        "max_hp": 28,
        "attack": 8,
        "defense": 2,
        "speed": 7,
        "xp_reward": 40,
        "currency_drop": {"min_amount": 4, "max_amount": 8},
        "loot_table": [{"item_id": "ketchup_packet", "chance": 0.3}],
        "ai_pattern": "aggressive",
        "special": {"type": "nut_throw", "chance": 0.4, "defense_ignore": 0.5},
    },
    "crow": {
        "name": "Crow",
        "description": "Glossy, clever, and eyeing your pockets.",
        "level": 2,
        "max_hp": 24,
        "attack": 7,
        "defense": 2,
        "speed": 9,
        "xp_reward": 35,
        "currency_drop": {"min_amount": 5, "max_amount": 10},
        "loot_table": [{"item_id": "twist_tie_ring", "chance": 0.1}],
        "ai_pattern": "random",
        "special": {"type": "steal_item", "chance": 0.25},
    },
    "wasp": {
        "name": "Wasp",
        "description": "Striped, furious, and carrying venom.",
        "level": 2,
        "max_hp": 18,
        "attack": 7,
        "defense": 1,
        "speed": 10,
        "xp_reward": 30,
        "currency_drop": {"min_amount": 3, "max_amount": 6},
        "ai_pattern": "aggressive",
        "special": {"type": "poison", "chance": 0.5, "damage": 2, "duration": 3},
    },
    "feral_cat": {
        "name": "Feral Cat",
        "description": "Crouched in the hedge, tail twitching.",
        "level": 3,
        "max_hp": 32,
        "attack": 9,
        "defense": 3,
        "speed": 9,
        "xp_reward": 55,
        "currency_drop": {"min_amount": 6, "max_amount": 12},
        "loot_table": [{"item_id": "ketchup_packet", "chance": 0.4}],
        "ai_pattern": "aggressive",
        "special": {"type": "pounce", "damage_multiplier": 2},
    },
    # =========================================================================
    # Garden
    # =========================================================================
    "garden_snake": {
        "name": "Garden Snake",
        "description": "Long, cool, and looking for something to squeeze.",
        "level": 3,
        "max_hp": 34,
        "attack": 8,
        "defense": 3,
        "speed": 5,
        "xp_reward": 50,
        "currency_drop": {"min_amount": 5, "max_amount": 10},
        "ai_pattern": "defensive",
        "special": {"type": "constrict", "chance": 0.4, "damage": 3, "duration": 2},
    },
    "lawn_sprinkler": {
        "name": "Possessed Lawn Sprinkler",
        "description": "Tick-tick-tick-tick... FWOOSH.",
        "level": 3,
        "max_hp": 30,
        "attack": 7,
        "defense": 5,
        "speed": 3,
        "xp_reward": 45,
        "currency_drop": {"min_amount": 4, "max_amount": 9},
        "loot_table": [{"item_id": "soy_sauce_packet", "chance": 0.25}],
        "ai_pattern": "defensive",
        "special": {"type": "splash_damage", "chance": 0.4, "damage": 6},
    },
    "rabid_raccoon": {
        "name": "Rabid Raccoon",
        "description": "Foaming at the mouth, masked like a bandit.",
        "level": 4,
        "max_hp": 40,
        "attack": 11,
        "defense": 3,
        "speed": 7,
        "xp_reward": 70,
        "currency_drop": {"min_amount": 8, "max_amount": 14},
        "loot_table": [
            {"item_id": "ketchup_packet", "chance": 0.4},
            {"item_id": "mustard_packet", "chance": 0.2},
        ],
        "ai_pattern": "aggressive",
        "special": {"type": "rabid_bite", "chance": 0.3, "damage_multiplier": 1.5},
    },
    # =========================================================================
    # Shed
    # =========================================================================
    "possessed_wrench": {
        "name": "Possessed Wrench",
        "description": "It rattles on the workbench, then launches itself.",
        "level": 4,
        "max_hp": 36,
        "attack": 10,
        "defense": 6,
        "speed": 4,
        "xp_reward": 65,
        "currency_drop": {"min_amount": 8, "max_amount": 15},
        "ai_pattern": "defensive",
        "special": {"type": "wrench_throw", "chance": 0.35, "damage_multiplier": 1.5},
    },
    # =========================================================================
    # Minions
    # =========================================================================
    "sewer_rat": {
        "name": "Sewer Rat",
        "description": "One of the Rat King's many subjects.",
        "level": 2,
        "max_hp": 10,
        "attack": 5,
        "defense": 0,
        "speed": 6,
        "xp_reward": 5,
        "ai_pattern": "aggressive",
    },
    # =========================================================================
    # Bosses
    # =========================================================================
    "garden_gnome": {
        "name": "Garden Gnome",
        "description": "Ceramic, smiling, holding a tiny hammer with intent.",
        "level": 4,
        "max_hp": 60,
        "attack": 10,
        "defense": 6,
        "speed": 2,
        "xp_reward": 120,
        "currency_drop": {"min_amount": 15, "max_amount": 25},
        "loot_table": [{"item_id": "moldy_bread", "chance": 0.5}],
        "ai_pattern": "defensive",
        "special": {"type": "crushing_blow", "chance": 0.3, "damage_multiplier": 2},
        "is_boss": True,
        "boss_intro": [
            "The gnome's painted smile does not move.",
            "But its hammer does.",
        ],
    },
    "rat_king": {
        "name": "Rat King",
        "description": "A tangle of tails beneath a bottle-cap crown.",
        "level": 6,
        "max_hp": 90,
        "attack": 12,
        "defense": 5,
        "speed": 6,
        "xp_reward": 250,
        "currency_drop": {"min_amount": 30, "max_amount": 50},
        "loot_table": [{"item_id": "rat_crown", "chance": 1.0}],
        "ai_pattern": "random",
        "special": {
            "type": "summon_minions",
            "summon_id": "sewer_rat",
            "summon_interval": 2,
            "summon_count": 2,
        },
        "is_boss": True,
        "boss_intro": [
            "Squeaking rises from the drain.",
            "Dozens of eyes. One crown.",
            "\"BOW BEFORE YOUR KING.\"",
        ],
    },
    "hungry_dog": {
        "name": "Hungry Dog",
        "description": "Enormous, drooling, and staring at you like you are lunch. You are.",
        "level": 8,
        "max_hp": 150,
        "attack": 15,
        "defense": 7,
        "speed": 8,
        "xp_reward": 500,
        "currency_drop": {"min_amount": 60, "max_amount": 100},
        "loot_table": [{"item_id": "bbq_skewer", "chance": 1.0}],
        "ai_pattern": "aggressive",
        "phases": [
            {
                "health_threshold": 0.5,
                "special": {"type": "bite", "damage_multiplier": 2, "chance": 0.5},
                "phase_message": "The Hungry Dog's eyes narrow. It bares its teeth!",
            },
            {
                "health_threshold": 0.25,
                "special": {"type": "frenzy"},
                "phase_message": "The Hungry Dog goes into a FRENZY!",
                "attack_bonus": 2,
            },
        ],
        "is_boss": True,
        "boss_intro": [
            "The shed door creaks open.",
            "Something large breathes in the dark.",
            "It smells bread.",
        ],
    },
}

ENCOUNTERS = {
    "garbage_can_start": ["slime_mold", "fruit_fly_swarm"],
    "backyard": ["angry_squirrel", "crow", "wasp", "feral_cat"],
    "garden": ["garden_snake", "lawn_sprinkler", "rabid_raccoon"],
    "shed": ["possessed_wrench", "rabid_raccoon"],
}
