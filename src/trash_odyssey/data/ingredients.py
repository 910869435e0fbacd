"""Act-1 ingredient powers.

Maps each ingredient the bun may carry out of Act 1 to the passive bonus
it grants in Act 2. Ingredients not listed here grant nothing.
"""

INGREDIENT_POWERS = {
    "cheese": {"def": 5},
    "bacon": {"atk": 5},
    "lettuce": {"spd": 3},
    "tomato": {"maxHp": 10},
    "avocado": {"maxHp": 15},
    "pickle": {"ability": "poison_strike"},
    "onion": {"ability": "onion_tears"},
    "special_sauce": {"ability": "heal"},
    "meat_patty": {"atk": 8},
    # Cursed
    "questionable_water": {"atk": 10, "maxHp": -5},
}
