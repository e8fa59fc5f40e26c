"""
Realistic test constants for the PetMeal test suite.

Values follow what owners actually type in: canned and dry food names,
dry-matter-basis nutrition from product labels and the amounts written
on a feeding chart.
"""

# =============================================================================
# FOODS - Request payloads in wire (camelCase) form
# =============================================================================

REALISTIC_FOODS = {
    "renal_pate": {
        "name": "Renal Support Chicken Pate",
        "preference": "likes",
        "notes": "Vet recommended, warm slightly before serving",
        "inventoryQuantity": 24,
        "phosphorusDmb": 0.45,
        "proteinDmb": 32.5,
        "fatDmb": 24.0,
        "fiberDmb": 1.2,
    },
    "tuna_flakes": {
        "name": "Tuna Flakes in Broth",
        "preference": "dislikes",
        "inventoryQuantity": 6,
        "phosphorusDmb": 1.1,
        "proteinDmb": 58.25,
        "fatDmb": 9.5,
        "fiberDmb": 0.8,
    },
    "dry_kibble": {
        "name": "Senior Indoor Dry Kibble",
        "preference": "unknown",
        "phosphorusDmb": 0.85,
        "proteinDmb": 36.0,
        "fatDmb": 14.0,
        "fiberDmb": 4.5,
    },
}

# =============================================================================
# MEAL AMOUNTS
# =============================================================================

VALID_AMOUNTS = [
    "100g",
    "2 cans",
    "1.5 cups",
    "3 pouches",
    "0.5 can",
    "2 CANS",
    "15 ml",
    "1 tbsp",
    "  85g  ",
]

INVALID_AMOUNTS = [
    "abc",
    "100 xyz",
    "two cans",
    "1.5.2 cups",
    "g100",
    "-5g",
]
