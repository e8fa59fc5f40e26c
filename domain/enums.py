"""
Domain enums for PetMeal application.
Contains all enumeration types used across the domain models.
"""

import enum


class Preference(str, enum.Enum):
    """How the pet feels about a food"""

    LIKES = "likes"
    DISLIKES = "dislikes"
    UNKNOWN = "unknown"


class MealTime(str, enum.Enum):
    """Feeding slots; declaration order is the listing order"""

    MORNING = "morning"
    EVENING = "evening"


class PaginationMode(str, enum.Enum):
    CURSOR = "cursor"
    OFFSET = "offset"


# Units accepted in a meal amount, e.g. "100g", "2 cans", "1.5 cups"
AMOUNT_UNITS = (
    "g",
    "ml",
    "oz",
    "lb",
    "kg",
    "can",
    "cans",
    "cup",
    "cups",
    "tbsp",
    "tsp",
    "pouch",
    "pouches",
)
