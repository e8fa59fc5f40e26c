"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.food_schemas import (
    FoodCreate,
    FoodUpdate,
    FoodResponse,
    FoodListResponse,
    FoodSummary,
    FoodSummaryListResponse,
)
from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealFood,
    MealResponse,
    MealListResponse,
)
from domain.schemas.validation import (
    format_validation_errors,
    field_errors_from_details,
)

__all__ = [
    # Food schemas
    "FoodCreate",
    "FoodUpdate",
    "FoodResponse",
    "FoodListResponse",
    "FoodSummary",
    "FoodSummaryListResponse",
    # Meal schemas
    "MealCreate",
    "MealUpdate",
    "MealFood",
    "MealResponse",
    "MealListResponse",
    # Error formatting
    "format_validation_errors",
    "field_errors_from_details",
]
