"""Services package - Business logic layer"""

from services.food_service import FoodService
from services.meal_service import MealService
from services.food_summary_cache import FoodSummaryCache

__all__ = [
    "FoodService",
    "MealService",
    "FoodSummaryCache",
]
