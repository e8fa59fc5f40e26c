"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.food_repository import FoodRepository, FoodWithCounts
from repositories.meal_repository import MealRepository
from repositories.session_repository import SessionRepository

__all__ = [
    "BaseRepository",
    "FoodRepository",
    "FoodWithCounts",
    "MealRepository",
    "SessionRepository",
]
