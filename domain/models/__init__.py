"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    build_engine,
    init_database,
    get_db_session,
)
from domain.models.food import Food
from domain.models.meal import Meal
from domain.models.session import AppUser, UserSession

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "build_engine",
    "init_database",
    "get_db_session",
    # Catalog and log
    "Food",
    "Meal",
    # Auth
    "AppUser",
    "UserSession",
]
