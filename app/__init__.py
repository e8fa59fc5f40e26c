"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings, Settings, Environment
from app.exceptions import (
    ServiceError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
)

__all__ = [
    "settings",
    "Settings",
    "Environment",
    "ServiceError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
]
