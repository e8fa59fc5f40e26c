"""API routes package"""

from . import foods, meals, health

__all__ = ["foods", "meals", "health"]
