"""
Read-through cache of active food summaries used to fill pick lists.

One instance lives on ``app.state``. Entries are stamped with the version
current when they were loaded; ``invalidate`` bumps the version so the next
read reloads. A load that races with an invalidation is returned to its
caller but not stored.
"""

import logging
import threading
from typing import Callable, List, Optional

from domain.schemas import FoodSummary

logger = logging.getLogger("petmeal.cache")


class FoodSummaryCache:
    def __init__(self):
        self._lock = threading.Lock()
        self._version = 0
        self._cached_version: Optional[int] = None
        self._items: List[FoodSummary] = []

    @property
    def version(self) -> int:
        return self._version

    @property
    def is_fresh(self) -> bool:
        with self._lock:
            return self._cached_version == self._version

    def get(self, loader: Callable[[], List[FoodSummary]]) -> List[FoodSummary]:
        with self._lock:
            if self._cached_version == self._version:
                return list(self._items)
            version = self._version

        items = list(loader())

        with self._lock:
            if self._version == version:
                self._items = items
                self._cached_version = version
        logger.debug(f"Food summaries loaded at version {version}: {len(items)} items")
        return list(items)

    def invalidate(self) -> None:
        with self._lock:
            self._version += 1
