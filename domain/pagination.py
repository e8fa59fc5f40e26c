"""
Pagination engine for list endpoints.

Two windowing strategies are supported:

* cursor (canonical): rows ordered newest first by ``created_at``; the cursor
  is the epoch-millisecond ``created_at`` of the last row returned and the
  next page holds rows strictly older than it. ``limit + 1`` rows are fetched
  so ``has_more`` is exact.
* offset (legacy): ``limit``/``offset`` with ``has_more = len(rows) == limit``.
  That heuristic reports a phantom extra page when exactly ``limit`` rows
  remain; clients see one empty page at the end.

Query parameters are parsed leniently: a malformed limit falls back to the
default and a malformed cursor is treated as absent, never as an error.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from domain.enums import PaginationMode
from domain.timestamps import from_epoch_ms

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 500

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

logger = logging.getLogger("petmeal.pagination")


@dataclass
class PageRequest:
    """Parsed window bounds for one list request"""

    limit: int = DEFAULT_PAGE_SIZE
    cursor: Optional[datetime] = None
    offset: Optional[int] = None
    max_limit: int = MAX_PAGE_SIZE

    @property
    def mode(self) -> PaginationMode:
        if self.cursor is None and self.offset is not None:
            return PaginationMode.OFFSET
        return PaginationMode.CURSOR

    @property
    def fetch_size(self) -> int:
        """Rows to ask the store for"""
        if self.mode == PaginationMode.CURSOR:
            return self.limit + 1
        return self.limit


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[int] = None


def parse_int_prefix(raw: Any) -> Optional[int]:
    """Leading integer of a query value ("25abc" -> 25), or None."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


def parse_limit(
    raw: Any, default: int = DEFAULT_PAGE_SIZE, maximum: int = MAX_PAGE_SIZE
) -> int:
    """Clamp to [1, maximum]; anything non-numeric yields the default."""
    value = parse_int_prefix(raw)
    if value is None:
        value = default
    return max(1, min(value, maximum))


def parse_cursor(raw: Any) -> Optional[datetime]:
    """Positive epoch-millisecond cursor as an aware datetime; otherwise None."""
    value = parse_int_prefix(raw)
    if value is None or value <= 0:
        return None
    return from_epoch_ms(value)


def parse_offset(raw: Any) -> Optional[int]:
    """None when the parameter is absent, else a non-negative offset."""
    if raw is None:
        return None
    value = parse_int_prefix(raw)
    return max(0, value or 0)


def build_page_request(
    limit: Any = None,
    cursor: Any = None,
    offset: Any = None,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> PageRequest:
    return PageRequest(
        limit=parse_limit(limit, default_limit, max_limit),
        cursor=parse_cursor(cursor),
        offset=parse_offset(offset),
        max_limit=max_limit,
    )


def cursor_window(
    rows: Sequence[T],
    limit: int,
    key: Callable[[T], int],
    fetch_tied: Optional[Callable[[int], Sequence[T]]] = None,
    max_size: int = MAX_PAGE_SIZE,
) -> Page[T]:
    """
    Cut a page from ``limit + 1`` rows ordered by ``key`` descending.

    A page never ends in the middle of a run of rows sharing one key value:
    with a strict ``< cursor`` filter the unreturned rows of that run would
    be skipped. Trailing tied rows are pushed to the next page instead; if
    the whole page is one run, ``fetch_tied`` supplies every row of it.

    Args:
        rows: Up to ``limit + 1`` rows in key-descending order
        limit: Page size requested by the caller
        key: Epoch-millisecond ordering key of a row
        fetch_tied: Loads all rows whose key equals the given value
        max_size: Largest page the caller may request; a tied run returned
            whole above this size is logged as a warning

    Returns:
        Page with ``next_cursor`` set to the key of the last returned row
    """
    if len(rows) <= limit:
        items = list(rows)
        return Page(items, False, key(items[-1]) if items else None)

    items = list(rows[:limit])
    boundary = key(rows[limit])
    if key(items[-1]) == boundary:
        kept = [row for row in items if key(row) != boundary]
        if kept:
            items = kept
        elif fetch_tied is not None:
            items = list(fetch_tied(boundary))
            if len(items) > max_size:
                logger.warning(
                    f"Returning {len(items)} rows created at {boundary} ms in one page "
                    f"(limit {limit}, max {max_size})"
                )
    return Page(items, True, key(items[-1]))


def offset_window(rows: Sequence[T], limit: int, key: Callable[[T], int]) -> Page[T]:
    items = list(rows)
    return Page(items, len(items) == limit, key(items[-1]) if items else None)
