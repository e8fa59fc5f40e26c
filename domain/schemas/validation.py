"""
Shared field rules and error formatting for request schemas.

Validation failures are reported as an ordered list of ``"{field}: {message}"``
strings; ``field_errors_from_details`` folds such a list back into a
field -> message map for display.
"""

import re
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from domain.enums import AMOUNT_UNITS

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

_UNIT_GROUP = "|".join(AMOUNT_UNITS)
AMOUNT_PATTERN = re.compile(rf"^\d+(\.\d+)?\s*({_UNIT_GROUP})$", re.IGNORECASE)
AMOUNT_PATTERN_UNIT_OPTIONAL = re.compile(
    rf"^\d+(\.\d+)?\s*({_UNIT_GROUP})?$", re.IGNORECASE
)

# Locations FastAPI prepends to error paths
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}
_DETAIL_PATTERN = re.compile(r"^(?P<field>[^:]+):\s*(?P<message>.+)$")

NUTRITION_LABELS = {
    "phosphorusDmb": "Phosphorus",
    "proteinDmb": "Protein",
    "fatDmb": "Fat",
    "fiberDmb": "Fiber",
}

FRIENDLY_MESSAGES = {
    ("name", "missing"): "Food name is required",
    ("name", "string_too_short"): "Food name is required",
    ("name", "string_too_long"): "Food name must be less than 200 characters",
    ("preference", "missing"): "Preference is required",
    ("preference", "enum"): "Preference must be 'likes', 'dislikes', or 'unknown'",
    ("inventoryQuantity", "int_type"): "Inventory must be a whole number",
    ("inventoryQuantity", "int_from_float"): "Inventory must be a whole number",
    ("inventoryQuantity", "greater_than_equal"): "Inventory cannot be negative",
    ("inventoryQuantity", "less_than_equal"): "Inventory cannot exceed 999",
    ("mealTime", "enum"): "Meal time must be 'morning' or 'evening'",
    ("foodId", "uuid_parsing"): "Invalid food ID format",
    ("foodId", "uuid_type"): "Invalid food ID format",
    ("amount", "string_too_short"): "Amount is required",
    ("amount", "string_too_long"): "Amount description too long",
}
for _field, _label in NUTRITION_LABELS.items():
    FRIENDLY_MESSAGES[(_field, "greater_than_equal")] = (
        f"{_label} percentage cannot be negative"
    )
    FRIENDLY_MESSAGES[(_field, "less_than_equal")] = (
        f"{_label} percentage cannot exceed 100"
    )


def reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("Field cannot be null")
    return value


def require_number(value: Any) -> Any:
    """JSON numbers only: no strings, no booleans."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("Expected a number")
    return value


def check_uuid_format(value: Any) -> Any:
    """Hyphenated 8-4-4-4-12 form only; other spellings of a UUID are refused."""
    if isinstance(value, str) and not UUID_PATTERN.fullmatch(value):
        raise ValueError("Invalid food ID format")
    return value


def check_two_decimals(value: float) -> float:
    if Decimal(str(value)).as_tuple().exponent < -2:
        raise ValueError("Must have at most 2 decimal places")
    return value


def amount_pattern(unit_required: bool) -> "re.Pattern[str]":
    return AMOUNT_PATTERN if unit_required else AMOUNT_PATTERN_UNIT_OPTIONAL


def check_amount(value: str, unit_required: bool) -> str:
    trimmed = value.strip()
    if not amount_pattern(unit_required).match(trimmed):
        if unit_required:
            raise ValueError(
                "Amount must be a number with a unit (e.g., '100g', '2 cans', '1.5 cups')"
            )
        raise ValueError(
            "Amount must be a number with optional unit (e.g., '100g', '2 cans', '1.5 cups')"
        )
    return trimmed


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def parse_meal_date(value: Any, min_date: date, today: Optional[date] = None) -> date:
    """Parse a ``YYYY-MM-DD`` string and check it lies in [min_date, tomorrow]."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        raise ValueError("Date must be in YYYY-MM-DD format")

    latest = (today or utc_today()) + timedelta(days=1)
    if parsed < min_date or parsed > latest:
        raise ValueError(f"Date must be between {min_date.isoformat()} and tomorrow")
    return parsed


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _message(field: str, error: Dict[str, Any]) -> str:
    err_type = error.get("type", "")
    if err_type == "extra_forbidden":
        return "Unrecognized field"
    friendly = FRIENDLY_MESSAGES.get((field, err_type))
    if friendly:
        return friendly
    msg = error.get("msg", "Invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return msg


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """Render pydantic error dicts as ordered ``"{field}: {message}"`` strings."""
    details = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        details.append(f"{field}: {_message(field, error)}")
    return details


def field_errors_from_details(details: Iterable[str]) -> Dict[str, str]:
    """Map ``"{field}: {message}"`` strings to {field: message}; first one wins."""
    field_errors: Dict[str, str] = {}
    for detail in details:
        match = _DETAIL_PATTERN.match(detail)
        if not match:
            continue
        field_errors.setdefault(match.group("field"), match.group("message"))
    return field_errors
