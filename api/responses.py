"""
Error response bodies shared by the exception handlers.

Bodies are ``{"error": <message>}`` plus ``details`` (and, for validation
failures, ``fieldErrors``) when the app is configured to expose them.
"""

from typing import Any, List, Optional

from domain.schemas.validation import field_errors_from_details

VALIDATION_FAILED = "Validation failed"

# Route name -> message for unexpected failures
FAILURE_MESSAGES = {
    "list_foods": "Failed to fetch foods",
    "list_food_summaries": "Failed to fetch food summaries",
    "create_food": "Failed to create food",
    "update_food": "Failed to update food",
    "delete_food": "Failed to delete food",
    "list_meals": "Failed to fetch meals",
    "create_meal": "Failed to create meal",
    "update_meal": "Failed to update meal",
    "delete_meal": "Failed to delete meal",
}
DEFAULT_FAILURE_MESSAGE = "Request failed"


def failure_message(route_name: Optional[str]) -> str:
    return FAILURE_MESSAGES.get(route_name, DEFAULT_FAILURE_MESSAGE)


def error_body(message: str, details: Any = None, expose_details: bool = False) -> dict:
    """Create a standardized error response"""
    body: dict = {"error": message}
    if expose_details and details:
        body["details"] = details
    return body


def validation_error_body(details: List[str], expose_details: bool = False) -> dict:
    body = error_body(VALIDATION_FAILED, details, expose_details)
    if expose_details and details:
        body["fieldErrors"] = field_errors_from_details(details)
    return body


def success_body() -> dict:
    return {"success": True}
