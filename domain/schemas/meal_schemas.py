from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from app.config import Settings, settings as default_settings
from domain.enums import MealTime, Preference
from domain.schemas.validation import (
    check_amount,
    check_uuid_format,
    parse_meal_date,
    reject_null,
)


def context_settings(info: ValidationInfo) -> Settings:
    """Settings passed in the validation context, else the process defaults.

    Routes validate with ``context={"settings": app.state.settings}``.
    """
    context = info.context or {}
    return context.get("settings") or default_settings


class _MealPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    @field_validator("meal_date", mode="before", check_fields=False)
    @classmethod
    def meal_date_in_range(cls, v, info: ValidationInfo):
        return parse_meal_date(v, context_settings(info).min_meal_date)

    @field_validator("food_id", mode="before", check_fields=False)
    @classmethod
    def food_id_format(cls, v):
        if v is None:
            return v
        return check_uuid_format(v)

    @field_validator("amount", check_fields=False)
    @classmethod
    def amount_format(cls, v, info: ValidationInfo):
        if v is None:
            return v
        return check_amount(v, context_settings(info).amount_unit_required)


class MealCreate(_MealPayload):
    meal_date: date
    meal_time: MealTime
    food_id: UUID
    amount: str = Field(..., min_length=1, max_length=50, strict=True)
    notes: Optional[str] = Field(None, max_length=500, strict=True)


class MealUpdate(_MealPayload):
    """Partial update; at least one field, each validated as on create."""

    meal_date: Optional[date] = None
    meal_time: Optional[MealTime] = None
    food_id: Optional[UUID] = None
    amount: Optional[str] = Field(None, min_length=1, max_length=50, strict=True)
    notes: Optional[str] = Field(None, max_length=500, strict=True)

    @model_validator(mode="before")
    @classmethod
    def at_least_one_field(cls, data):
        if isinstance(data, dict) and not data:
            raise ValueError("At least one field must be provided for update")
        return data

    @field_validator("meal_time", "food_id", "amount", mode="before")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class MealFood(BaseModel):
    id: UUID
    name: str
    preference: Preference

    model_config = ConfigDict(from_attributes=True)


class MealResponse(BaseModel):
    id: UUID
    meal_date: date
    meal_time: MealTime
    food_id: UUID
    food: Optional[MealFood] = None
    amount: str
    notes: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MealListResponse(BaseModel):
    meals: List[MealResponse]
    has_more: bool
    next_cursor: Optional[int] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
