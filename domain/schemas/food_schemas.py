from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from uuid import UUID

from domain.enums import Preference
from domain.schemas.validation import (
    check_two_decimals,
    reject_null,
    require_number,
)

NUTRITION_FIELDS = ("phosphorus_dmb", "protein_dmb", "fat_dmb", "fiber_dmb")


class _FoodPayload(BaseModel):
    """Shared config: camelCase wire names, unknown keys rejected."""

    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    @field_validator(*NUTRITION_FIELDS, mode="before", check_fields=False)
    @classmethod
    def nutrition_is_number(cls, v):
        return require_number(v)

    @field_validator("inventory_quantity", mode="before", check_fields=False)
    @classmethod
    def inventory_is_number(cls, v):
        # 5.0 is a whole number; "5" and true are not numbers
        if v is None:
            return v
        return require_number(v)

    @field_validator(*NUTRITION_FIELDS, check_fields=False)
    @classmethod
    def nutrition_precision(cls, v):
        if v is None:
            return v
        return check_two_decimals(v)


class FoodCreate(_FoodPayload):
    name: str = Field(..., min_length=1, max_length=200, strict=True)
    preference: Preference
    notes: Optional[str] = Field(None, max_length=2000, strict=True)
    inventory_quantity: Optional[int] = Field(None, ge=0, le=999)
    archived: Optional[bool] = Field(None, strict=True)
    phosphorus_dmb: Optional[float] = Field(None, ge=0, le=100)
    protein_dmb: Optional[float] = Field(None, ge=0, le=100)
    fat_dmb: Optional[float] = Field(None, ge=0, le=100)
    fiber_dmb: Optional[float] = Field(None, ge=0, le=100)


class FoodUpdate(_FoodPayload):
    """Partial update; at least one field, each validated as on create."""

    name: Optional[str] = Field(None, min_length=1, max_length=200, strict=True)
    preference: Optional[Preference] = None
    notes: Optional[str] = Field(None, max_length=2000, strict=True)
    inventory_quantity: Optional[int] = Field(None, ge=0, le=999)
    archived: Optional[bool] = Field(None, strict=True)
    phosphorus_dmb: Optional[float] = Field(None, ge=0, le=100)
    protein_dmb: Optional[float] = Field(None, ge=0, le=100)
    fat_dmb: Optional[float] = Field(None, ge=0, le=100)
    fiber_dmb: Optional[float] = Field(None, ge=0, le=100)

    @model_validator(mode="before")
    @classmethod
    def at_least_one_field(cls, data):
        if isinstance(data, dict) and not data:
            raise ValueError("At least one field must be provided for update")
        return data

    @field_validator(
        "name", "preference", "inventory_quantity", "archived", mode="before"
    )
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class FoodResponse(BaseModel):
    id: UUID
    name: str
    preference: Preference
    notes: str
    inventory_quantity: int
    archived: bool
    added_at: int
    phosphorus_dmb: float
    protein_dmb: float
    fat_dmb: float
    fiber_dmb: float
    meal_count: int = 0
    meal_comment_count: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FoodListResponse(BaseModel):
    foods: List[FoodResponse]
    has_more: bool
    next_cursor: Optional[int] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FoodSummary(BaseModel):
    id: UUID
    name: str
    preference: Preference

    model_config = ConfigDict(from_attributes=True)


class FoodSummaryListResponse(BaseModel):
    foods: List[FoodSummary]
