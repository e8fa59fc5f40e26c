"""
Meal log model.
"""

from sqlalchemy import (
    Column,
    Text,
    Date,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base
from domain.models.food import _enum_values
from domain.enums import MealTime
from domain.timestamps import utc_now


class Meal(Base):
    """One food served at one feeding slot on one day"""

    __tablename__ = "meals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    meal_date = Column(Date, nullable=False)
    meal_time = Column(
        SQLEnum(
            MealTime,
            name="meal_time_type",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    food_id = Column(
        Uuid,
        ForeignKey("foods.id", ondelete="RESTRICT"),
        nullable=False,
    )
    amount = Column(Text, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    food = relationship("Food", back_populates="meals")

    __table_args__ = (
        UniqueConstraint(
            "meal_date", "meal_time", "food_id", name="meals_date_time_unique"
        ),
        Index("idx_meals_food_ids", "food_id"),
        Index("idx_meals_created_at", "created_at"),
    )
