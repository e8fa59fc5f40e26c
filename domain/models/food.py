"""
Food catalog model.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Boolean,
    Numeric,
    DateTime,
    CheckConstraint,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base
from domain.enums import Preference
from domain.timestamps import utc_now


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Food(Base):
    """A food the pet has been offered"""

    __tablename__ = "foods"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    notes = Column(Text)
    preference = Column(
        SQLEnum(
            Preference,
            name="preference",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    inventory_quantity = Column(Integer, nullable=False, default=0)
    archived = Column(Boolean, nullable=False, default=False)
    # Nutrition information (dry matter basis, in %)
    phosphorus_dmb = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    protein_dmb = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    fat_dmb = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    fiber_dmb = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    meals = relationship("Meal", back_populates="food", passive_deletes="all")

    __table_args__ = (
        CheckConstraint(
            "inventory_quantity >= 0 AND inventory_quantity <= 999",
            name="ck_foods_inventory_range",
        ),
    )
