"""
Meal Repository - Data access layer for the meal log
"""

from datetime import timedelta
from typing import List
from sqlalchemy import Select, case, select
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.enums import MealTime, PaginationMode
from domain.models import Meal
from domain.timestamps import from_epoch_ms, to_epoch_ms
from domain.pagination import Page, PageRequest, cursor_window, offset_window

# Slot order by declaration (morning before evening), not alphabetically
MEAL_TIME_ORDER = case(
    {member.value: position for position, member in enumerate(MealTime)},
    value=Meal.meal_time,
    else_=len(MealTime),
)


def _created_key(meal: Meal) -> int:
    return to_epoch_ms(meal.created_at)


class MealRepository(BaseRepository[Meal]):
    """Repository for meal log data access"""

    create_conflict_message = "A meal for this food is already logged at that date and time"
    update_conflict_message = create_conflict_message

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def base_query(self) -> Select:
        return select(Meal).options(joinedload(Meal.food))

    def get_with_food(self, meal_id) -> Meal:
        return self.db.scalars(self.base_query().where(Meal.id == meal_id)).first()

    def list_page(self, page_request: PageRequest) -> Page[Meal]:
        """
        Page of meals with their food.

        Cursor mode walks newest-logged first (the cursor is created_at);
        offset mode keeps the calendar view order: latest day first,
        morning before evening.
        """
        query = self.base_query()

        if page_request.mode == PaginationMode.OFFSET:
            ordered = query.order_by(
                Meal.meal_date.desc(),
                MEAL_TIME_ORDER.asc(),
                Meal.created_at.desc(),
                Meal.id.desc(),
            )
            meals = self._fetch(
                ordered.offset(page_request.offset).limit(page_request.limit)
            )
            return offset_window(meals, page_request.limit, _created_key)

        ordered = query.order_by(Meal.created_at.desc(), Meal.id.desc())
        if page_request.cursor is not None:
            ordered = ordered.where(Meal.created_at < page_request.cursor)
        meals = self._fetch(ordered.limit(page_request.fetch_size))

        def fetch_tied(ms: int) -> List[Meal]:
            start = from_epoch_ms(ms)
            return self._fetch(
                query.where(
                    Meal.created_at >= start,
                    Meal.created_at < start + timedelta(milliseconds=1),
                ).order_by(Meal.id.desc())
            )

        return cursor_window(
            meals, page_request.limit, _created_key, fetch_tied, page_request.max_limit
        )

    def _fetch(self, query: Select) -> List[Meal]:
        return list(self.db.scalars(query).unique())
