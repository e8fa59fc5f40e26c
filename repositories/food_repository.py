"""
Food Repository - Data access layer for the food catalog and its meal counts
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional
from sqlalchemy import Select, and_, case, func, select
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import PaginationMode
from domain.models import Food, Meal
from domain.timestamps import from_epoch_ms, to_epoch_ms
from domain.pagination import Page, PageRequest, cursor_window, offset_window


@dataclass
class FoodWithCounts:
    food: Food
    meal_count: int = 0
    meal_comment_count: int = 0


def _created_key(row: FoodWithCounts) -> int:
    return to_epoch_ms(row.food.created_at)


class FoodRepository(BaseRepository[Food]):
    """Repository for food data access"""

    delete_conflict_message = "Cannot delete food that is referenced by meals"

    def __init__(self, db: Session):
        super().__init__(db, Food)

    def meal_counts_subquery(self, archived: Optional[bool] = None):
        """
        Per-food meal totals from one grouped scan of the meals table.

        Both counts come out of the same GROUP BY, so a response never pairs
        a total and a commented count taken at different moments.

        Args:
            archived: When set, only count meals of foods with that archived flag
        """
        has_comment = case(
            (and_(Meal.notes.isnot(None), Meal.notes != ""), 1),
        )
        query = select(
            Meal.food_id.label("food_id"),
            func.count().label("total_count"),
            func.count(has_comment).label("comment_count"),
        )
        if archived is not None:
            query = query.join(Food, Food.id == Meal.food_id).where(
                Food.archived == archived
            )
        return query.group_by(Meal.food_id).subquery("meal_counts")

    def listing_query(
        self,
        archived: Optional[bool] = None,
        counts_follow_archived_filter: bool = False,
    ) -> Select:
        """Foods left-joined to their meal counts, zero when a food has no meals"""
        counts = self.meal_counts_subquery(
            archived if counts_follow_archived_filter else None
        )
        query = select(
            Food,
            func.coalesce(counts.c.total_count, 0).label("meal_count"),
            func.coalesce(counts.c.comment_count, 0).label("meal_comment_count"),
        ).outerjoin(counts, counts.c.food_id == Food.id)
        if archived is not None:
            query = query.where(Food.archived == archived)
        return query

    def list_page(
        self,
        page_request: PageRequest,
        archived: Optional[bool] = None,
        counts_follow_archived_filter: bool = False,
    ) -> Page[FoodWithCounts]:
        """Newest-first page of foods with meal counts"""
        query = self.listing_query(archived, counts_follow_archived_filter)
        ordered = query.order_by(Food.created_at.desc(), Food.id.desc())

        if page_request.mode == PaginationMode.OFFSET:
            rows = self._fetch(
                ordered.offset(page_request.offset).limit(page_request.limit)
            )
            return offset_window(rows, page_request.limit, _created_key)

        if page_request.cursor is not None:
            ordered = ordered.where(Food.created_at < page_request.cursor)
        rows = self._fetch(ordered.limit(page_request.fetch_size))

        def fetch_tied(ms: int) -> List[FoodWithCounts]:
            start = from_epoch_ms(ms)
            return self._fetch(
                query.where(
                    Food.created_at >= start,
                    Food.created_at < start + timedelta(milliseconds=1),
                ).order_by(Food.id.desc())
            )

        return cursor_window(
            rows, page_request.limit, _created_key, fetch_tied, page_request.max_limit
        )

    def get_with_counts(self, food_id) -> Optional[FoodWithCounts]:
        rows = self._fetch(self.listing_query().where(Food.id == food_id))
        return rows[0] if rows else None

    def list_active_summaries(self) -> List[Food]:
        """Non-archived foods by name, for pick lists"""
        return list(
            self.db.scalars(
                select(Food)
                .where(Food.archived.is_(False))
                .order_by(Food.name, Food.id)
            )
        )

    def _fetch(self, query: Select) -> List[FoodWithCounts]:
        return [
            FoodWithCounts(food, int(meal_count), int(meal_comment_count))
            for food, meal_count, meal_comment_count in self.db.execute(query)
        ]
