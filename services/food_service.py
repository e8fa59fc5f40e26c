from typing import Any, List, Optional
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import Food
from domain.pagination import Page, PageRequest
from domain.schemas import FoodCreate, FoodUpdate, FoodResponse, FoodSummary
from domain.timestamps import to_epoch_ms, utc_now
from repositories import FoodRepository, FoodWithCounts
from services.food_summary_cache import FoodSummaryCache
from app.exceptions import NotFoundError

logger = logging.getLogger("petmeal.foods")


class FoodService:
    @staticmethod
    def parse_archived_filter(raw: Any) -> Optional[bool]:
        """"true"/"false" in any case and padding; anything else means no filter."""
        if not isinstance(raw, str):
            return None
        normalized = raw.strip().lower()
        if normalized == "true":
            return True
        if normalized == "false":
            return False
        return None

    @staticmethod
    def to_response(row: FoodWithCounts) -> FoodResponse:
        food = row.food
        return FoodResponse(
            id=food.id,
            name=food.name,
            preference=food.preference,
            notes=food.notes or "",
            inventory_quantity=food.inventory_quantity,
            archived=bool(food.archived),
            added_at=to_epoch_ms(food.created_at),
            phosphorus_dmb=food.phosphorus_dmb,
            protein_dmb=food.protein_dmb,
            fat_dmb=food.fat_dmb,
            fiber_dmb=food.fiber_dmb,
            meal_count=row.meal_count,
            meal_comment_count=row.meal_comment_count,
        )

    @staticmethod
    def list_foods(
        db: Session,
        page_request: PageRequest,
        archived: Optional[bool] = None,
        counts_follow_archived_filter: bool = False,
    ) -> Page[FoodResponse]:
        """
        One page of the food catalog with per-food meal counts.

        Args:
            db: Database session
            page_request: Parsed limit/cursor/offset
            archived: Only foods with this archived flag, when set
            counts_follow_archived_filter: Count only meals of foods matching
                ``archived`` instead of every meal of the food

        Returns:
            Page[FoodResponse]: items, has_more and next_cursor
        """
        page = FoodRepository(db).list_page(
            page_request, archived, counts_follow_archived_filter
        )
        return Page(
            [FoodService.to_response(row) for row in page.items],
            page.has_more,
            page.next_cursor,
        )

    @staticmethod
    def create_food(
        db: Session, payload: FoodCreate, cache: FoodSummaryCache = None
    ) -> FoodResponse:
        """
        Insert a food; omitted optional fields take their defaults
        (empty notes, zero inventory and nutrition, not archived).
        """
        values = payload.model_dump(exclude_unset=True, exclude_none=True)
        now = utc_now()
        food = Food(
            name=values.pop("name"),
            preference=values.pop("preference"),
            notes=values.pop("notes", ""),
            inventory_quantity=values.pop("inventory_quantity", 0),
            archived=values.pop("archived", False),
            created_at=now,
            updated_at=now,
            **values,
        )
        food = FoodRepository(db).create(food)
        logger.info(f"Food created: {food.id} ({food.name})")
        if cache is not None:
            cache.invalidate()
        return FoodService.to_response(FoodWithCounts(food))

    @staticmethod
    def update_food(
        db: Session,
        food_id: uuid.UUID,
        payload: FoodUpdate,
        cache: FoodSummaryCache = None,
    ) -> None:
        """Write only the supplied fields and restamp updated_at."""
        values = payload.model_dump(exclude_unset=True)
        values["updated_at"] = utc_now()
        if not FoodRepository(db).update_fields(food_id, values):
            raise NotFoundError(f"Food not found: {food_id}")
        logger.info(f"Food updated: {food_id} fields={sorted(values)}")
        if cache is not None:
            cache.invalidate()

    @staticmethod
    def delete_food(
        db: Session, food_id: uuid.UUID, cache: FoodSummaryCache = None
    ) -> None:
        """
        Hard delete a food.

        Raises:
            ConflictError: If meals still reference the food
            NotFoundError: If no food has that id
        """
        if not FoodRepository(db).delete_by_id(food_id):
            raise NotFoundError(f"Food not found: {food_id}")
        logger.info(f"Food deleted: {food_id}")
        if cache is not None:
            cache.invalidate()

    @staticmethod
    def get_food_summaries(
        db: Session, cache: FoodSummaryCache = None
    ) -> List[FoodSummary]:
        def load() -> List[FoodSummary]:
            return [
                FoodSummary.model_validate(food)
                for food in FoodRepository(db).list_active_summaries()
            ]

        if cache is None:
            return load()
        return cache.get(load)
