from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import Meal
from domain.pagination import Page, PageRequest
from domain.schemas import MealCreate, MealUpdate, MealFood, MealResponse
from domain.timestamps import as_utc, utc_now
from repositories import FoodRepository, MealRepository
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("petmeal.meals")


class MealService:
    @staticmethod
    def ensure_food_exists(db: Session, food_id: uuid.UUID) -> None:
        """
        Reject a meal whose food is missing before the store does.

        Raises:
            ServiceValidationError: With a ``foodId`` field error
        """
        if not FoodRepository(db).exists(food_id):
            raise ServiceValidationError(details=["foodId: Food not found"])

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        return MealResponse(
            id=meal.id,
            meal_date=meal.meal_date,
            meal_time=meal.meal_time,
            food_id=meal.food_id,
            food=MealFood.model_validate(meal.food) if meal.food else None,
            amount=meal.amount,
            notes=meal.notes or "",
            created_at=as_utc(meal.created_at),
            updated_at=as_utc(meal.updated_at),
        )

    @staticmethod
    def list_meals(db: Session, page_request: PageRequest) -> Page[MealResponse]:
        page = MealRepository(db).list_page(page_request)
        return Page(
            [MealService.to_response(meal) for meal in page.items],
            page.has_more,
            page.next_cursor,
        )

    @staticmethod
    def create_meal(db: Session, payload: MealCreate) -> MealResponse:
        """
        Log a meal.

        Raises:
            ServiceValidationError: If the food does not exist
            ConflictError: If the food is already logged for that date and time
        """
        MealService.ensure_food_exists(db, payload.food_id)

        now = utc_now()
        meal = Meal(
            meal_date=payload.meal_date,
            meal_time=payload.meal_time,
            food_id=payload.food_id,
            amount=payload.amount,
            notes=payload.notes or "",
            created_at=now,
            updated_at=now,
        )
        repo = MealRepository(db)
        meal = repo.create(meal)
        logger.info(
            f"Meal logged: {meal.id} food={meal.food_id} "
            f"{meal.meal_date.isoformat()} {meal.meal_time.value}"
        )
        return MealService.to_response(repo.get_with_food(meal.id))

    @staticmethod
    def update_meal(db: Session, meal_id: uuid.UUID, payload: MealUpdate) -> None:
        values = payload.model_dump(exclude_unset=True)
        if "food_id" in values:
            MealService.ensure_food_exists(db, values["food_id"])
        values["updated_at"] = utc_now()
        if not MealRepository(db).update_fields(meal_id, values):
            raise NotFoundError(f"Meal not found: {meal_id}")
        logger.info(f"Meal updated: {meal_id} fields={sorted(values)}")

    @staticmethod
    def delete_meal(db: Session, meal_id: uuid.UUID) -> None:
        if not MealRepository(db).delete_by_id(meal_id):
            raise NotFoundError(f"Meal not found: {meal_id}")
        logger.info(f"Meal deleted: {meal_id}")
