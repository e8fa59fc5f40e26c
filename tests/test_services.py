"""
Tests for the service layer and the food summary cache.

Covers:
- FoodService: defaults on create, partial updates, deletes, response shape
- MealService: food existence check, conflicts, partial updates
- FoodSummaryCache: read-through, invalidation, racing loads
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.enums import MealTime, Preference
from domain.pagination import PageRequest
from domain.schemas import FoodCreate, FoodSummary, FoodUpdate, MealCreate, MealUpdate
from domain.timestamps import to_epoch_ms
from repositories import FoodRepository, MealRepository
from services import FoodService, FoodSummaryCache, MealService
from test_constants import REALISTIC_FOODS
from test_fixtures import at, make_food, make_meal


def meal_create(food_id, **overrides) -> MealCreate:
    payload = {
        "mealDate": "2024-01-15",
        "mealTime": "morning",
        "foodId": str(food_id),
        "amount": "1 can",
    }
    payload.update(overrides)
    return MealCreate.model_validate(payload)


# =============================================================================
# FOOD SERVICE
# =============================================================================


def test_create_food_applies_defaults(db_session: Session):
    """
    Test creating a food with only the required fields.

    Verifies:
    - notes default to "", inventory to 0, archived to false
    - nutrition defaults to 0
    - addedAt is the creation time in epoch ms and counts start at 0
    """
    created = FoodService.create_food(
        db_session, FoodCreate.model_validate({"name": "Plain Chicken", "preference": "likes"})
    )

    assert created.name == "Plain Chicken"
    assert created.notes == ""
    assert created.inventory_quantity == 0
    assert created.archived is False
    assert created.phosphorus_dmb == 0
    assert created.meal_count == 0
    assert created.meal_comment_count == 0

    stored = FoodRepository(db_session).get_by_id(created.id)
    assert created.added_at == to_epoch_ms(stored.created_at)
    assert stored.created_at == stored.updated_at


def test_create_food_full_payload(db_session: Session):
    created = FoodService.create_food(
        db_session, FoodCreate.model_validate(REALISTIC_FOODS["renal_pate"])
    )

    assert created.inventory_quantity == 24
    assert created.phosphorus_dmb == 0.45
    assert created.protein_dmb == 32.5
    assert created.notes.startswith("Vet recommended")


def test_parse_archived_filter():
    assert FoodService.parse_archived_filter("true") is True
    assert FoodService.parse_archived_filter(" FALSE ") is False
    assert FoodService.parse_archived_filter("yes") is None
    assert FoodService.parse_archived_filter(None) is None


def test_update_food_writes_only_supplied_fields(db_session: Session):
    food = make_food(db_session, "Chicken Pate", created_at=at(0), inventory_quantity=5, notes="Keep")

    FoodService.update_food(db_session, food.id, FoodUpdate.model_validate({"inventoryQuantity": 9}))

    db_session.expire_all()
    stored = FoodRepository(db_session).get_by_id(food.id)
    assert stored.inventory_quantity == 9
    assert stored.notes == "Keep"
    assert stored.name == "Chicken Pate"
    assert to_epoch_ms(stored.created_at) == to_epoch_ms(at(0))
    assert to_epoch_ms(stored.updated_at) > to_epoch_ms(at(0))


def test_update_food_clears_notes(db_session: Session):
    food = make_food(db_session, notes="Old note")

    FoodService.update_food(db_session, food.id, FoodUpdate.model_validate({"notes": None}))

    db_session.expire_all()
    row = FoodRepository(db_session).get_with_counts(food.id)
    assert FoodService.to_response(row).notes == ""


def test_update_missing_food(db_session: Session):
    with pytest.raises(NotFoundError):
        FoodService.update_food(db_session, uuid.uuid4(), FoodUpdate.model_validate({"archived": True}))


def test_delete_food(db_session: Session):
    food = make_food(db_session)

    FoodService.delete_food(db_session, food.id)

    assert not FoodRepository(db_session).exists(food.id)
    with pytest.raises(NotFoundError):
        FoodService.delete_food(db_session, food.id)


def test_delete_food_with_meals_conflicts(db_session: Session):
    food = make_food(db_session)
    make_meal(db_session, food)

    with pytest.raises(ConflictError):
        FoodService.delete_food(db_session, food.id)


def test_list_foods_returns_responses(db_session: Session):
    food = make_food(db_session, "Turkey Stew", created_at=at(10))
    make_meal(db_session, food, notes="Loved it")

    page = FoodService.list_foods(db_session, PageRequest())

    assert page.has_more is False
    assert page.next_cursor == to_epoch_ms(at(10))
    assert page.items[0].name == "Turkey Stew"
    assert page.items[0].added_at == to_epoch_ms(at(10))
    assert page.items[0].meal_comment_count == 1


def test_food_mutations_invalidate_summary_cache(db_session: Session):
    cache = FoodSummaryCache()
    cache.get(lambda: [])
    assert cache.is_fresh

    created = FoodService.create_food(
        db_session, FoodCreate.model_validate({"name": "Beef Loaf", "preference": "unknown"}), cache
    )
    assert not cache.is_fresh

    assert [s.name for s in FoodService.get_food_summaries(db_session, cache)] == ["Beef Loaf"]
    assert cache.is_fresh

    FoodService.update_food(db_session, created.id, FoodUpdate.model_validate({"archived": True}), cache)
    assert FoodService.get_food_summaries(db_session, cache) == []

    FoodService.delete_food(db_session, created.id, cache)
    assert not cache.is_fresh


# =============================================================================
# MEAL SERVICE
# =============================================================================


def test_create_meal_returns_food(db_session: Session):
    food = make_food(db_session, "Chicken Pate", preference=Preference.LIKES)

    meal = MealService.create_meal(db_session, meal_create(food.id, notes="Finished quickly"))

    assert meal.food_id == food.id
    assert meal.food.name == "Chicken Pate"
    assert meal.food.preference == Preference.LIKES
    assert meal.meal_time == MealTime.MORNING
    assert meal.notes == "Finished quickly"
    assert meal.created_at.tzinfo is not None


def test_create_meal_notes_default_to_empty(db_session: Session):
    food = make_food(db_session)

    meal = MealService.create_meal(db_session, meal_create(food.id))

    assert meal.notes == ""


def test_create_meal_unknown_food(db_session: Session):
    with pytest.raises(ServiceValidationError) as exc_info:
        MealService.create_meal(db_session, meal_create(uuid.uuid4()))

    assert exc_info.value.details == ["foodId: Food not found"]


def test_create_meal_duplicate_slot(db_session: Session):
    food = make_food(db_session)
    MealService.create_meal(db_session, meal_create(food.id))

    with pytest.raises(ConflictError):
        MealService.create_meal(db_session, meal_create(food.id, amount="2 cans"))


def test_update_meal_partial(db_session: Session):
    food = make_food(db_session)
    meal = make_meal(db_session, food, amount="1 can", notes="")

    MealService.update_meal(db_session, meal.id, MealUpdate.model_validate({"amount": "2 cans"}))

    db_session.expire_all()
    stored = MealRepository(db_session).get_by_id(meal.id)
    assert stored.amount == "2 cans"
    assert stored.meal_date == date(2024, 1, 15)


def test_update_meal_to_unknown_food(db_session: Session):
    food = make_food(db_session)
    meal = make_meal(db_session, food)

    with pytest.raises(ServiceValidationError):
        MealService.update_meal(
            db_session, meal.id, MealUpdate.model_validate({"foodId": str(uuid.uuid4())})
        )


def test_update_and_delete_missing_meal(db_session: Session):
    with pytest.raises(NotFoundError):
        MealService.update_meal(db_session, uuid.uuid4(), MealUpdate.model_validate({"notes": "x"}))
    with pytest.raises(NotFoundError):
        MealService.delete_meal(db_session, uuid.uuid4())


def test_delete_meal_then_food(db_session: Session):
    food = make_food(db_session)
    meal = make_meal(db_session, food)

    MealService.delete_meal(db_session, meal.id)
    FoodService.delete_food(db_session, food.id)

    assert not FoodRepository(db_session).exists(food.id)


# =============================================================================
# FOOD SUMMARY CACHE
# =============================================================================


def summary(name):
    return FoodSummary(id=uuid.uuid4(), name=name, preference=Preference.LIKES)


def test_cache_loads_once_until_invalidated():
    cache = FoodSummaryCache()
    calls = []

    def loader():
        calls.append(1)
        return [summary("Chicken Pate")]

    assert [s.name for s in cache.get(loader)] == ["Chicken Pate"]
    cache.get(loader)
    assert len(calls) == 1

    cache.invalidate()
    cache.get(loader)
    assert len(calls) == 2


def test_cache_returns_copies():
    cache = FoodSummaryCache()
    items = cache.get(lambda: [summary("Chicken Pate")])
    items.clear()

    assert len(cache.get(lambda: [])) == 1


def test_cache_drops_load_that_raced_with_invalidation():
    cache = FoodSummaryCache()

    def stale_loader():
        cache.invalidate()
        return [summary("Stale")]

    assert [s.name for s in cache.get(stale_loader)] == ["Stale"]
    assert not cache.is_fresh
    assert [s.name for s in cache.get(lambda: [summary("Fresh")])] == ["Fresh"]
    assert cache.version == 1


def test_cache_loader_error_propagates():
    cache = FoodSummaryCache()

    def failing_loader():
        raise RuntimeError("database unavailable")

    with pytest.raises(RuntimeError):
        cache.get(failing_loader)
    assert not cache.is_fresh
