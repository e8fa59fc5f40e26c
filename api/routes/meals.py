"""Meal log routes"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from api.dependencies import (
    get_db,
    get_page_request,
    get_settings,
    require_session,
    validated_body,
)
from api.responses import success_body
from app.config import Settings
from domain.pagination import PageRequest
from domain.schemas import MealCreate, MealUpdate, MealResponse, MealListResponse
from services import MealService

router = APIRouter(
    prefix="/meals", tags=["Meals"], dependencies=[Depends(require_session)]
)
logger = logging.getLogger("petmeal.api.meals")


@router.get("", response_model=MealListResponse)
def list_meals(
    response: Response,
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """
    List logged meals with their food.

    With a cursor (or no paging parameters) meals come newest-logged first
    and `nextCursor` continues the walk. With `offset` they come in calendar
    order: latest day first, morning before evening.
    """
    page = MealService.list_meals(db, page_request)
    response.headers["Cache-Control"] = app_settings.list_cache_control
    return MealListResponse(
        meals=page.items, has_more=page.has_more, next_cursor=page.next_cursor
    )


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    payload: MealCreate = Depends(validated_body(MealCreate)),
    db: Session = Depends(get_db),
):
    """Log a meal; one entry per food, date and time slot"""
    return MealService.create_meal(db, payload)


@router.patch("/{meal_id}")
def update_meal(
    meal_id: UUID,
    payload: MealUpdate = Depends(validated_body(MealUpdate)),
    db: Session = Depends(get_db),
):
    """Update the supplied fields of a meal"""
    MealService.update_meal(db, meal_id, payload)
    return success_body()


@router.delete("/{meal_id}")
def delete_meal(meal_id: UUID, db: Session = Depends(get_db)):
    """Delete a meal"""
    MealService.delete_meal(db, meal_id)
    return success_body()
