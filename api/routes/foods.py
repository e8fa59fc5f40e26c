"""Food catalog routes"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
import logging
from typing import Optional
from uuid import UUID

from api.dependencies import (
    get_db,
    get_food_summary_cache,
    get_page_request,
    get_settings,
    require_session,
)
from api.responses import success_body
from app.config import Settings
from domain.pagination import PageRequest
from domain.schemas import (
    FoodCreate,
    FoodUpdate,
    FoodResponse,
    FoodListResponse,
    FoodSummaryListResponse,
)
from services import FoodService, FoodSummaryCache

router = APIRouter(
    prefix="/foods", tags=["Foods"], dependencies=[Depends(require_session)]
)
logger = logging.getLogger("petmeal.api.foods")


@router.get("", response_model=FoodListResponse)
def list_foods(
    response: Response,
    page_request: PageRequest = Depends(get_page_request),
    archived: Optional[str] = Query(None, description="Filter by archived flag: true | false"),
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """
    List foods newest first with meal counts.

    Cursor pagination: omit `cursor` for the first page, then pass the
    returned `nextCursor` (the `addedAt` of the last food) until `hasMore`
    is false. Passing `offset` without a cursor switches to legacy offset
    pagination.
    """
    page = FoodService.list_foods(
        db,
        page_request,
        archived=FoodService.parse_archived_filter(archived),
        counts_follow_archived_filter=app_settings.meal_counts_follow_archived_filter,
    )
    response.headers["Cache-Control"] = app_settings.list_cache_control
    return FoodListResponse(
        foods=page.items, has_more=page.has_more, next_cursor=page.next_cursor
    )


@router.get("/summaries", response_model=FoodSummaryListResponse)
def list_food_summaries(
    response: Response,
    db: Session = Depends(get_db),
    cache: FoodSummaryCache = Depends(get_food_summary_cache),
    app_settings: Settings = Depends(get_settings),
):
    """Active (non-archived) foods as id/name/preference, for pick lists"""
    response.headers["Cache-Control"] = app_settings.list_cache_control
    return FoodSummaryListResponse(foods=FoodService.get_food_summaries(db, cache))


@router.post("", response_model=FoodResponse, status_code=status.HTTP_201_CREATED)
def create_food(
    payload: FoodCreate,
    db: Session = Depends(get_db),
    cache: FoodSummaryCache = Depends(get_food_summary_cache),
):
    """Add a food to the catalog"""
    return FoodService.create_food(db, payload, cache)


@router.patch("/{food_id}")
def update_food(
    food_id: UUID,
    payload: FoodUpdate,
    db: Session = Depends(get_db),
    cache: FoodSummaryCache = Depends(get_food_summary_cache),
):
    """Update the supplied fields of a food"""
    FoodService.update_food(db, food_id, payload, cache)
    return success_body()


@router.delete("/{food_id}")
def delete_food(
    food_id: UUID,
    db: Session = Depends(get_db),
    cache: FoodSummaryCache = Depends(get_food_summary_cache),
):
    """Delete a food; refused with 409 while meals reference it"""
    FoodService.delete_food(db, food_id, cache)
    return success_body()
