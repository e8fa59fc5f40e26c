"""
API dependencies for dependency injection
"""

import logging
import json
from typing import Generator, Optional, Type, TypeVar
from fastapi import Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from app.config import Settings, settings as default_settings
from app.exceptions import UnauthorizedError
from domain.models import get_db_session
from domain.pagination import PageRequest, build_page_request
from repositories import SessionRepository
from services.food_summary_cache import FoodSummaryCache

logger = logging.getLogger("petmeal.auth")

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with"""
    return getattr(request.app.state, "settings", default_settings)


def get_food_summary_cache(request: Request) -> FoodSummaryCache:
    return request.app.state.food_summaries


def session_token_from_request(request: Request, cookie_name: str) -> Optional[str]:
    """Bearer token from the Authorization header, else the session cookie."""
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.cookies.get(cookie_name)


def require_session(
    request: Request,
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """
    Authentication gate for every food and meal route.

    Raises:
        UnauthorizedError: If no unexpired session matches the request's token
    """
    token = session_token_from_request(request, app_settings.session_cookie_name)
    session = SessionRepository(db).get_active(token) if token else None
    if session is None:
        logger.info(f"Rejected unauthenticated {request.method} {request.url.path}")
        raise UnauthorizedError()
    request.state.user_id = session.user_id
    return session


def get_page_request(
    limit: Optional[str] = Query(None, description="Page size (default 100, max 500)"),
    cursor: Optional[str] = Query(
        None, description="Epoch-ms createdAt of the last item already seen"
    ),
    offset: Optional[str] = Query(
        None, description="Legacy offset pagination; ignored when a cursor is given"
    ),
    app_settings: Settings = Depends(get_settings),
) -> PageRequest:
    return build_page_request(
        limit,
        cursor,
        offset,
        default_limit=app_settings.default_page_size,
        max_limit=app_settings.max_page_size,
    )


def validated_body(model: Type[ModelT]):
    """
    Body dependency that validates against the app's own settings.

    Validators that depend on configuration read ``info.context["settings"]``,
    so apps built with different settings validate the same payload
    differently.

    Usage:
        @router.post("")
        def create(payload: MealCreate = Depends(validated_body(MealCreate))):
            ...
    """

    async def dependency(
        request: Request, app_settings: Settings = Depends(get_settings)
    ) -> ModelT:
        raw = await request.body()
        try:
            data = json.loads(raw) if raw else None
        except ValueError as exc:
            raise RequestValidationError(
                [
                    {
                        "type": "json_invalid",
                        "loc": ("body", getattr(exc, "pos", 0)),
                        "msg": "JSON decode error",
                        "input": {},
                    }
                ]
            )
        try:
            return model.model_validate(data, context={"settings": app_settings})
        except ValidationError as exc:
            raise RequestValidationError(exc.errors(include_url=False))

    return dependency
