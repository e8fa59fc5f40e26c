"""Health check route"""

from fastapi import APIRouter, Depends
import logging

from api.dependencies import get_settings
from app.config import Settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("petmeal.api.health")


@router.get("/health-check")
def health_check(app_settings: Settings = Depends(get_settings)):
    """Basic health check endpoint"""
    return {"status": "ok", "service": app_settings.app_name}
