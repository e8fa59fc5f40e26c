"""
Consolidated middleware for the PetMeal API
"""

import time
import logging
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.config import settings as default_settings
from app.exceptions import (
    ServiceError,
    ServiceValidationError,
    UnauthorizedError,
)
from api.responses import error_body, failure_message, validation_error_body
from domain.schemas.validation import format_validation_errors

logger = logging.getLogger("petmeal.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def expose_details(request: Request) -> bool:
    """Error-detail flag of the app serving this request"""
    app_settings = getattr(request.app.state, "settings", default_settings)
    return app_settings.should_expose_error_details()


def route_name(request: Request):
    route = request.scope.get("route")
    if route is not None:
        return getattr(route, "name", None)
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", None)


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        # Generate unique request ID
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "status_code": response.status_code,
                    "process_time": f"{process_time:.4f}s",
                },
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "error": str(exc),
                    "process_time": f"{process_time:.4f}s",
                },
                exc_info=True,
            )
            raise


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors"""
    details = format_validation_errors(exc.errors())
    logger.warning(f"Validation error on {request.url}: {details}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=validation_error_body(details, expose_details(request)),
    )


async def service_exception_handler(request: Request, exc: ServiceError):
    """Handle errors raised by services, repositories and the auth gate"""
    if isinstance(exc, UnauthorizedError):
        content = error_body(exc.message)
    elif isinstance(exc, ServiceValidationError):
        logger.warning(f"Service validation error on {request.url}: {exc.details}")
        content = validation_error_body(list(exc.details or []), expose_details(request))
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.url}: {exc.message}")
        content = error_body(exc.message, exc.details, expose_details(request))

    return JSONResponse(status_code=exc.http_status, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            failure_message(route_name(request)), str(exc), expose_details(request)
        ),
    )
