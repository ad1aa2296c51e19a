"""Application-wide exception handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..health.health_api import AVAILABLE_ROUTES
from ..ingest.ingest_models import FailureReason
from ..processing.responses import build_error_body

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render 404s with the list of routes; other HTTP errors pass through as JSON."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Endpoint not found",
                "path": request.url.path,
                "method": request.method,
                "availableRoutes": AVAILABLE_ROUTES,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed form input, such as a text value in the file field, as a missing file."""
    fields = sorted({str(error["loc"][-1]) for error in exc.errors() if error.get("loc")})
    logger.warning(
        "http.request.invalid",
        extra={"path": request.url.path, "method": request.method, "fields": fields},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_body(
            status.HTTP_400_BAD_REQUEST,
            FailureReason.MISSING_FILE.value,
            "No video file received",
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "http.unhandled_error",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            FailureReason.INTERNAL_ERROR.value,
            str(exc) or exc.__class__.__name__,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)


__all__ = [
    "not_found_handler",
    "register_error_handlers",
    "unhandled_error_handler",
    "validation_error_handler",
]
