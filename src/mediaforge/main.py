"""FastAPI application entry point."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import register_error_handlers
from .config import AppConfig, load_config
from .dependencies import include_routers
from .health.health_api import AVAILABLE_ROUTES
from .logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()
    app = FastAPI(title="mediaforge")

    if cfg.cors_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cfg.cors_allowed_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        logger.info(
            "http.request",
            extra={"method": request.method, "path": request.url.path},
        )
        response = await call_next(request)
        logger.info(
            "http.response",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return response

    register_error_handlers(app)
    include_routers(app, cfg)

    logger.info(
        "app.configured",
        extra={
            "environment": cfg.environment,
            "upload_dir": str(cfg.media_paths.uploads),
            "output_dir": str(cfg.media_paths.outputs),
            "cors_allowed_origins": list(cfg.cors_allowed_origins),
            "routes": AVAILABLE_ROUTES,
        },
    )
    return app
