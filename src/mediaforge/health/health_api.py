"""Service status and health endpoints."""

from __future__ import annotations

import resource
import sys
import time

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from ..processing.responses import utc_timestamp

router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()

AVAILABLE_ROUTES = [
    "GET /",
    "GET /health",
    "POST /process",
    "POST /thumbnail",
]


class StatusResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    routes: list[str]


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "OK"
    uptime: float
    max_rss_bytes: int = Field(alias="maxRssBytes")


def _max_rss_bytes() -> int:
    usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports KiB, macOS reports bytes.
    return usage if sys.platform == "darwin" else usage * 1024


@router.get("/", response_model=StatusResponse)
async def service_status(request: Request) -> StatusResponse:
    config = request.app.state.config
    return StatusResponse(
        status="Service is running",
        timestamp=utc_timestamp(),
        environment=config.environment,
        routes=AVAILABLE_ROUTES,
    )


@router.get("/health", response_model=HealthResponse, response_model_by_alias=True)
async def health() -> HealthResponse:
    return HealthResponse(
        uptime=round(time.monotonic() - _STARTED_AT, 3),
        max_rss_bytes=_max_rss_bytes(),
    )
