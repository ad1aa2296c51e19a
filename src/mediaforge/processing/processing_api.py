"""HTTP routes for video processing."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse

from ..ingest.ingest_errors import ProcessingError
from .processing_schemas import ErrorResponse, ProcessResponse, ThumbnailResponse
from .processing_service import ProcessingService
from .responses import build_process_body, build_thumbnail_body, error_for_exception

router = APIRouter(tags=["processing"])
logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_processing_service(request: Request) -> ProcessingService:
    """Fetch processing service from application state."""
    try:
        return request.app.state.processing_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("ProcessingService is not configured") from exc


def _failure_response(exc: ProcessingError) -> JSONResponse:
    status_code, body = error_for_exception(exc)
    return JSONResponse(status_code=status_code, content=body)


@router.post(
    "/process",
    response_model=ProcessResponse,
    responses=_ERROR_RESPONSES,
)
async def process_video(
    video: UploadFile | None = File(None),
    overlay_text: str | None = Form(None),
    service: ProcessingService = Depends(get_processing_service),
) -> JSONResponse:
    """Transcode the uploaded video and return it inline with a thumbnail."""
    logger.info(
        "processing.request.received",
        extra={"operation": "process", "has_file": video is not None},
    )
    try:
        result = await service.process_upload(video, overlay_text)
    except ProcessingError as exc:
        return _failure_response(exc)
    return JSONResponse(content=build_process_body(result))


@router.post(
    "/thumbnail",
    response_model=ThumbnailResponse,
    responses=_ERROR_RESPONSES,
)
async def generate_thumbnail(
    video: UploadFile | None = File(None),
    service: ProcessingService = Depends(get_processing_service),
) -> JSONResponse:
    """Extract a single still frame from the uploaded video."""
    logger.info(
        "processing.request.received",
        extra={"operation": "thumbnail", "has_file": video is not None},
    )
    try:
        result = await service.thumbnail_upload(video)
    except ProcessingError as exc:
        return _failure_response(exc)
    return JSONResponse(content=build_thumbnail_body(result))
