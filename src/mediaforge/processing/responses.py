"""Response assembly: data URI payloads and JSON bodies."""

from __future__ import annotations

import base64
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fastapi import status

from ..ingest.ingest_errors import FilesystemError, ProcessingError
from .processing_models import ProcessingResult, ThumbnailResult
from .processing_schemas import ErrorResponse, ProcessResponse, ThumbnailResponse

ERROR_MESSAGES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "No video file received",
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: "Uploaded file is too large",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal server error",
}


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and ``Z`` suffix."""
    current = now or datetime.now(timezone.utc)
    return current.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def encode_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def read_data_uri(path: Path, mime_type: str) -> tuple[str, int]:
    """Read ``path`` and return its data URI and byte size."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FilesystemError(f"Could not read {path.name}: {exc}") from exc
    return encode_data_uri(data, mime_type), len(data)


def build_process_body(result: ProcessingResult, *, now: datetime | None = None) -> dict[str, Any]:
    body = ProcessResponse(
        original_name=result.original_name,
        original_size=result.original_size,
        processed_size=result.processed_size,
        processed_video=result.processed_video_payload,
        thumbnail=result.thumbnail_payload,
        timestamp=utc_timestamp(now),
    )
    return body.model_dump(by_alias=True)


def build_thumbnail_body(result: ThumbnailResult, *, now: datetime | None = None) -> dict[str, Any]:
    body = ThumbnailResponse(
        thumbnail=result.thumbnail_payload,
        size=result.size,
        timestamp=utc_timestamp(now),
    )
    return body.model_dump()


def build_error_body(
    status_code: int,
    category: str,
    details: str,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    body = ErrorResponse(
        error=ERROR_MESSAGES.get(status_code, ERROR_MESSAGES[500]),
        category=category,
        details=details,
        timestamp=utc_timestamp(now),
    )
    return body.model_dump()


def error_for_exception(exc: ProcessingError, *, now: datetime | None = None) -> tuple[int, dict[str, Any]]:
    """Select the HTTP status and body for a processing failure."""
    details = exc.details or exc.__class__.__name__
    return exc.status_code, build_error_body(exc.status_code, exc.reason.value, details, now=now)
