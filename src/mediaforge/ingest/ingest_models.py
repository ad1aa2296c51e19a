"""Data structures for upload intake."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class FailureReason(StrEnum):
    """Stable error categories exposed in error bodies."""

    MISSING_FILE = "missing_file"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    TRANSCODE_FAILED = "transcode_failed"
    THUMBNAIL_FAILED = "thumbnail_failed"
    FILESYSTEM_ERROR = "filesystem_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(slots=True, frozen=True)
class UploadedAsset:
    """Accepted upload persisted to the upload directory."""

    temporary_path: Path
    declared_name: str
    byte_size: int
    declared_mime_type: str
