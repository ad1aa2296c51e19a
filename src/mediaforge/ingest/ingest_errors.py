"""Request-level exceptions shared by intake, storage and processing."""

from __future__ import annotations

from .ingest_models import FailureReason


class ProcessingError(Exception):
    """Base class for request-level processing errors."""

    status_code: int = 500
    reason: FailureReason = FailureReason.INTERNAL_ERROR

    def __init__(self, details: str = "") -> None:
        super().__init__(details)
        self.details = details


class MissingFileError(ProcessingError):
    """Raised when the request carries no video file part."""

    status_code = 400
    reason = FailureReason.MISSING_FILE


class PayloadTooLargeError(ProcessingError):
    """Raised when the upload exceeds the configured size ceiling."""

    status_code = 413
    reason = FailureReason.PAYLOAD_TOO_LARGE


class FilesystemError(ProcessingError):
    """Raised for unexpected read/write failures on temporary paths."""

    reason = FailureReason.FILESYSTEM_ERROR
