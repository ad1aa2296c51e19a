"""Engine-stage failures of the processing pipeline."""

from __future__ import annotations

from ..ingest.ingest_errors import ProcessingError
from ..ingest.ingest_models import FailureReason


class TranscodeError(ProcessingError):
    """Raised when the engine fails, times out or produces no output."""

    reason = FailureReason.TRANSCODE_FAILED


class ThumbnailError(ProcessingError):
    """Raised when no still frame could be extracted."""

    reason = FailureReason.THUMBNAIL_FAILED
