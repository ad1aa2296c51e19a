"""Media-processing request pipeline."""

from .processing_service import ProcessingService
from .thumbnails import ThumbnailExtractor
from .transcoder import TranscodeOrchestrator

__all__ = ["ProcessingService", "ThumbnailExtractor", "TranscodeOrchestrator"]
