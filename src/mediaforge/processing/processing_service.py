"""Domain service for the media-processing request pipeline."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from fastapi import UploadFile

from ..config import MediaPaths
from ..ingest.ingest_errors import FilesystemError, ProcessingError
from .processing_errors import ThumbnailError
from ..ingest.intake import UploadIntake
from ..media.temp_resources import TempResourceScope
from .processing_models import ProcessingJob, ProcessingResult, ThumbnailResult
from .responses import read_data_uri
from .thumbnails import ThumbnailExtractor
from .transcoder import TranscodeOrchestrator

logger = logging.getLogger(__name__)

MAX_OVERLAY_CHARS = 200


def normalize_overlay_text(value: str | None) -> str | None:
    if value is None:
        return None
    text = " ".join(value.split())
    return text[:MAX_OVERLAY_CHARS] or None


@dataclass(slots=True)
class ProcessingService:
    """Coordinates intake, transcode, thumbnail and payload encoding.

    Every request runs inside a :class:`TempResourceScope`; the upload, the
    transcoded output and the thumbnail are registered with it as they are
    allocated and removed when the scope closes, whatever the outcome.
    """

    intake: UploadIntake
    transcoder: TranscodeOrchestrator
    thumbnails: ThumbnailExtractor
    paths: MediaPaths
    log: logging.Logger = field(default_factory=lambda: logger)

    async def process_upload(
        self,
        upload: UploadFile | None,
        overlay_text: str | None = None,
    ) -> ProcessingResult:
        async with TempResourceScope() as scope:
            try:
                asset = await self.intake.accept(upload, scope)
                job = ProcessingJob(
                    input_path=asset.temporary_path,
                    output_path=scope.allocate(self.paths.outputs, "processed", ".mp4"),
                    thumbnail_path=scope.allocate(
                        self.paths.outputs, "thumbnail", self.thumbnails.profile.suffix
                    ),
                    overlay_text=normalize_overlay_text(overlay_text),
                )
                await self.transcoder.transcode(job)
                thumbnail_payload = await self._best_effort_thumbnail(job, scope)
                video_payload, processed_size = await asyncio.to_thread(
                    read_data_uri, job.output_path, self.transcoder.profile.mime_type
                )
            except ProcessingError as exc:
                self._log_failure("process", scope, exc)
                raise

            self.log.info(
                "processing.request.completed",
                extra={
                    "request_id": scope.request_id,
                    "original_size": asset.byte_size,
                    "processed_size": processed_size,
                    "thumbnail": thumbnail_payload is not None,
                },
            )
            return ProcessingResult(
                original_name=asset.declared_name,
                original_size=asset.byte_size,
                processed_size=processed_size,
                processed_video_payload=video_payload,
                thumbnail_payload=thumbnail_payload,
            )

    async def thumbnail_upload(self, upload: UploadFile | None) -> ThumbnailResult:
        async with TempResourceScope() as scope:
            try:
                asset = await self.intake.accept(upload, scope)
                target = scope.allocate(
                    self.paths.outputs, "thumbnail", self.thumbnails.profile.suffix
                )
                outcome = await self.thumbnails.extract(asset.temporary_path, target)
                if outcome.path is None:
                    raise ThumbnailError(outcome.diagnostic or "thumbnail not produced")
                payload, size = await asyncio.to_thread(
                    read_data_uri, outcome.path, self.thumbnails.profile.mime_type
                )
            except ProcessingError as exc:
                self._log_failure("thumbnail", scope, exc)
                raise

            self.log.info(
                "processing.thumbnail.completed",
                extra={"request_id": scope.request_id, "size_bytes": size},
            )
            return ThumbnailResult(thumbnail_payload=payload, size=size)

    async def _best_effort_thumbnail(
        self, job: ProcessingJob, scope: TempResourceScope
    ) -> str | None:
        if job.thumbnail_path is None:
            return None
        source = self.thumbnails.choose_source(job.output_path, job.input_path)
        outcome = await self.thumbnails.extract(source, job.thumbnail_path)
        if outcome.path is None:
            return None
        try:
            payload, _ = await asyncio.to_thread(
                read_data_uri, outcome.path, self.thumbnails.profile.mime_type
            )
        except FilesystemError as exc:
            self.log.warning(
                "processing.thumbnail.unreadable",
                extra={"request_id": scope.request_id, "error": exc.details},
            )
            return None
        return payload

    def _log_failure(self, operation: str, scope: TempResourceScope, exc: ProcessingError) -> None:
        self.log.warning(
            "processing.request.failed",
            extra={
                "request_id": scope.request_id,
                "operation": operation,
                "reason": exc.reason.value,
                "details": exc.details,
            },
        )
