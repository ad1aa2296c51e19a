"""Dependency wiring helpers."""

from dataclasses import replace

from fastapi import FastAPI

from .config import AppConfig
from .engine import FfmpegRunner
from .health.health_api import router as health_router
from .ingest.intake import UploadIntake
from .media.upload_store import UploadStore
from .processing.processing_api import router as processing_router
from .processing.processing_models import DEFAULT_THUMBNAIL_PROFILE
from .processing.processing_service import ProcessingService
from .processing.thumbnails import ThumbnailExtractor
from .processing.transcoder import TranscodeOrchestrator


def build_processing_service(config: AppConfig) -> ProcessingService:
    """Assemble the processing pipeline from configuration."""
    runner = FfmpegRunner(binary=config.engine.ffmpeg_binary)
    upload_store = UploadStore(paths=config.media_paths, limits=config.ingest_limits)
    transcoder = TranscodeOrchestrator(
        runner=runner,
        timeout_seconds=config.engine.transcode_timeout_seconds,
    )
    thumbnails = ThumbnailExtractor(
        runner=runner,
        profile=replace(
            DEFAULT_THUMBNAIL_PROFILE,
            timeout_seconds=config.engine.thumbnail_timeout_seconds,
        ),
    )
    return ProcessingService(
        intake=UploadIntake(store=upload_store),
        transcoder=transcoder,
        thumbnails=thumbnails,
        paths=config.media_paths,
    )


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    app.state.config = config
    app.state.processing_service = build_processing_service(config)

    app.include_router(health_router)
    app.include_router(processing_router)
