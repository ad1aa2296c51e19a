from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mediaforge.api.errors import register_error_handlers
from mediaforge.config import AppConfig, EngineSettings, IngestLimits, MediaPaths
from mediaforge.processing.processing_api import router as processing_router
from mediaforge.processing.processing_service import ProcessingService
from tests.helpers.processing import build_service
from tests.mocks.engine import StubEngineRunner


@pytest.fixture
def media_paths(tmp_path: Path) -> MediaPaths:
    paths = MediaPaths(uploads=tmp_path / "uploads", outputs=tmp_path / "outputs")
    paths.uploads.mkdir()
    paths.outputs.mkdir()
    return paths


@pytest.fixture
def ingest_limits() -> IngestLimits:
    return IngestLimits(field_name="video", max_upload_bytes=50 * 1024 * 1024, chunk_size_bytes=256)


@pytest.fixture
def app_config(media_paths: MediaPaths, ingest_limits: IngestLimits) -> AppConfig:
    return AppConfig(
        environment="development",
        media_paths=media_paths,
        ingest_limits=ingest_limits,
        engine=EngineSettings(
            ffmpeg_binary="ffmpeg",
            transcode_timeout_seconds=600.0,
            thumbnail_timeout_seconds=30.0,
        ),
    )


@pytest.fixture
def stub_runner() -> StubEngineRunner:
    return StubEngineRunner()


@pytest.fixture
def processing_service(
    media_paths: MediaPaths,
    ingest_limits: IngestLimits,
    stub_runner: StubEngineRunner,
) -> ProcessingService:
    return build_service(media_paths, ingest_limits, stub_runner)


@pytest.fixture
def contract_client(processing_service: ProcessingService) -> TestClient:
    app = FastAPI()
    app.state.processing_service = processing_service
    register_error_handlers(app)
    app.include_router(processing_router)
    return TestClient(app, raise_server_exceptions=False)
