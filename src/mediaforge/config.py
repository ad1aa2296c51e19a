"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

PRODUCTION = "production"
DEVELOPMENT = "development"


@dataclass(slots=True, frozen=True)
class IngestLimits:
    field_name: str
    max_upload_bytes: int
    chunk_size_bytes: int


@dataclass(slots=True, frozen=True)
class MediaPaths:
    uploads: Path
    outputs: Path


@dataclass(slots=True, frozen=True)
class EngineSettings:
    ffmpeg_binary: str
    transcode_timeout_seconds: float | None
    thumbnail_timeout_seconds: float


@dataclass(slots=True, frozen=True)
class AppConfig:
    environment: str
    media_paths: MediaPaths
    ingest_limits: IngestLimits
    engine: EngineSettings
    cors_allowed_origins: Sequence[str] = field(default_factory=tuple)
    stale_file_max_age_seconds: int = 3600
    host: str = "0.0.0.0"
    port: int = 3001


def _ensure_media_paths(paths: MediaPaths) -> None:
    if paths.uploads.resolve() == paths.outputs.resolve():
        raise ValueError("UPLOAD_DIR and OUTPUT_DIR must point to different directories")
    paths.uploads.mkdir(parents=True, exist_ok=True)
    paths.outputs.mkdir(parents=True, exist_ok=True)


def _default_media_paths(environment: str) -> MediaPaths:
    if environment == PRODUCTION:
        return MediaPaths(uploads=Path("/tmp/uploads"), outputs=Path("/tmp/outputs"))
    root = Path("var")
    return MediaPaths(uploads=root / "uploads", outputs=root / "outputs")


def _parse_origins(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def _optional_timeout(raw: str | None, default: float) -> float | None:
    value = float(raw) if raw not in (None, "") else default
    return value if value > 0 else None


def _required_timeout(name: str, raw: str | None, default: float) -> float:
    value = float(raw) if raw not in (None, "") else default
    if value <= 0:
        raise ValueError(f"{name} must be a positive number of seconds")
    return value


def load_config() -> AppConfig:
    """Load configuration from environment variables."""
    environment = os.getenv("APP_ENV", DEVELOPMENT).strip().lower() or DEVELOPMENT
    defaults = _default_media_paths(environment)
    media_paths = MediaPaths(
        uploads=Path(os.getenv("UPLOAD_DIR") or defaults.uploads),
        outputs=Path(os.getenv("OUTPUT_DIR") or defaults.outputs),
    )
    _ensure_media_paths(media_paths)

    ingest_limits = IngestLimits(
        field_name="video",
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", 50 * 1024 * 1024)),
        chunk_size_bytes=int(os.getenv("UPLOAD_CHUNK_BYTES", 1 * 1024 * 1024)),
    )

    engine = EngineSettings(
        ffmpeg_binary=os.getenv("FFMPEG_BINARY", "ffmpeg"),
        transcode_timeout_seconds=_optional_timeout(
            os.getenv("TRANSCODE_TIMEOUT_SECONDS"), 600.0
        ),
        thumbnail_timeout_seconds=_required_timeout(
            "THUMBNAIL_TIMEOUT_SECONDS", os.getenv("THUMBNAIL_TIMEOUT_SECONDS"), 30.0
        ),
    )

    return AppConfig(
        environment=environment,
        media_paths=media_paths,
        ingest_limits=ingest_limits,
        engine=engine,
        cors_allowed_origins=_parse_origins(os.getenv("CORS_ALLOWED_ORIGINS")),
        stale_file_max_age_seconds=int(os.getenv("STALE_FILE_MAX_AGE_SECONDS", 3600)),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 3001)),
    )
