"""Data structures for the media-processing pipeline."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class TranscodeProfile:
    """Fixed delivery format for processed videos."""

    container: str = "mp4"
    video_codec: str = "libx264"
    audio_codec: str = "aac"
    width: int = 1280
    height: int = 720
    frame_rate: int = 30
    video_bitrate_kbps: int = 2000
    audio_bitrate_kbps: int = 128
    mime_type: str = "video/mp4"


@dataclass(slots=True, frozen=True)
class ThumbnailProfile:
    """Still-frame extraction parameters."""

    offset_seconds: float = 1.0
    frame_count: int = 1
    width: int = 320
    height: int = 240
    timeout_seconds: float = 30.0
    mime_type: str = "image/jpeg"
    suffix: str = ".jpg"


DEFAULT_TRANSCODE_PROFILE = TranscodeProfile()
DEFAULT_THUMBNAIL_PROFILE = ThumbnailProfile()


@dataclass(slots=True, frozen=True)
class ProcessingJob:
    """Paths and options of a single ``/process`` request."""

    input_path: Path
    output_path: Path
    thumbnail_path: Path | None = None
    overlay_text: str | None = None


@dataclass(slots=True, frozen=True)
class ThumbnailOutcome:
    """Best-effort extraction result; ``path`` is ``None`` when nothing was produced."""

    path: Path | None
    diagnostic: str = ""

    @property
    def produced(self) -> bool:
        return self.path is not None


@dataclass(slots=True)
class ProcessingResult:
    """Successful `/process` outcome; failures are raised as `ProcessingError`."""

    original_name: str
    original_size: int
    processed_size: int
    processed_video_payload: str
    thumbnail_payload: str | None = None


@dataclass(slots=True)
class ThumbnailResult:
    thumbnail_payload: str
    size: int
