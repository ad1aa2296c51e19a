"""External transcoding engine adapters."""

from .engine_base import EngineOutcome, EngineRunner, EngineStatus, ProgressCallback
from .ffmpeg_runner import FfmpegRunner

__all__ = ["EngineOutcome", "EngineRunner", "EngineStatus", "FfmpegRunner", "ProgressCallback"]
