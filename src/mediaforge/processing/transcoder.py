"""Transcode orchestration against the external engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..engine import EngineRunner, EngineStatus
from .processing_errors import TranscodeError
from .ffmpeg_args import build_transcode_args
from .processing_models import DEFAULT_TRANSCODE_PROFILE, ProcessingJob, TranscodeProfile

logger = logging.getLogger(__name__)


def _output_ready(path: Path) -> bool:
    try:
        return path.is_file() and path.stat().st_size > 0
    except OSError:
        return False


@dataclass(slots=True)
class TranscodeOrchestrator:
    """Re-encode uploads to the fixed delivery profile."""

    runner: EngineRunner
    profile: TranscodeProfile = DEFAULT_TRANSCODE_PROFILE
    timeout_seconds: float | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    async def transcode(self, job: ProcessingJob) -> Path:
        """Run the engine once and return the verified output path.

        Raises :class:`TranscodeError` with the engine diagnostic when the
        engine fails, times out, or reports success without leaving a
        non-empty output file behind.
        """
        args = build_transcode_args(
            job.input_path, job.output_path, self.profile, job.overlay_text
        )
        self.log.info(
            "processing.transcode.started",
            extra={
                "input_path": str(job.input_path),
                "output_path": str(job.output_path),
                "overlay": bool(job.overlay_text),
            },
        )
        outcome = await self.runner.run(args, timeout=self.timeout_seconds)

        if outcome.status is EngineStatus.TIMED_OUT:
            raise TranscodeError(outcome.diagnostic or "transcode timed out")
        if not outcome.succeeded:
            raise TranscodeError(outcome.diagnostic or "transcode failed")
        if not _output_ready(job.output_path):
            self.log.error(
                "processing.transcode.output_missing",
                extra={"output_path": str(job.output_path)},
            )
            raise TranscodeError("output not produced")

        self.log.info(
            "processing.transcode.finished",
            extra={
                "output_path": str(job.output_path),
                "size_bytes": job.output_path.stat().st_size,
            },
        )
        return job.output_path
