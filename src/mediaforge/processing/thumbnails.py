"""Best-effort still-frame extraction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..engine import EngineRunner
from .ffmpeg_args import build_thumbnail_args
from .processing_models import DEFAULT_THUMBNAIL_PROFILE, ThumbnailOutcome, ThumbnailProfile

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ThumbnailExtractor:
    """Pull one frame at a fixed offset; never raises for engine failures."""

    runner: EngineRunner
    profile: ThumbnailProfile = DEFAULT_THUMBNAIL_PROFILE
    log: logging.Logger = field(default_factory=lambda: logger)

    @staticmethod
    def choose_source(output_path: Path, input_path: Path) -> Path:
        """Prefer the transcoded output, fall back to the raw upload."""
        try:
            if output_path.is_file() and output_path.stat().st_size > 0:
                return output_path
        except OSError:
            pass
        return input_path

    async def extract(self, source_path: Path, output_path: Path) -> ThumbnailOutcome:
        args = build_thumbnail_args(source_path, output_path, self.profile)
        outcome = await self.runner.run(args, timeout=self.profile.timeout_seconds)

        if not outcome.succeeded:
            self.log.warning(
                "processing.thumbnail.failed",
                extra={
                    "source_path": str(source_path),
                    "status": outcome.status.value,
                    "diagnostic": outcome.diagnostic,
                },
            )
            return ThumbnailOutcome(path=None, diagnostic=outcome.diagnostic)

        if not output_path.is_file() or output_path.stat().st_size == 0:
            self.log.warning(
                "processing.thumbnail.output_missing",
                extra={"source_path": str(source_path), "output_path": str(output_path)},
            )
            return ThumbnailOutcome(path=None, diagnostic="thumbnail not produced")

        self.log.info(
            "processing.thumbnail.finished",
            extra={"source_path": str(source_path), "output_path": str(output_path)},
        )
        return ThumbnailOutcome(path=output_path)
