"""Helpers for sweeping stale temporary files."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def list_stale_files(
    directories: Iterable[Path],
    max_age_seconds: int,
    reference_time: datetime | None = None,
) -> list[Path]:
    """Return files whose mtime is older than ``max_age_seconds``."""
    now = (reference_time or datetime.now(timezone.utc)).timestamp()
    cutoff = now - max_age_seconds
    stale: list[Path] = []
    for directory in directories:
        if not directory.is_dir():
            continue
        for path in directory.iterdir():
            try:
                if path.is_file() and path.stat().st_mtime < cutoff:
                    stale.append(path)
            except FileNotFoundError:
                continue
    return stale


def sweep_stale_files(
    directories: Iterable[Path],
    max_age_seconds: int,
    reference_time: datetime | None = None,
) -> int:
    """Remove leftover upload/output files and return how many were deleted."""
    removed = 0
    for path in list_stale_files(directories, max_age_seconds, reference_time):
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(
                "media.cleanup.remove_failed",
                extra={"path": str(path), "error": str(exc)},
            )
            continue
        removed += 1
        logger.info("media.cleanup.removed", extra={"path": str(path)})
    return removed
