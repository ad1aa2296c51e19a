"""Cron entry point for sweeping stale upload and output files."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from datetime import datetime, timezone

from mediaforge.config import load_config
from mediaforge.media.media_cleanup import list_stale_files, sweep_stale_files


@dataclass(slots=True)
class CleanupSummary:
    files_removed: int
    dry_run: bool


def perform_cleanup(
    *,
    dry_run: bool,
    max_age_seconds: int | None = None,
    reference_time: datetime | None = None,
) -> CleanupSummary:
    """Execute cleanup logic and return summary counters."""
    config = load_config()
    directories = [config.media_paths.uploads, config.media_paths.outputs]
    max_age = max_age_seconds if max_age_seconds is not None else config.stale_file_max_age_seconds
    now = reference_time or datetime.now(timezone.utc)

    if dry_run:
        stale = list_stale_files(directories, max_age, now)
        return CleanupSummary(files_removed=len(stale), dry_run=True)

    removed = sweep_stale_files(directories, max_age, now)
    return CleanupSummary(files_removed=removed, dry_run=False)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove stale upload/output files.")
    parser.add_argument("--dry-run", action="store_true", help="Only report counts without deleting files.")
    parser.add_argument(
        "--max-age-seconds",
        type=int,
        default=None,
        help="Override STALE_FILE_MAX_AGE_SECONDS.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    try:
        summary = perform_cleanup(dry_run=args.dry_run, max_age_seconds=args.max_age_seconds)
    except Exception as exc:
        print(f"cleanup failed: {exc}", file=sys.stderr)
        return 2

    if summary.dry_run:
        print(f"cleanup dry-run, stale_files={summary.files_removed}", file=sys.stdout)
    else:
        print(f"cleanup done, files_removed={summary.files_removed}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
