import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

from mediaforge.media.media_cleanup import list_stale_files, sweep_stale_files


def _touch(path: Path, age: timedelta, now: datetime) -> Path:
    path.write_bytes(b"leftover")
    stamp = (now - age).timestamp()
    os.utime(path, (stamp, stamp))
    return path


def test_sweep_removes_only_old_files(tmp_path: Path) -> None:
    uploads = tmp_path / "uploads"
    outputs = tmp_path / "outputs"
    uploads.mkdir()
    outputs.mkdir()
    now = datetime.now(timezone.utc)
    old_upload = _touch(uploads / "upload_1.mp4", timedelta(hours=2), now)
    old_output = _touch(outputs / "processed_1.mp4", timedelta(hours=3), now)
    fresh = _touch(outputs / "processed_2.mp4", timedelta(minutes=5), now)

    removed = sweep_stale_files([uploads, outputs], max_age_seconds=3600, reference_time=now)

    assert removed == 2
    assert not old_upload.exists()
    assert not old_output.exists()
    assert fresh.exists()


def test_list_stale_files_skips_missing_directories(tmp_path: Path) -> None:
    now = datetime.now(timezone.utc)
    existing = tmp_path / "outputs"
    existing.mkdir()
    _touch(existing / "thumbnail_1.jpg", timedelta(days=1), now)

    stale = list_stale_files([tmp_path / "missing", existing], 60, now)

    assert [path.name for path in stale] == ["thumbnail_1.jpg"]
