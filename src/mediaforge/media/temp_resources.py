"""Per-request temporary file lifecycle."""

from __future__ import annotations

import logging
import shutil
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType

logger = logging.getLogger(__name__)


def unique_filename(prefix: str, suffix: str) -> str:
    """Return ``<prefix>_<epoch ms>_<random hex><suffix>``."""
    stamp = int(time.time() * 1000)
    return f"{prefix}_{stamp}_{uuid.uuid4().hex[:12]}{suffix}"


@dataclass(slots=True)
class TempResourceScope:
    """Registers request-owned paths and removes them on release.

    Usable as a sync or async context manager; leaving the block releases
    every registered path. ``release`` is idempotent and never raises.
    """

    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    log: logging.Logger = field(default_factory=lambda: logger)
    _paths: list[Path] = field(default_factory=list)
    _released: bool = False

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._paths)

    @property
    def released(self) -> bool:
        return self._released

    def register(self, path: Path) -> Path:
        if path not in self._paths:
            self._paths.append(path)
        # Paths registered after a release are removed by the next release.
        self._released = False
        return path

    def allocate(self, directory: Path, prefix: str, suffix: str) -> Path:
        """Reserve a collision-resistant path inside ``directory``."""
        return self.register(directory / unique_filename(prefix, suffix))

    def release(self) -> int:
        """Remove every registered path that exists; return how many were removed."""
        removed = 0
        for path in self._paths:
            if self._remove_single_path(path):
                removed += 1
        if not self._released:
            self.log.info(
                "media.temp.released",
                extra={
                    "request_id": self.request_id,
                    "registered": len(self._paths),
                    "removed": removed,
                },
            )
        self._released = True
        return removed

    def _remove_single_path(self, path: Path) -> bool:
        try:
            if path.is_file() or path.is_symlink():
                path.unlink(missing_ok=True)
                return True
            if path.is_dir():
                shutil.rmtree(path)
                return True
        except OSError as exc:
            self.log.warning(
                "media.temp.remove_failed",
                extra={"request_id": self.request_id, "path": str(path), "error": str(exc)},
            )
        return False

    def __enter__(self) -> "TempResourceScope":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    async def __aenter__(self) -> "TempResourceScope":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
