"""Disk persistence for multipart uploads."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from fastapi import UploadFile

from ..config import IngestLimits, MediaPaths
from ..ingest.ingest_errors import FilesystemError, PayloadTooLargeError
from .temp_resources import TempResourceScope

_SUFFIX_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass(slots=True)
class UploadStore:
    """Streams uploads into the upload directory under unique names."""

    paths: MediaPaths
    limits: IngestLimits
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def persist_upload(self, upload: UploadFile, scope: TempResourceScope) -> tuple[Path, int]:
        """Copy upload contents to disk, enforcing the size ceiling.

        The target is registered with ``scope`` before the first byte is
        written, so partial files are released together with the request.
        """
        target = scope.allocate(
            self.paths.uploads, "upload", self._derive_suffix(upload.filename)
        )
        size = 0
        try:
            with target.open("wb") as sink:
                while True:
                    chunk = await upload.read(self.limits.chunk_size_bytes)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.limits.max_upload_bytes:
                        self.log.warning(
                            "media.upload.payload_too_large",
                            extra={
                                "request_id": scope.request_id,
                                "size_bytes": size,
                                "limit_bytes": self.limits.max_upload_bytes,
                            },
                        )
                        raise PayloadTooLargeError(
                            f"File exceeds maximum size of "
                            f"{self.limits.max_upload_bytes // (1024 * 1024)} MB"
                        )
                    sink.write(chunk)
        except PayloadTooLargeError:
            target.unlink(missing_ok=True)
            raise
        except OSError as exc:
            target.unlink(missing_ok=True)
            self.log.error(
                "media.upload.write_failed",
                extra={"request_id": scope.request_id, "path": str(target), "error": str(exc)},
            )
            raise FilesystemError(f"Could not store upload: {exc}") from exc
        finally:
            await upload.close()

        self.log.info(
            "media.upload.persisted",
            extra={"request_id": scope.request_id, "path": str(target), "size_bytes": size},
        )
        return target, size

    @staticmethod
    def _derive_suffix(filename: str | None) -> str:
        if not filename:
            return ""
        suffix = Path(filename).suffix.lower()
        return suffix if _SUFFIX_RE.match(suffix) else ""
