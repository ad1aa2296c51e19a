"""Upload intake: presence checks and asset metadata."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import UploadFile

from ..media.temp_resources import TempResourceScope
from ..media.upload_store import UploadStore
from .ingest_errors import MissingFileError
from .ingest_models import UploadedAsset

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UploadIntake:
    """Accept a single video part and persist it for processing."""

    store: UploadStore

    async def accept(self, upload: UploadFile | None, scope: TempResourceScope) -> UploadedAsset:
        if upload is None or not upload.filename:
            logger.warning("ingest.upload.missing_file", extra={"request_id": scope.request_id})
            raise MissingFileError("No video file received")

        path, size = await self.store.persist_upload(upload, scope)
        asset = UploadedAsset(
            temporary_path=path,
            declared_name=upload.filename,
            byte_size=size,
            declared_mime_type=upload.content_type or "application/octet-stream",
        )
        logger.info(
            "ingest.upload.accepted",
            extra={
                "request_id": scope.request_id,
                "filename": asset.declared_name,
                "size_mb": round(asset.byte_size / 1024 / 1024, 2),
                "content_type": asset.declared_mime_type,
            },
        )
        return asset
