import pytest

from mediaforge.config import IngestLimits, MediaPaths
from mediaforge.ingest.ingest_errors import MissingFileError
from mediaforge.ingest.intake import UploadIntake
from mediaforge.media.temp_resources import TempResourceScope
from mediaforge.media.upload_store import UploadStore
from tests.helpers.processing import VIDEO_BYTES, make_upload


def build_intake(media_paths: MediaPaths, ingest_limits: IngestLimits) -> UploadIntake:
    return UploadIntake(store=UploadStore(paths=media_paths, limits=ingest_limits))


@pytest.mark.asyncio
async def test_accept_returns_asset_metadata(media_paths: MediaPaths, ingest_limits: IngestLimits) -> None:
    intake = build_intake(media_paths, ingest_limits)
    scope = TempResourceScope()

    asset = await intake.accept(make_upload(content_type="video/quicktime", filename="holiday.mov"), scope)

    assert asset.declared_name == "holiday.mov"
    assert asset.declared_mime_type == "video/quicktime"
    assert asset.byte_size == len(VIDEO_BYTES)
    assert asset.temporary_path.exists()
    assert asset.temporary_path in scope.paths


@pytest.mark.asyncio
async def test_accept_without_upload_raises_and_creates_nothing(
    media_paths: MediaPaths, ingest_limits: IngestLimits
) -> None:
    intake = build_intake(media_paths, ingest_limits)
    scope = TempResourceScope()

    with pytest.raises(MissingFileError) as exc_info:
        await intake.accept(None, scope)

    assert exc_info.value.status_code == 400
    assert scope.paths == ()
    assert list(media_paths.uploads.iterdir()) == []


@pytest.mark.asyncio
async def test_accept_rejects_part_without_filename(media_paths: MediaPaths, ingest_limits: IngestLimits) -> None:
    intake = build_intake(media_paths, ingest_limits)

    with pytest.raises(MissingFileError):
        await intake.accept(make_upload(filename=""), TempResourceScope())
