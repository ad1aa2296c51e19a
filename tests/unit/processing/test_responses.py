import base64
from datetime import datetime, timezone

import pytest

from mediaforge.ingest.ingest_errors import (
    FilesystemError,
    MissingFileError,
    PayloadTooLargeError,
)
from mediaforge.processing.processing_errors import ThumbnailError, TranscodeError
from mediaforge.processing.processing_models import ProcessingResult, ThumbnailResult
from mediaforge.processing.responses import (
    build_process_body,
    build_thumbnail_body,
    encode_data_uri,
    error_for_exception,
    read_data_uri,
    utc_timestamp,
)

NOW = datetime(2024, 5, 1, 12, 30, 15, 123000, tzinfo=timezone.utc)


def test_utc_timestamp_is_iso8601_with_z_suffix() -> None:
    assert utc_timestamp(NOW) == "2024-05-01T12:30:15.123Z"


def test_encode_data_uri_is_mime_tagged_base64() -> None:
    uri = encode_data_uri(b"\x00\x01binary", "video/mp4")

    prefix, payload = uri.split(",", 1)
    assert prefix == "data:video/mp4;base64"
    assert base64.b64decode(payload) == b"\x00\x01binary"


def test_read_data_uri_returns_size(tmp_path) -> None:
    path = tmp_path / "thumb.jpg"
    path.write_bytes(b"\xff\xd8jpeg")

    uri, size = read_data_uri(path, "image/jpeg")

    assert uri.startswith("data:image/jpeg;base64,")
    assert size == 6


def test_read_data_uri_wraps_missing_file(tmp_path) -> None:
    with pytest.raises(FilesystemError):
        read_data_uri(tmp_path / "gone.mp4", "video/mp4")


def test_process_body_uses_wire_field_names() -> None:
    result = ProcessingResult(
        original_name="clip.mov",
        original_size=2048,
        processed_size=1024,
        processed_video_payload="data:video/mp4;base64,AAAA",
        thumbnail_payload=None,
    )

    body = build_process_body(result, now=NOW)

    assert body == {
        "success": True,
        "message": "Video processed successfully",
        "originalName": "clip.mov",
        "originalSize": 2048,
        "processedSize": 1024,
        "processedVideo": "data:video/mp4;base64,AAAA",
        "thumbnail": None,
        "timestamp": "2024-05-01T12:30:15.123Z",
    }


def test_thumbnail_body() -> None:
    body = build_thumbnail_body(ThumbnailResult(thumbnail_payload="data:image/jpeg;base64,/9j/", size=3), now=NOW)

    assert body["success"] is True
    assert body["thumbnail"] == "data:image/jpeg;base64,/9j/"
    assert body["size"] == 3
    assert body["timestamp"] == "2024-05-01T12:30:15.123Z"


@pytest.mark.parametrize(
    ("exc", "status_code", "category", "error"),
    [
        (MissingFileError("No video file received"), 400, "missing_file", "No video file received"),
        (PayloadTooLargeError("too big"), 413, "payload_too_large", "Uploaded file is too large"),
        (TranscodeError("moov atom not found"), 500, "transcode_failed", "Internal server error"),
        (ThumbnailError("no frame"), 500, "thumbnail_failed", "Internal server error"),
        (FilesystemError("disk full"), 500, "filesystem_error", "Internal server error"),
    ],
)
def test_error_for_exception_selects_status_and_category(exc, status_code, category, error) -> None:
    code, body = error_for_exception(exc, now=NOW)

    assert code == status_code
    assert body == {
        "error": error,
        "category": category,
        "details": exc.details,
        "timestamp": "2024-05-01T12:30:15.123Z",
    }
