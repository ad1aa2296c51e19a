"""Command line builders for engine invocations."""

from __future__ import annotations

from pathlib import Path

from .processing_models import ThumbnailProfile, TranscodeProfile

_COMMON_FLAGS = ["-hide_banner", "-nostdin", "-y"]
_FILTERGRAPH_SPECIAL = "\\'[],;"


def escape_drawtext(value: str) -> str:
    """Escape text for the drawtext ``text`` option inside a ``-vf`` chain.

    Two levels apply: the filter option parser (``\\ ' :``) and then the
    filtergraph parser (``\\ ' [ ] , ;``). Text expansion is disabled in
    :func:`overlay_filter`, so ``%`` needs no escaping.
    """
    flattened = " ".join(value.split())
    option = flattened.replace("\\", "\\\\").replace("'", "\\'").replace(":", "\\:")
    return "".join("\\" + ch if ch in _FILTERGRAPH_SPECIAL else ch for ch in option)


def overlay_filter(text: str) -> str:
    """Top-right drawtext with a semi-opaque box."""
    parts = [
        f"text={escape_drawtext(text)}",
        "expansion=none",
        "fontsize=24",
        "fontcolor=white",
        "x=w-tw-20",
        "y=20",
        "box=1",
        "boxcolor=black@0.5",
        "boxborderw=8",
    ]
    return "drawtext=" + ":".join(parts)


def video_filters(profile: TranscodeProfile, overlay_text: str | None = None) -> str:
    # Overlay first so it is burned in before scaling and encoding.
    filters: list[str] = []
    if overlay_text:
        filters.append(overlay_filter(overlay_text))
    filters.append(f"scale={profile.width}:{profile.height}")
    return ",".join(filters)


def build_transcode_args(
    input_path: Path,
    output_path: Path,
    profile: TranscodeProfile,
    overlay_text: str | None = None,
) -> list[str]:
    return [
        *_COMMON_FLAGS,
        "-i", str(input_path),
        "-vf", video_filters(profile, overlay_text),
        "-c:v", profile.video_codec,
        "-b:v", f"{profile.video_bitrate_kbps}k",
        "-r", str(profile.frame_rate),
        "-pix_fmt", "yuv420p",
        "-c:a", profile.audio_codec,
        "-b:a", f"{profile.audio_bitrate_kbps}k",
        "-movflags", "+faststart",
        "-f", profile.container,
        "-progress", "pipe:1",
        "-nostats",
        str(output_path),
    ]


def build_thumbnail_args(
    source_path: Path,
    output_path: Path,
    profile: ThumbnailProfile,
) -> list[str]:
    return [
        *_COMMON_FLAGS,
        "-ss", f"{profile.offset_seconds:g}",
        "-i", str(source_path),
        "-frames:v", str(profile.frame_count),
        "-vf", f"scale={profile.width}:{profile.height}",
        "-q:v", "2",
        "-f", "image2",
        str(output_path),
    ]
