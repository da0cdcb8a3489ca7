"""Pure parsing functions for ffprobe JSON output.

These functions turn ffprobe JSON into MediaMetadata. They perform no I/O
so they can be tested against recorded fixtures.
"""

import logging
from fractions import Fraction

from mediafit.geometry.types import MediaMetadata

logger = logging.getLogger(__name__)


def _log_validation_warning(
    message: str,
    field_name: str,
    file_path: str | None,
    *args: object,
) -> None:
    context = f" in {file_path}" if file_path else ""
    logger.warning(f"{message}{context}", field_name, *args)


def validate_positive_int(
    value: object,
    field_name: str,
    file_path: str | None = None,
) -> int | None:
    """Validate that a value is a non-negative integer or None.

    Args:
        value: Value to validate.
        field_name: Field name for warning messages.
        file_path: File path context for warnings.

    Returns:
        Validated value or None if invalid.
    """
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool):
        _log_validation_warning(
            "Expected int for %s, got %s", field_name, file_path, type(value).__name__
        )
        return None
    if value < 0:
        _log_validation_warning("Invalid negative %s: %d", field_name, file_path, value)
        return None
    return value


def parse_duration(value: str | None) -> float | None:
    """Parse an ffprobe duration string (e.g. "3600.000") into seconds."""
    if value is None:
        return None
    try:
        duration = float(value)
    except (ValueError, TypeError):
        return None
    return duration if duration >= 0 else None


def parse_aspect_ratio(value: str | None) -> Fraction | None:
    """Parse an ffprobe aspect ratio such as "16:9".

    Returns:
        The ratio as a Fraction, or None for missing or degenerate values
        ("0:1", "N/A").
    """
    if not value or ":" not in value:
        return None
    num, _, den = value.partition(":")
    try:
        numerator, denominator = int(num), int(den)
    except ValueError:
        return None
    if numerator <= 0 or denominator <= 0:
        return None
    return Fraction(numerator, denominator)


def parse_rotation(stream: dict) -> int | None:
    """Extract the display rotation of a video stream in clockwise degrees.

    Older files carry a ``rotate`` tag; newer ffprobe versions report a
    display matrix in ``side_data_list`` whose ``rotation`` is
    counter-clockwise, so its sign is flipped.

    Returns:
        Rotation normalised to 0..359, or None when the stream has none.
    """
    raw_tag = stream.get("tags", {}).get("rotate")
    if raw_tag is not None:
        try:
            return int(float(raw_tag)) % 360
        except (ValueError, TypeError):
            logger.debug("Ignoring unparseable rotate tag: %r", raw_tag)

    for side_data in stream.get("side_data_list", []):
        rotation = side_data.get("rotation")
        if rotation is None:
            continue
        try:
            return int(-float(rotation)) % 360
        except (ValueError, TypeError):
            logger.debug("Ignoring unparseable display matrix rotation: %r", rotation)

    return None


def find_video_stream(streams: list[dict]) -> dict | None:
    """Return the first video stream that is not an attached picture."""
    for stream in streams:
        if stream.get("codec_type") != "video":
            continue
        if stream.get("disposition", {}).get("attached_pic", 0) == 1:
            continue
        return stream
    return None


def parse_media_metadata(
    data: dict,
    file_path: str | None = None,
) -> MediaMetadata | None:
    """Parse ffprobe JSON output into MediaMetadata.

    Args:
        data: Parsed ffprobe JSON (``-show_streams -show_format``).
        file_path: Optional file path for context in warning messages.

    Returns:
        MediaMetadata for the primary video stream, or None when the file has
        no video stream (unsupported for transcoding).
    """
    stream = find_video_stream(data.get("streams", []))
    if stream is None:
        logger.debug("No video stream found in %s", file_path or "input")
        return None

    format_info = data.get("format", {})
    width = validate_positive_int(stream.get("width"), "width", file_path)
    height = validate_positive_int(stream.get("height"), "height", file_path)
    duration = parse_duration(format_info.get("duration"))
    if duration is None:
        duration = parse_duration(stream.get("duration"))

    return MediaMetadata(
        width=width,
        height=height,
        aspect=parse_aspect_ratio(stream.get("display_aspect_ratio")),
        rotation=parse_rotation(stream),
        format=format_info.get("format_name"),
        duration_seconds=duration,
    )
