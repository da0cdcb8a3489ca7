"""Style file loading.

Loads YAML style files, validates them with the pydantic models in
mediafit.styles.models and converts each style to TranscodeOptions.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mediafit.executor.transcode.types import (
    DEFAULT_SEEK_SECONDS,
    ConvertOptions,
    FixedSeconds,
    SeekTime,
    TranscodeOptions,
    fraction_of_duration,
)
from mediafit.styles.models import (
    PERCENT_PATTERN,
    StyleModel,
    StylesFileModel,
    StyleValidationError,
)

logger = logging.getLogger(__name__)


def load_styles(path: Path) -> dict[str, TranscodeOptions]:
    """Load and validate a style file.

    Args:
        path: Path to the YAML style file.

    Returns:
        Mapping of style name to TranscodeOptions, in file order.

    Raises:
        StyleValidationError: If the file is missing or invalid.
    """
    if not path.exists():
        raise StyleValidationError(f"Style file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise StyleValidationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise StyleValidationError("Style file is empty")
    if not isinstance(data, dict):
        raise StyleValidationError("Style file must be a YAML mapping")

    styles = load_styles_from_dict(data)
    logger.debug("Loaded %d style(s) from %s", len(styles), path)
    return styles


def load_styles_from_dict(data: dict[str, Any]) -> dict[str, TranscodeOptions]:
    """Validate a parsed style document and convert it to TranscodeOptions.

    Raises:
        StyleValidationError: If the data is invalid.
    """
    try:
        model = StylesFileModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise StyleValidationError(message, field=field) from e

    return {name: style_to_options(style) for name, style in model.styles.items()}


def get_style(styles: dict[str, TranscodeOptions], name: str) -> TranscodeOptions:
    """Look up a style by name.

    Raises:
        StyleValidationError: If no style has that name.
    """
    try:
        return styles[name]
    except KeyError:
        available = ", ".join(sorted(styles)) or "none"
        raise StyleValidationError(
            f"Unknown style {name!r} (available: {available})", field=name
        ) from None


def parse_seek_time(value: float | str | None) -> SeekTime:
    """Convert a style ``time`` value to a SeekTime.

    None means the default fixed offset; "25%" seeks to a quarter of the
    source duration.
    """
    if value is None:
        return FixedSeconds(DEFAULT_SEEK_SECONDS)
    if isinstance(value, str):
        match = PERCENT_PATTERN.match(value.strip())
        if match is None:
            raise StyleValidationError(f"Invalid time {value!r}", field="time")
        percent = float(match.group(1))
        if percent > 100:
            raise StyleValidationError(f"Invalid time {value!r}", field="time")
        return fraction_of_duration(percent / 100)
    return FixedSeconds(float(value))


def style_to_options(style: StyleModel) -> TranscodeOptions:
    """Convert a validated StyleModel to TranscodeOptions."""
    return TranscodeOptions(
        geometry=style.geometry,
        format=style.format,
        time=parse_seek_time(style.time),
        auto_rotate=style.auto_rotate,
        pad_color=style.pad_color,
        convert_options=ConvertOptions(
            input=style.convert_options.input,
            output=style.convert_options.output,
        ),
        whiny=style.whiny,
    )


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    errors = error.errors()
    if not errors:
        return f"Style validation failed: {error}", None
    first_error = errors[0]
    loc = ".".join(str(x) for x in first_error.get("loc", []))
    msg = first_error.get("msg", str(error))
    if loc:
        return f"Style validation failed: {loc}: {msg}", loc
    return f"Style validation failed: {msg}", None
