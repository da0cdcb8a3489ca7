"""Named transcode presets loaded from YAML style files."""

from mediafit.styles.loader import (
    get_style,
    load_styles,
    load_styles_from_dict,
    parse_seek_time,
    style_to_options,
)
from mediafit.styles.models import (
    ConvertOptionsModel,
    StyleModel,
    StylesFileModel,
    StyleValidationError,
)

__all__ = [
    "ConvertOptionsModel",
    "StyleModel",
    "StyleValidationError",
    "StylesFileModel",
    "get_style",
    "load_styles",
    "load_styles_from_dict",
    "parse_seek_time",
    "style_to_options",
]
