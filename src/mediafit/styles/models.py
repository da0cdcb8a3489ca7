"""Pydantic models for style files.

A style file is a YAML mapping of named presets:

    styles:
      thumb:
        geometry: "100x100#"
        format: jpg
        time: "10%"
      medium:
        geometry: "640x480>"
        convert_options:
          output:
            vcodec: libx264
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mediafit.exceptions import MediafitError
from mediafit.geometry import InvalidGeometryError, parse_geometry
from mediafit.geometry.resolver import DEFAULT_PAD_COLOR

# "50%" seeks to the middle of the source
PERCENT_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)%$")

# Style names are used in log tags and on the command line
STYLE_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]{0,63}$")

ParamValueModel = str | int | float | bool | None


class StyleValidationError(MediafitError):
    """Error during style file validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ConvertOptionsModel(BaseModel):
    """Extra encoder parameters for a style."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input: dict[str, ParamValueModel] = Field(default_factory=dict)
    output: dict[str, ParamValueModel] = Field(default_factory=dict)

    @field_validator("input", "output")
    @classmethod
    def validate_param_names(
        cls, v: dict[str, ParamValueModel]
    ) -> dict[str, ParamValueModel]:
        """Reject empty or whitespace-containing option names."""
        for name in v:
            stripped = name.lstrip("-")
            if not stripped or any(c.isspace() for c in stripped):
                raise ValueError(f"Invalid encoder option name {name!r}")
        return v


class StyleModel(BaseModel):
    """Pydantic model for one named style."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    geometry: str | None = None
    format: str | None = None
    time: float | str | None = None
    auto_rotate: bool = False
    pad_color: str = DEFAULT_PAD_COLOR
    whiny: bool = True
    convert_options: ConvertOptionsModel = Field(default_factory=ConvertOptionsModel)

    @field_validator("geometry")
    @classmethod
    def validate_geometry(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            parse_geometry(v)
        except InvalidGeometryError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: float | str | None) -> float | str | None:
        """Accept seconds (>= 0) or a percentage of the duration."""
        if v is None:
            return v
        if isinstance(v, str):
            match = PERCENT_PATTERN.match(v.strip())
            if not match:
                raise ValueError(
                    f"Invalid time {v!r}. Use seconds (e.g. 3.5) or a "
                    "percentage of the duration (e.g. '50%')."
                )
            if float(match.group(1)) > 100:
                raise ValueError(f"Invalid time {v!r}: percentage above 100")
            return v.strip()
        if v < 0:
            raise ValueError(f"Invalid time {v}: must be >= 0")
        return v

    @field_validator("pad_color")
    @classmethod
    def validate_pad_color(cls, v: str) -> str:
        if not v or any(c in v for c in ":,;[] \t"):
            raise ValueError(f"Invalid pad_color {v!r}")
        return v


class StylesFileModel(BaseModel):
    """Top-level model for a style file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    styles: dict[str, StyleModel]

    @field_validator("styles")
    @classmethod
    def validate_style_names(cls, v: dict[str, StyleModel]) -> dict[str, StyleModel]:
        if not v:
            raise ValueError("At least one style must be defined")
        for name in v:
            if not STYLE_NAME_PATTERN.match(name):
                raise ValueError(
                    f"Invalid style name {name!r}. Names start with a letter and "
                    "contain only letters, digits, '-' and '_'."
                )
        return v
