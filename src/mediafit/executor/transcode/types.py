"""Transcode data types.

TranscodeOptions describes one requested output (what the caller or a style
asks for), TranscodePlan is the pure planning result for one source, and
TranscodeResult reports what the Transcoder did.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from mediafit.exceptions import MediafitError
from mediafit.geometry.resolver import DEFAULT_PAD_COLOR
from mediafit.geometry.types import GeometrySpec, MediaMetadata, ResolvedGeometry

DEFAULT_SEEK_SECONDS = 3.0

_IMAGE_FORMAT_PATTERN = re.compile(r"jpe?g|png|gif$")

# A parameter value of True or None renders the flag alone; False omits it.
ParamValue = str | int | float | bool | None


class TranscodeError(MediafitError):
    """Raised when the encoder exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr_tail: str | None = None,
    ) -> None:
        self.returncode = returncode
        self.stderr_tail = stderr_tail
        super().__init__(message)


@dataclass(frozen=True)
class FixedSeconds:
    """Seek to a fixed position."""

    seconds: float

    def resolve(self, meta: MediaMetadata) -> float:
        return float(self.seconds)


@dataclass(frozen=True)
class ComputedFromMetadata:
    """Seek to a position computed from the source metadata."""

    compute: Callable[[MediaMetadata], float]

    def resolve(self, meta: MediaMetadata) -> float:
        return float(self.compute(meta))


SeekTime = FixedSeconds | ComputedFromMetadata


def fraction_of_duration(
    fraction: float, fallback: float = DEFAULT_SEEK_SECONDS
) -> ComputedFromMetadata:
    """Seek to a fraction of the source duration.

    Args:
        fraction: Position as a fraction of the duration (0.5 = midpoint).
        fallback: Seconds to use when the duration is unknown.
    """

    def compute(meta: MediaMetadata) -> float:
        if meta.duration_seconds is None:
            return fallback
        return meta.duration_seconds * fraction

    return ComputedFromMetadata(compute)


def _frozen(params: Mapping[str, ParamValue] | None) -> Mapping[str, ParamValue]:
    return MappingProxyType(dict(params or {}))


@dataclass(frozen=True)
class ConvertOptions:
    """Extra encoder parameters, keyed by ffmpeg option name without ``-``.

    Input parameters go before ``-i``; output parameters before the
    destination. Insertion order is preserved.
    """

    input: Mapping[str, ParamValue] = field(default_factory=dict)
    output: Mapping[str, ParamValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "input", _frozen(self.input))
        object.__setattr__(self, "output", _frozen(self.output))


@dataclass(frozen=True)
class TranscodeOptions:
    """Options for one transcode output."""

    geometry: str | None = None
    format: str | None = None
    time: SeekTime = FixedSeconds(DEFAULT_SEEK_SECONDS)
    auto_rotate: bool = False
    pad_color: str = DEFAULT_PAD_COLOR
    convert_options: ConvertOptions = field(default_factory=ConvertOptions)
    whiny: bool = True

    @property
    def output_is_image(self) -> bool:
        """True if the target format is a still image."""
        return bool(self.format) and bool(_IMAGE_FORMAT_PATTERN.search(self.format))


@dataclass(frozen=True)
class TranscodePlan:
    """Everything needed to build the encoder command for one source."""

    options: TranscodeOptions
    meta: MediaMetadata
    geometry: GeometrySpec | None = None
    resolved: ResolvedGeometry | None = None
    seek_seconds: float | None = None

    @property
    def unchanged(self) -> bool:
        """True when a geometry was requested but leaves the size as-is."""
        return self.geometry is not None and self.resolved is None

    @property
    def strip_rotation(self) -> bool:
        """True when the rotation tag must be cleared on the output."""
        return self.options.auto_rotate and bool(self.meta.rotation)


@dataclass
class TranscodeResult:
    """Result of a Transcoder.make call."""

    success: bool
    output_path: Path | None = None
    passthrough: bool = False
    """True if the source was copied untouched instead of transcoded."""

    command: list[str] | None = None
    error_message: str | None = None
