"""Geometry data types.

GeometrySpec is what a geometry string parses into, MediaMetadata is the
source description supplied by an introspector, and ResolvedGeometry is the
concrete output handed to the encoder command builder. All three are frozen.
"""

from dataclasses import dataclass, replace
from enum import Enum
from fractions import Fraction

# Rotations for which width and height are swapped before sizing.
# 270 is not included and 180 is; see DESIGN.md.
ROTATION_SWAP_ANGLES = frozenset({90, 180})


class ResizeMode(Enum):
    """How a target geometry is applied to the source."""

    NONE = "none"
    PAD = "pad"
    ENLARGE_ONLY = "enlarge_only"
    SHRINK_ONLY = "shrink_only"
    FORCE_ASPECT = "force_aspect"


@dataclass(frozen=True)
class GeometrySpec:
    """Parsed geometry string."""

    width: int | None
    """Target width, or None to derive it from height and aspect."""

    height: int | None
    """Target height, or None to derive it from width and aspect."""

    mode: ResizeMode = ResizeMode.NONE


@dataclass(frozen=True)
class MediaMetadata:
    """Source media description used for geometry resolution."""

    width: int | None = None
    height: int | None = None
    aspect: float | Fraction | None = None
    """Stored width / height before rotation. Derived from the size if None."""

    rotation: int | None = None
    format: str | None = None
    duration_seconds: float | None = None

    @property
    def has_size(self) -> bool:
        """True if both width and height are known and non-zero."""
        return bool(self.width) and bool(self.height)

    @property
    def aspect_ratio(self) -> float | Fraction | None:
        """Aspect ratio, falling back to the exact ratio of width to height."""
        if self.aspect:
            return self.aspect
        if self.has_size:
            return Fraction(self.width, self.height)
        return None

    def with_rotation_compensation(self) -> "MediaMetadata":
        """Return a copy sized as if the rotation were already applied.

        Only rotations in ROTATION_SWAP_ANGLES swap the axes; any other
        value returns self unchanged.
        """
        if self.rotation not in ROTATION_SWAP_ANGLES:
            return self
        aspect = self.aspect_ratio
        return replace(
            self,
            width=self.height,
            height=self.width,
            aspect=(1 / aspect) if aspect else None,
        )


@dataclass(frozen=True)
class ResolvedGeometry:
    """Concrete output dimensions for the encoder."""

    width: int
    height: int
    filter_fragment: str | None = None
    """Video filter chain for pad mode, already merged with prior filters."""

    @property
    def size(self) -> str:
        """Dimensions in ``WxH`` form, as passed to ``-s``."""
        return f"{self.width}x{self.height}"
