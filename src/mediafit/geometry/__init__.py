"""Geometry resolution engine.

Parses ImageMagick-style geometry strings and resolves them against source
media metadata into even output dimensions and, for pad mode, an ffmpeg
filter fragment.

Usage:
    from mediafit.geometry import MediaMetadata, parse_geometry, resolve_geometry

    spec = parse_geometry("300x200#")
    resolved = resolve_geometry(spec, MediaMetadata(width=640, height=480))
"""

from mediafit.geometry.exceptions import (
    GeometryError,
    InvalidGeometryError,
    UnresolvableGeometryError,
)
from mediafit.geometry.parser import parse_geometry
from mediafit.geometry.resolver import (
    DEFAULT_PAD_COLOR,
    even_floor,
    merge_filter_chain,
    resolve_geometry,
)
from mediafit.geometry.types import (
    ROTATION_SWAP_ANGLES,
    GeometrySpec,
    MediaMetadata,
    ResizeMode,
    ResolvedGeometry,
)

__all__ = [
    # Types
    "GeometrySpec",
    "MediaMetadata",
    "ResizeMode",
    "ResolvedGeometry",
    "ROTATION_SWAP_ANGLES",
    # Errors
    "GeometryError",
    "InvalidGeometryError",
    "UnresolvableGeometryError",
    # Operations
    "DEFAULT_PAD_COLOR",
    "even_floor",
    "merge_filter_chain",
    "parse_geometry",
    "resolve_geometry",
]
