"""Geometry resolution against source media metadata.

This module turns a GeometrySpec plus MediaMetadata into concrete even
output dimensions. It performs no I/O and keeps no state, so resolutions
may run concurrently.

Rounding follows two steps everywhere: aspect maths truncates toward zero,
then each dimension is floored to an even number (most codecs require even
sizes for chroma subsampling) of at least MIN_DIMENSION.
"""

from fractions import Fraction

from mediafit.geometry.exceptions import UnresolvableGeometryError
from mediafit.geometry.types import (
    GeometrySpec,
    MediaMetadata,
    ResizeMode,
    ResolvedGeometry,
)

DEFAULT_PAD_COLOR = "black"

# Smallest even size; tiny targets are raised to it instead of reaching 0.
MIN_DIMENSION = 2

Aspect = float | Fraction


def even_floor(value: int) -> int:
    """Round a dimension down to the nearest multiple of 2."""
    return value - (value % 2)


def _height_for(width: int, aspect: Aspect) -> int:
    return int(width / aspect)


def _width_for(height: int, aspect: Aspect) -> int:
    return int(height * aspect)


def _output_dimension(value: int) -> int:
    return max(even_floor(value), MIN_DIMENSION)


def _sized(width: int, height: int) -> ResolvedGeometry:
    return ResolvedGeometry(
        width=_output_dimension(width), height=_output_dimension(height)
    )


def merge_filter_chain(fragment: str, existing: str | None) -> str:
    """Prepend a filter fragment to an existing filter chain.

    Args:
        fragment: Filter fragment to run first.
        existing: Filters already configured by the caller, or None.

    Returns:
        Combined chain with ``fragment`` ahead of ``existing``.
    """
    if not existing:
        return fragment
    return f"{fragment},{existing}"


def _format_offset(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def resolve_stretch(spec: GeometrySpec, aspect: Aspect) -> ResolvedGeometry:
    """Use the target size as-is, ignoring the aspect ratio.

    A missing axis is derived from the aspect ratio rather than treated as
    zero.
    """
    width, height = spec.width, spec.height
    if width is None:
        width = _width_for(height, aspect)
    elif height is None:
        height = _height_for(width, aspect)
    return _sized(width, height)


def resolve_fixed_height(height: int, aspect: Aspect) -> ResolvedGeometry:
    """Derive width from a fixed height."""
    return _sized(_width_for(height, aspect), height)


def resolve_fixed_width(width: int, aspect: Aspect) -> ResolvedGeometry:
    """Derive height from a fixed width."""
    return _sized(width, _height_for(width, aspect))


def resolve_enlarge_only(
    current_width: int, target_width: int, aspect: Aspect
) -> ResolvedGeometry | None:
    """Scale up to the target width, or return None if already wide enough."""
    if current_width < target_width:
        return _sized(target_width, _height_for(target_width, aspect))
    return None


def resolve_shrink_only(
    current_width: int,
    current_height: int,
    target_width: int,
    target_height: int,
    aspect: Aspect,
) -> ResolvedGeometry | None:
    """Scale down to fit the target, or return None if it already fits.

    When the width exceeds the target the axis with the smaller scale ratio
    binds; when only the height exceeds, the height binds.
    """
    if current_width > target_width:
        if target_width / current_width > target_height / current_height:
            return _sized(_width_for(target_height, aspect), target_height)
        return _sized(target_width, _height_for(target_width, aspect))
    if current_height > target_height:
        return _sized(_width_for(target_height, aspect), target_height)
    return None


def resolve_pad(
    target_width: int,
    target_height: int,
    aspect: Aspect,
    pad_color: str = DEFAULT_PAD_COLOR,
    existing_filters: str | None = None,
) -> ResolvedGeometry:
    """Fit to the target width and letterbox, or crop when there is no room.

    The returned width/height describe the scaled picture, which is
    even-floored. The filter fragment pads it to the exact
    ``target_width x target_height`` frame when the scaled height is short of
    the target, otherwise crops it to the scaled size.
    """
    width = _output_dimension(target_width)
    height = _output_dimension(_height_for(target_width, aspect))
    pad_y = (target_height - height) / 2

    if pad_y > 0:
        frame = f"{max(target_width, width)}:{target_height}"
        fragment = (
            f"scale={width}:-1,pad={frame}:0:{_format_offset(pad_y)}:{pad_color}"
        )
    else:
        fragment = f"scale={width}:-1,crop={width}:{height}"

    return ResolvedGeometry(
        width=width,
        height=height,
        filter_fragment=merge_filter_chain(fragment, existing_filters),
    )


def resolve_keep_aspect(
    current_width: int,
    current_height: int,
    target_width: int,
    target_height: int,
    aspect: Aspect,
) -> ResolvedGeometry:
    """Fit inside the target box, driven by the tighter axis."""
    if target_height / current_height < target_width / current_width:
        return _sized(_width_for(target_height, aspect), target_height)
    return _sized(target_width, _height_for(target_width, aspect))


def resolve_geometry(
    spec: GeometrySpec,
    meta: MediaMetadata,
    auto_rotate: bool = False,
    pad_color: str = DEFAULT_PAD_COLOR,
    existing_filters: str | None = None,
) -> ResolvedGeometry | None:
    """Resolve a geometry spec against source metadata.

    Args:
        spec: Parsed geometry.
        meta: Source media metadata.
        auto_rotate: Size the output as if the source rotation were applied.
        pad_color: Fill colour for pad mode.
        existing_filters: Caller video filters; pad-mode fragments are
            prepended to them.

    Returns:
        ResolvedGeometry, or None when an enlarge-only or shrink-only
        geometry leaves the source unchanged.

    Raises:
        UnresolvableGeometryError: If the metadata has no size.
    """
    if not meta.has_size:
        raise UnresolvableGeometryError(
            "Source metadata has no width/height; cannot resolve geometry"
        )

    if auto_rotate:
        meta = meta.with_rotation_compensation()

    aspect = meta.aspect_ratio
    current_width, current_height = meta.width, meta.height
    target_width, target_height = spec.width, spec.height

    if spec.mode == ResizeMode.FORCE_ASPECT:
        return resolve_stretch(spec, aspect)
    if target_width is None:
        return resolve_fixed_height(target_height, aspect)
    if target_height is None:
        return resolve_fixed_width(target_width, aspect)
    if spec.mode == ResizeMode.ENLARGE_ONLY:
        return resolve_enlarge_only(current_width, target_width, aspect)
    if spec.mode == ResizeMode.SHRINK_ONLY:
        return resolve_shrink_only(
            current_width, current_height, target_width, target_height, aspect
        )
    if spec.mode == ResizeMode.PAD:
        return resolve_pad(
            target_width, target_height, aspect, pad_color, existing_filters
        )
    return resolve_keep_aspect(
        current_width, current_height, target_width, target_height, aspect
    )
