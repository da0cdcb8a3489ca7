"""Transcode planning.

Parses and resolves the requested geometry and the seek position for one
source. Pure: no I/O, no process invocation.
"""

from mediafit.geometry import parse_geometry, resolve_geometry
from mediafit.geometry.types import MediaMetadata

from .types import TranscodeOptions, TranscodePlan


def plan_transcode(meta: MediaMetadata, options: TranscodeOptions) -> TranscodePlan:
    """Plan a transcode of a source described by ``meta``.

    Args:
        meta: Source media metadata.
        options: Requested output options.

    Returns:
        TranscodePlan. ``resolved`` is None when no geometry was requested
        or when an enlarge-only/shrink-only geometry leaves the size as-is.

    Raises:
        InvalidGeometryError: If options.geometry cannot be parsed.
        UnresolvableGeometryError: If a geometry is requested but the
            metadata has no size.
    """
    spec = None
    resolved = None
    if options.geometry:
        spec = parse_geometry(options.geometry)
        existing_vf = options.convert_options.output.get("vf")
        resolved = resolve_geometry(
            spec,
            meta,
            auto_rotate=options.auto_rotate,
            pad_color=options.pad_color,
            existing_filters=str(existing_vf) if existing_vf else None,
        )

    seek_seconds = options.time.resolve(meta) if options.output_is_image else None

    return TranscodePlan(
        options=options,
        meta=meta,
        geometry=spec,
        resolved=resolved,
        seek_seconds=seek_seconds,
    )
