"""CLI output formatting for JSON and human-readable output."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any, NoReturn

import click

if TYPE_CHECKING:
    from mediafit.geometry import GeometrySpec, MediaMetadata, ResolvedGeometry

    from .exit_codes import ExitCode


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.
    """
    from .exit_codes import ExitCode

    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {"status": "failed", "error": {"code": code_name, "message": message}}
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(exit_value)


def _aspect_text(aspect: Any) -> str | None:
    if aspect is None:
        return None
    return str(aspect).replace("/", ":")


def metadata_to_dict(meta: MediaMetadata | None) -> dict[str, Any]:
    """Convert metadata to a JSON-serializable dict."""
    if meta is None:
        return {"supported": False}
    return {
        "supported": True,
        "width": meta.width,
        "height": meta.height,
        "aspect": _aspect_text(meta.aspect),
        "rotation": meta.rotation,
        "format": meta.format,
        "duration_seconds": meta.duration_seconds,
    }


def format_metadata_human(meta: MediaMetadata | None) -> str:
    """Format metadata as indented key/value lines."""
    if meta is None:
        return "No video stream (the file would be copied untouched)"
    size = f"{meta.width}x{meta.height}" if meta.has_size else "unknown"
    duration = (
        f"{meta.duration_seconds:.3f}s" if meta.duration_seconds is not None else "-"
    )
    lines = [
        f"  Size:     {size}",
        f"  Aspect:   {_aspect_text(meta.aspect) or '-'}",
        f"  Rotation: {meta.rotation if meta.rotation is not None else '-'}",
        f"  Format:   {meta.format or '-'}",
        f"  Duration: {duration}",
    ]
    return "\n".join(lines)


def resolved_to_dict(
    geometry: str, spec: GeometrySpec, resolved: ResolvedGeometry | None
) -> dict[str, Any]:
    """Convert a resolution result to a JSON-serializable dict."""
    data: dict[str, Any] = {
        "geometry": geometry,
        "mode": spec.mode.value,
        "unchanged": resolved is None,
    }
    if resolved is not None:
        data.update(
            {
                "width": resolved.width,
                "height": resolved.height,
                "size": resolved.size,
                "filter": resolved.filter_fragment,
            }
        )
    return data


def format_resolved_human(resolved: ResolvedGeometry | None) -> str:
    if resolved is None:
        return "unchanged"
    if resolved.filter_fragment:
        return f"{resolved.size}\nfilter: {resolved.filter_fragment}"
    return resolved.size
