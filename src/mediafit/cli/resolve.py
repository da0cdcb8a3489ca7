"""CLI resolve command: resolve a geometry against a source size."""

import json
import re
from fractions import Fraction

import click

from mediafit.cli.exit_codes import ExitCode
from mediafit.cli.output import error_exit, format_resolved_human, resolved_to_dict
from mediafit.geometry import (
    DEFAULT_PAD_COLOR,
    InvalidGeometryError,
    MediaMetadata,
    parse_geometry,
    resolve_geometry,
)
from mediafit.introspector.parsers import parse_aspect_ratio

_SIZE_PATTERN = re.compile(r"^(\d+)x(\d+)$")


def _parse_size(
    ctx: click.Context, param: click.Parameter, value: str
) -> tuple[int, int]:
    match = _SIZE_PATTERN.match(value.strip())
    if match is None:
        raise click.BadParameter(f"expected WIDTHxHEIGHT, got {value!r}")
    width, height = int(match.group(1)), int(match.group(2))
    if width == 0 or height == 0:
        raise click.BadParameter("width and height must be positive")
    return width, height


def _parse_aspect(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> Fraction | None:
    """Accept "16:9" or a decimal such as "1.5"."""
    if value is None:
        return None
    if ":" in value:
        aspect = parse_aspect_ratio(value)
        if aspect is None:
            raise click.BadParameter(f"invalid aspect ratio {value!r}")
        return aspect
    try:
        aspect = Fraction(value)
    except (ValueError, ZeroDivisionError):
        raise click.BadParameter(f"invalid aspect ratio {value!r}") from None
    if aspect <= 0:
        raise click.BadParameter("aspect ratio must be positive")
    return aspect


@click.command("resolve")
@click.argument("geometry")
@click.option(
    "--size",
    required=True,
    callback=_parse_size,
    help="Source size as WIDTHxHEIGHT, e.g. 640x480",
)
@click.option(
    "--aspect",
    default=None,
    callback=_parse_aspect,
    help="Source display aspect ratio, e.g. 16:9 (default: from size)",
)
@click.option("--rotation", type=int, default=None, help="Source rotation in degrees")
@click.option(
    "--auto-rotate",
    is_flag=True,
    help="Size the output as if the source rotation were applied",
)
@click.option(
    "--pad-color",
    default=DEFAULT_PAD_COLOR,
    show_default=True,
    help="Fill colour for pad-mode geometries",
)
@click.option(
    "--vf",
    "existing_filters",
    default=None,
    help="Existing video filter chain to extend in pad mode",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
def resolve_command(
    geometry: str,
    size: tuple[int, int],
    aspect: Fraction | None,
    rotation: int | None,
    auto_rotate: bool,
    pad_color: str,
    existing_filters: str | None,
    output_format: str,
) -> None:
    """Resolve GEOMETRY against a source of the given size.

    GEOMETRY is an ImageMagick-style string such as 640x480, 300x200#,
    x150, 640x480< or 640x480>. Prints the output size (and filter chain
    for pad mode), or "unchanged" when the source keeps its size.
    """
    json_output = output_format == "json"
    try:
        spec = parse_geometry(geometry)
    except InvalidGeometryError as e:
        error_exit(str(e), ExitCode.INVALID_GEOMETRY, json_output)

    width, height = size
    meta = MediaMetadata(width=width, height=height, aspect=aspect, rotation=rotation)
    resolved = resolve_geometry(
        spec,
        meta,
        auto_rotate=auto_rotate,
        pad_color=pad_color,
        existing_filters=existing_filters,
    )

    if json_output:
        click.echo(json.dumps(resolved_to_dict(geometry, spec, resolved), indent=2))
    else:
        click.echo(format_resolved_human(resolved))
