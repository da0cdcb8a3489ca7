"""FFmpeg command building for transcoding.

Builds the argument list for one planned transcode:

    ffmpeg -y -hide_banner [input params] [-ss T] -i SOURCE
        [-metadata:s:v:0 rotate=0] [-frames:v 1] [output params]
        [-s WxH] [-vf CHAIN] DESTINATION
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from .types import ParamValue, TranscodePlan

# Output parameters the geometry engine owns when a geometry is requested.
_GEOMETRY_PARAMS = frozenset({"s", "vf"})


def format_seconds(seconds: float) -> str:
    """Render a seek position, dropping a redundant ``.0``."""
    if float(seconds).is_integer():
        return str(int(seconds))
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def build_param_args(
    params: Mapping[str, ParamValue],
    exclude: frozenset[str] = frozenset(),
) -> list[str]:
    """Render a parameter map as ffmpeg arguments.

    Args:
        params: Option name (without the leading ``-``) to value.
        exclude: Option names to skip.

    Returns:
        Flat argument list. True/None values render the flag alone and
        False values are omitted.
    """
    args: list[str] = []
    for name, value in params.items():
        if name in exclude or value is False:
            continue
        args.append(f"-{name.lstrip('-')}")
        if value is not None and value is not True:
            args.append(str(value))
    return args


def build_transcode_command(
    ffmpeg_path: Path | str,
    source: Path,
    destination: Path,
    plan: TranscodePlan,
) -> list[str]:
    """Build the ffmpeg command for a planned transcode.

    Args:
        ffmpeg_path: Path to the ffmpeg executable.
        source: Input media file.
        destination: Output file.
        plan: Transcode plan from plan_transcode.

    Returns:
        List of command arguments.
    """
    convert = plan.options.convert_options
    cmd = [str(ffmpeg_path), "-y", "-hide_banner"]

    cmd.extend(build_param_args(convert.input))
    if plan.seek_seconds is not None:
        cmd.extend(["-ss", format_seconds(plan.seek_seconds)])

    cmd.extend(["-i", str(source)])

    # ffmpeg applies the rotation itself; clear the tag so players don't
    # rotate a second time.
    if plan.strip_rotation:
        cmd.extend(["-metadata:s:v:0", "rotate=0"])

    if plan.options.output_is_image:
        cmd.extend(["-frames:v", "1"])

    if plan.geometry is None:
        cmd.extend(build_param_args(convert.output))
    else:
        cmd.extend(build_param_args(convert.output, exclude=_GEOMETRY_PARAMS))
        vf = convert.output.get("vf")
        resolved = plan.resolved
        if resolved is not None:
            if resolved.filter_fragment:
                # The filter chain decides the frame size.
                vf = resolved.filter_fragment
            else:
                cmd.extend(["-s", resolved.size])
        if vf:
            cmd.extend(["-vf", str(vf)])

    cmd.append(str(destination))
    return cmd
