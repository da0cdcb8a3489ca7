"""CLI transcode command: render one source into one output."""

import dataclasses
import logging
import shlex
from pathlib import Path

import click

from mediafit.cli import get_cli_config
from mediafit.cli.exit_codes import ExitCode
from mediafit.cli.output import error_exit
from mediafit.config import MediafitConfig
from mediafit.executor import ToolNotFoundError, require_tool
from mediafit.executor.transcode import (
    FixedSeconds,
    SeekTime,
    TranscodeError,
    TranscodeOptions,
    Transcoder,
)
from mediafit.geometry import InvalidGeometryError, parse_geometry
from mediafit.logging import transcode_context
from mediafit.styles import (
    StyleValidationError,
    get_style,
    load_styles,
    parse_seek_time,
)

logger = logging.getLogger(__name__)


def _parse_time(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> SeekTime | None:
    """Accept seconds ("3.5") or a percentage of the duration ("50%")."""
    if value is None:
        return None
    value = value.strip()
    if value.endswith("%"):
        try:
            return parse_seek_time(value)
        except StyleValidationError:
            raise click.BadParameter(f"invalid percentage {value!r}") from None
    try:
        seconds = float(value)
    except ValueError:
        raise click.BadParameter(f"invalid time {value!r}") from None
    if seconds < 0:
        raise click.BadParameter("time must be >= 0")
    return FixedSeconds(seconds)


def _build_options(
    config: MediafitConfig,
    base: TranscodeOptions | None,
    *,
    geometry: str | None,
    target_format: str | None,
    time: SeekTime | None,
    auto_rotate: bool,
    pad_color: str | None,
) -> TranscodeOptions:
    """Build options from a style (if any), overlaid with CLI flags."""
    if base is None:
        defaults = config.transcode
        base = TranscodeOptions(
            time=FixedSeconds(defaults.seek_seconds),
            auto_rotate=defaults.auto_rotate,
            pad_color=defaults.pad_color,
            whiny=defaults.whiny,
        )

    overrides: dict[str, object] = {}
    if geometry is not None:
        overrides["geometry"] = geometry
    if target_format is not None:
        overrides["format"] = target_format
    if time is not None:
        overrides["time"] = time
    if auto_rotate:
        overrides["auto_rotate"] = True
    if pad_color is not None:
        overrides["pad_color"] = pad_color
    return dataclasses.replace(base, **overrides)


@click.command("transcode")
@click.argument("source", type=click.Path(exists=False, path_type=Path))
@click.argument("destination", type=click.Path(path_type=Path))
@click.option("--geometry", "-g", default=None, help="Output geometry, e.g. 640x480>")
@click.option(
    "--format",
    "target_format",
    default=None,
    help="Output format (default: style format, else destination extension)",
)
@click.option(
    "--time",
    "-t",
    default=None,
    callback=_parse_time,
    help="Seek position for image output: seconds or a percentage, e.g. 50%",
)
@click.option(
    "--auto-rotate",
    is_flag=True,
    help="Apply the source rotation and clear the rotation tag",
)
@click.option("--pad-color", default=None, help="Fill colour for pad-mode geometries")
@click.option(
    "--styles",
    "styles_file",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file of named styles",
)
@click.option("--style", "style_name", default=None, help="Style to render")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the ffmpeg command without running it",
)
@click.pass_context
def transcode_command(
    ctx: click.Context,
    source: Path,
    destination: Path,
    geometry: str | None,
    target_format: str | None,
    time: SeekTime | None,
    auto_rotate: bool,
    pad_color: str | None,
    styles_file: Path | None,
    style_name: str | None,
    dry_run: bool,
) -> None:
    """Transcode SOURCE into DESTINATION.

    Flags override the selected style. Sources without a video stream, or
    whose size cannot be determined, are copied untouched.
    """
    config = get_cli_config(ctx)

    if (styles_file is None) != (style_name is None):
        raise click.UsageError("--styles and --style must be used together")

    base = None
    if styles_file is not None:
        try:
            base = get_style(load_styles(styles_file), style_name)
        except StyleValidationError as e:
            error_exit(str(e), ExitCode.STYLE_ERROR)

    options = _build_options(
        config,
        base,
        geometry=geometry,
        target_format=target_format,
        time=time,
        auto_rotate=auto_rotate,
        pad_color=pad_color,
    )
    if options.format is None:
        inferred = destination.suffix.lstrip(".").lower() or None
        options = dataclasses.replace(options, format=inferred)

    if options.geometry:
        try:
            parse_geometry(options.geometry)
        except InvalidGeometryError as e:
            error_exit(str(e), ExitCode.INVALID_GEOMETRY)

    if not source.exists():
        error_exit(f"File not found: {source}", ExitCode.TARGET_NOT_FOUND)

    try:
        ffmpeg = require_tool("ffmpeg", config.tools)
        require_tool("ffprobe", config.tools)
    except ToolNotFoundError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE)

    transcoder = Transcoder(
        options,
        ffmpeg_path=ffmpeg,
        tools=config.tools,
        timeout=config.transcode.timeout_seconds,
        logger=logger,
    )

    with transcode_context(source, style_name):
        if dry_run:
            cmd = transcoder.build_command(source, destination)
            if cmd is None:
                click.echo(f"Would copy {source} to {destination} untouched")
            else:
                click.echo(shlex.join(cmd))
            return

        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            result = transcoder.make(source, destination)
        except TranscodeError as e:
            error_exit(str(e), ExitCode.TRANSCODE_FAILED)
        except OSError as e:
            error_exit(f"Could not write {destination}: {e}", ExitCode.GENERAL_ERROR)

    if not result.success:
        error_exit(
            result.error_message or "Transcode failed", ExitCode.TRANSCODE_FAILED
        )
    if result.passthrough:
        click.echo(f"Copied {source} to {destination} untouched")
    else:
        click.echo(f"Transcoded {source} to {destination}")
