"""CLI inspect command: show the metadata mediafit extracts from a file."""

import json
import logging
from pathlib import Path

import click

from mediafit.cli import get_cli_config
from mediafit.cli.exit_codes import ExitCode
from mediafit.cli.output import error_exit, format_metadata_human, metadata_to_dict
from mediafit.executor import ToolNotFoundError, require_tool
from mediafit.introspector import FFprobeIntrospector, MediaIntrospectionError

logger = logging.getLogger(__name__)


@click.command("inspect")
@click.argument("file", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def inspect_command(ctx: click.Context, file: Path, output_format: str) -> None:
    """Inspect a media file and display its video metadata.

    FILE is the path to the media file to inspect.
    """
    json_output = output_format == "json"
    config = get_cli_config(ctx)

    if not file.exists():
        error_exit(f"File not found: {file}", ExitCode.TARGET_NOT_FOUND, json_output)

    try:
        ffprobe = require_tool("ffprobe", config.tools)
    except ToolNotFoundError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE, json_output)

    try:
        meta = FFprobeIntrospector(ffprobe_path=ffprobe).get_metadata(file)
    except MediaIntrospectionError as e:
        error_exit(
            f"Could not parse file: {file}: {e}", ExitCode.PARSE_ERROR, json_output
        )

    if json_output:
        data = {"file": str(file), **metadata_to_dict(meta)}
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(f"File: {file}")
        click.echo(format_metadata_human(meta))
