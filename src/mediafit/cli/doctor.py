"""CLI doctor command: check that ffmpeg and ffprobe can be found."""

import json

import click

from mediafit.cli import get_cli_config
from mediafit.cli.exit_codes import ExitCode
from mediafit.executor import check_tool_availability, get_tool_path

INSTALL_URL = "https://ffmpeg.org/download.html"


@click.command("doctor")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def doctor_command(ctx: click.Context, output_format: str) -> None:
    """Check external tool availability.

    Looks up ffmpeg and ffprobe the same way transcode does: configured
    paths first, then PATH. Exits with TOOL_NOT_AVAILABLE if either is
    missing.
    """
    tools = get_cli_config(ctx).tools
    availability = check_tool_availability(tools)

    if output_format == "json":
        report = {
            name: {
                "available": available,
                "path": str(get_tool_path(name, tools)) if available else None,
            }
            for name, available in availability.items()
        }
        click.echo(json.dumps(report, indent=2))
    else:
        for name, available in availability.items():
            if available:
                click.echo(f"  ✓ {name}: {get_tool_path(name, tools)}")
            else:
                click.echo(f"  ✗ {name}: not found")
                click.echo(f"    └─ Install ffmpeg: {INSTALL_URL}")

    if not all(availability.values()):
        ctx.exit(ExitCode.TOOL_NOT_AVAILABLE)
