"""CLI module for mediafit."""

import logging
import sys
from pathlib import Path

import click

from mediafit.cli.exit_codes import ExitCode
from mediafit.config import ConfigError, MediafitConfig, get_config

logger = logging.getLogger(__name__)


def _configure_logging(
    config: MediafitConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the loaded config and CLI options.

    Args:
        config: Effective configuration.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    from mediafit.config.logging_factory import configure_logging_from_cli

    applied = configure_logging_from_cli(
        config.logging,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    logger.debug(
        "Logging configured: level=%s, file=%s, format=%s",
        applied.level,
        applied.file or "stderr",
        applied.format,
    )


def get_cli_config(ctx: click.Context) -> MediafitConfig:
    """Return the configuration loaded by the ``main`` group."""
    return ctx.find_root().obj["config"]


@click.group()
@click.version_option(package_name="mediafit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.mediafit/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """mediafit - Resize and transcode media files with ffmpeg."""
    ctx.ensure_object(dict)

    # Preserve a config injected by tests
    if "config" not in ctx.obj:
        try:
            # An explicitly named config file must be readable
            ctx.obj["config"] = get_config(
                config_path=config_path, strict=config_path is not None
            )
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.CONFIG_ERROR)

    try:
        _configure_logging(ctx.obj["config"], log_level, log_file, log_json)
    except ValueError as e:
        click.echo(f"Error: Invalid logging configuration: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)


# Defer import to avoid circular dependency
def _register_commands():
    from mediafit.cli.doctor import doctor_command
    from mediafit.cli.inspect import inspect_command
    from mediafit.cli.resolve import resolve_command
    from mediafit.cli.transcode import transcode_command

    main.add_command(doctor_command)
    main.add_command(inspect_command)
    main.add_command(resolve_command)
    main.add_command(transcode_command)


_register_commands()
