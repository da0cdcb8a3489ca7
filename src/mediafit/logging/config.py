"""Logging configuration for mediafit.

Provides configure_logging() to set up the root logger from LoggingConfig.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from mediafit.logging.context import TranscodeContextFilter
from mediafit.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from mediafit.config.models import LoggingConfig

_LEVEL_MAP: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

TEXT_FORMAT = "%(asctime)s - %(transcode_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _make_formatter(log_format: str) -> logging.Formatter:
    if log_format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it cannot be created."""
    log_path = Path(config.file).expanduser()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            log_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def _installed_here(handler: logging.Handler) -> bool:
    """True for handlers added by an earlier configure_logging call."""
    return any(isinstance(f, TranscodeContextFilter) for f in handler.filters)


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from LoggingConfig.

    Sets up a file handler and/or a stderr handler with a text or JSON
    formatter. If the log file cannot be opened, stderr is used instead.
    Existing root handlers are replaced; those installed by a previous call
    are closed.

    Args:
        config: Logging configuration.
    """
    level = _LEVEL_MAP.get(config.level.casefold(), logging.INFO)
    formatter = _make_formatter(config.format)
    context_filter = TranscodeContextFilter()

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    root = logging.getLogger()
    root.setLevel(level)
    for old_handler in root.handlers[:]:
        root.removeHandler(old_handler)
        if _installed_here(old_handler):
            old_handler.close()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)
