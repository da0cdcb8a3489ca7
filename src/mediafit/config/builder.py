"""Configuration builder with explicit layering.

ConfigBuilder composes MediafitConfig from several ConfigSources, later
sources overriding earlier ones for every value they actually set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from mediafit.config.env import EnvReader
from mediafit.config.models import (
    LoggingConfig,
    MediafitConfig,
    ToolPathsConfig,
    TranscodeDefaults,
)
from mediafit.geometry.resolver import DEFAULT_PAD_COLOR

logger = logging.getLogger(__name__)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None means "not specified here" and never overrides a lower source.
    """

    # Tool paths
    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None

    # Transcode defaults
    auto_rotate: bool | None = None
    pad_color: str | None = None
    seek_seconds: float | None = None
    whiny: bool | None = None
    timeout_seconds: int | None = None


class ConfigBuilder:
    """Builds MediafitConfig by layering ConfigSources with precedence.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply a source, overriding existing values with its non-None values.

        Args:
            source: Configuration source to apply.
            source_name: Label for debug logging of each value this source sets.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                logger.debug("Config %s set from %s", field_obj.name, source_name)

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> MediafitConfig:
        """Build the final MediafitConfig with defaults for unset values.

        Raises:
            ValueError: If a layered value fails model validation.
        """
        tools = ToolPathsConfig(
            ffmpeg=self._get("ffmpeg_path", None),
            ffprobe=self._get("ffprobe_path", None),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        # 0 means "no limit"
        timeout_seconds = self._get("timeout_seconds", 1800)
        transcode = TranscodeDefaults(
            auto_rotate=self._get("auto_rotate", False),
            pad_color=self._get("pad_color", DEFAULT_PAD_COLOR),
            seek_seconds=self._get("seek_seconds", 3.0),
            whiny=self._get("whiny", True),
            timeout_seconds=timeout_seconds if timeout_seconds else None,
        )

        return MediafitConfig(tools=tools, logging=logging_config, transcode=transcode)


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create a ConfigSource from a parsed TOML config file.

    Args:
        file_config: Parsed configuration dictionary.

    Returns:
        ConfigSource with values from the file.
    """
    tools = file_config.get("tools", {})
    logging_conf = file_config.get("logging", {})
    transcode = file_config.get("transcode", {})

    log_file_str = logging_conf.get("file")
    log_file = Path(log_file_str).expanduser() if log_file_str else None

    return ConfigSource(
        ffmpeg_path=Path(tools["ffmpeg"]) if tools.get("ffmpeg") else None,
        ffprobe_path=Path(tools["ffprobe"]) if tools.get("ffprobe") else None,
        logging_level=logging_conf.get("level"),
        logging_file=log_file,
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
        auto_rotate=transcode.get("auto_rotate"),
        pad_color=transcode.get("pad_color"),
        seek_seconds=transcode.get("seek_seconds"),
        whiny=transcode.get("whiny"),
        timeout_seconds=transcode.get("timeout_seconds"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create a ConfigSource from MEDIAFIT_* environment variables.

    Args:
        reader: EnvReader for reading environment variables.

    Returns:
        ConfigSource with values from the environment.
    """
    return ConfigSource(
        ffmpeg_path=reader.get_path("MEDIAFIT_FFMPEG_PATH"),
        ffprobe_path=reader.get_path("MEDIAFIT_FFPROBE_PATH"),
        logging_level=reader.get_str("MEDIAFIT_LOG_LEVEL"),
        logging_file=reader.get_path("MEDIAFIT_LOG_FILE", must_exist=False),
        logging_format=reader.get_str("MEDIAFIT_LOG_FORMAT"),
        auto_rotate=reader.get_bool("MEDIAFIT_AUTO_ROTATE"),
        pad_color=reader.get_str("MEDIAFIT_PAD_COLOR"),
        seek_seconds=reader.get_float("MEDIAFIT_SEEK_SECONDS"),
        timeout_seconds=reader.get_int("MEDIAFIT_TRANSCODE_TIMEOUT"),
    )
