"""Configuration data models.

This module defines dataclasses for mediafit configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

from mediafit.geometry.resolver import DEFAULT_PAD_COLOR


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class TranscodeDefaults:
    """Defaults applied to transcodes that do not set these options."""

    auto_rotate: bool = False
    pad_color: str = DEFAULT_PAD_COLOR

    # Seek position for image (thumbnail) output, in seconds
    seek_seconds: float = 3.0

    # Raise on encoder failure instead of returning a failed result
    whiny: bool = True

    # Encoder timeout in seconds (None = no limit)
    timeout_seconds: int | None = 1800

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.seek_seconds < 0:
            raise ValueError(f"seek_seconds must be >= 0, got {self.seek_seconds}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )


@dataclass
class MediafitConfig:
    """Top-level mediafit configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    transcode: TranscodeDefaults = field(default_factory=TranscodeDefaults)
