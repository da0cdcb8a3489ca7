"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (MEDIAFIT_*)
3. Config file (~/.mediafit/config.toml)
4. Default values

Environment variables:
- MEDIAFIT_CONFIG_PATH: Path to config file (overrides default location)
- MEDIAFIT_FFMPEG_PATH / MEDIAFIT_FFPROBE_PATH: Tool executables
- MEDIAFIT_LOG_LEVEL / MEDIAFIT_LOG_FILE / MEDIAFIT_LOG_FORMAT: Logging
- MEDIAFIT_AUTO_ROTATE, MEDIAFIT_PAD_COLOR, MEDIAFIT_SEEK_SECONDS,
  MEDIAFIT_TRANSCODE_TIMEOUT: Transcode defaults
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from mediafit.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediafit.config.env import EnvReader
from mediafit.config.models import MediafitConfig
from mediafit.exceptions import MediafitError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mediafit"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# path -> (parsed dict, mtime)
_config_cache: dict[Path, tuple[dict[str, Any], float]] = {}
_config_cache_lock = threading.Lock()


class ConfigError(MediafitError):
    """Raised when configuration cannot be read or is invalid."""

    pass


def get_default_config_path() -> Path:
    """Get the config file path, honouring MEDIAFIT_CONFIG_PATH."""
    env_path = os.environ.get("MEDIAFIT_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def _read_toml(path: Path, strict: bool) -> dict[str, Any]:
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from a TOML file.

    Results are cached and reloaded when the file's mtime changes.

    Args:
        path: Path to config file. If None, uses the default location.
        strict: Raise ConfigError on parse failures instead of returning {}.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: When strict=True and the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = _read_toml(path, strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    log_level: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> MediafitConfig:
    """Get mediafit configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MEDIAFIT_CONFIG_PATH).
        ffmpeg_path: CLI override for the ffmpeg path.
        ffprobe_path: CLI override for the ffprobe path.
        log_level: CLI override for the log level.
        env_reader: EnvReader to use instead of os.environ.
        strict: Raise ConfigError on unreadable config files.

    Returns:
        MediafitConfig with merged configuration.

    Raises:
        ConfigError: If the merged values are invalid, or when strict=True
            and the config file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    builder.apply(
        ConfigSource(
            ffmpeg_path=ffmpeg_path,
            ffprobe_path=ffprobe_path,
            logging_level=log_level,
        ),
        source_name="cli",
    )

    try:
        return builder.build()
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
