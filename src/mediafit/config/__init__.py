"""Configuration management for mediafit.

Precedence, highest first: CLI flags, MEDIAFIT_* environment variables,
the TOML config file (~/.mediafit/config.toml), defaults.
"""

from mediafit.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediafit.config.env import EnvReader
from mediafit.config.loader import (
    ConfigError,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from mediafit.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from mediafit.config.models import (
    LoggingConfig,
    MediafitConfig,
    ToolPathsConfig,
    TranscodeDefaults,
)

__all__ = [
    # Models
    "LoggingConfig",
    "MediafitConfig",
    "ToolPathsConfig",
    "TranscodeDefaults",
    # Loader
    "ConfigError",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Builder
    "ConfigBuilder",
    "ConfigSource",
    "EnvReader",
    "source_from_env",
    "source_from_file",
    # Logging
    "build_logging_config",
    "configure_logging_from_cli",
]
