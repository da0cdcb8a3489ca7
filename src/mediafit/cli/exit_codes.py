"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (geometry, config, styles)
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
    50-59: Analysis errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for mediafit CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    INVALID_GEOMETRY = 10
    CONFIG_ERROR = 11
    STYLE_ERROR = 12

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    TRANSCODE_FAILED = 40

    # Analysis errors (50-59)
    PARSE_ERROR = 50
