"""Subprocess wrapper for invoking ffmpeg and ffprobe.

Every external tool call in mediafit goes through run_command (or a
substitute satisfying CommandRunner) so timeouts, decoding and logging are
handled the same way.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import time
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120


class CommandRunner(Protocol):
    """Narrow interface the transcoder uses to run the encoder."""

    def __call__(
        self, args: list[str | Path], timeout: float | None = ...
    ) -> tuple[str, str, int]:
        """Run a command and return (stdout, stderr, returncode)."""
        ...


def run_command(
    args: list[str | Path],
    timeout: float | None = DEFAULT_TIMEOUT,
) -> tuple[str, str, int]:
    """Run an external command, capturing its output as text.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds, or None for no limit.

    Returns:
        Tuple of (stdout, stderr, returncode).

    Raises:
        subprocess.TimeoutExpired: If the command runs past the timeout.
            The child is killed before the exception propagates.
    """
    str_args = [str(arg) for arg in args]
    command_name = Path(str_args[0]).name if str_args else "unknown"

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )
    start_time = time.monotonic()

    try:
        result = subprocess.run(  # nosec B603 - args are built, never shell-parsed
            str_args,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(time.monotonic() - start_time, 3),
            },
        )
        raise

    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(time.monotonic() - start_time, 3),
            "returncode": result.returncode,
        },
    )
    return result.stdout or "", result.stderr or "", result.returncode
