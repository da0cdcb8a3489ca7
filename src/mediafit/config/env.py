"""Typed access to MEDIAFIT_* environment variables.

EnvReader wraps a mapping (os.environ unless one is injected) so
configuration code can be exercised in tests without touching the real
environment. Unset variables yield the caller's default; values that fail
conversion are logged and also yield the default.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        reader = EnvReader(env={"MEDIAFIT_TRANSCODE_TIMEOUT": "600"})
        reader.get_int("MEDIAFIT_TRANSCODE_TIMEOUT", 1800)  # 600
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _convert(
        self,
        var: str,
        default: T | None,
        convert: Callable[[str], T],
        label: str,
    ) -> T | None:
        raw = self._env.get(var)
        if raw is None:
            return default
        try:
            return convert(raw)
        except ValueError:
            logger.warning("Invalid %s value for %s: %r", label, var, raw)
            return default

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Return the raw value. An empty string counts as set."""
        return self._env.get(var, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        return self._convert(var, default, int, "integer")

    def get_float(self, var: str, default: float | None = None) -> float | None:
        return self._convert(var, default, float, "float")

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Parse a flag such as MEDIAFIT_AUTO_ROTATE.

        "true", "1", "yes" and "on" (any case) are true; any other set value
        is false.
        """
        return self._convert(
            var, default, lambda raw: raw.strip().lower() in _TRUE_VALUES, "boolean"
        )

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Return a user-expanded path.

        Tool executables must already exist (``must_exist``); log files may
        be created later, so MEDIAFIT_LOG_FILE is read with must_exist=False.
        A missing path is logged and replaced by ``default``.
        """
        path = self._convert(var, None, lambda raw: Path(raw).expanduser(), "path")
        if path is None:
            return default
        if must_exist and not path.exists():
            logger.warning("%s points to a non-existent path: %s", var, path)
            return default
        return path
