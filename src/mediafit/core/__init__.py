"""Shared utilities with no dependency on the rest of mediafit."""

from mediafit.core.subprocess_utils import CommandRunner, run_command

__all__ = ["CommandRunner", "run_command"]
