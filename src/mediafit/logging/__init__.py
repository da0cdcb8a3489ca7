"""Structured logging for mediafit.

Configurable text or JSON output with file rotation, plus a transcode
context that tags records with the file and style being rendered.
"""

from mediafit.logging.config import configure_logging
from mediafit.logging.context import (
    TranscodeContextFilter,
    get_transcode_context,
    transcode_context,
)
from mediafit.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "TranscodeContextFilter",
    "configure_logging",
    "get_transcode_context",
    "transcode_context",
]
