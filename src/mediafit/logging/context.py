"""Transcode context for structured logging.

Uses contextvars so every log record emitted while a source file is being
transcoded carries that file and the style it is rendered for.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_source_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source_path", default=None
)
_style: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "style", default=None
)


def get_transcode_context() -> tuple[str | None, str | None]:
    """Return (source_path, style) for the current context."""
    return _source_path.get(), _style.get()


@contextmanager
def transcode_context(
    source: Path | str,
    style: str | None = None,
) -> Generator[None, None, None]:
    """Tag log records with the file being transcoded.

    Args:
        source: Source media path.
        style: Name of the style being rendered, if any.

    Example:
        with transcode_context("/media/clip.mp4", "thumb"):
            logger.info("Transcoding")  # tagged [thumb:clip.mp4]
    """
    source_token = _source_path.set(str(source))
    style_token = _style.set(style)
    try:
        yield
    finally:
        _source_path.reset(source_token)
        _style.reset(style_token)


class TranscodeContextFilter(logging.Filter):
    """Logging filter that injects transcode context into log records.

    Adds ``source_path`` and ``style`` for JSON output and a compact
    ``transcode_tag`` such as ``[thumb:clip.mp4] `` for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Enrich the record; never filters anything out."""
        source_path, style = get_transcode_context()
        record.source_path = source_path
        record.style = style

        if source_path:
            name = Path(source_path).name
            record.transcode_tag = f"[{style}:{name}] " if style else f"[{name}] "
        else:
            record.transcode_tag = ""

        return True
