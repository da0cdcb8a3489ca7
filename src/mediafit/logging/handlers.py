"""JSON log formatter for mediafit."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries, plus those Formatter.format() adds.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

# Set by TranscodeContextFilter. transcode_tag only serves the text format.
_TRANSCODE_FIELDS = ("source_path", "style")
_TEXT_ONLY_FIELDS = frozenset({"transcode_tag"})


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Output keys: ``timestamp`` (ISO-8601, UTC), ``level``, ``message``,
    ``logger`` (omitted for the root logger), ``context`` and ``exception``
    when present. ``context`` holds the ``extra=`` values passed to the
    logging call and the source/style of the transcode in progress.
    """

    def _context(self, record: logging.LogRecord) -> dict[str, Any]:
        context: dict[str, Any] = {}
        for key, value in vars(record).items():
            if key.startswith("_") or key in _RECORD_ATTRS:
                continue
            if key in _TEXT_ONLY_FIELDS or key in _TRANSCODE_FIELDS:
                continue
            context[key] = value
        # Only tag records emitted inside a transcode_context
        context.update(
            (key, getattr(record, key))
            for key in _TRANSCODE_FIELDS
            if getattr(record, key, None)
        )
        return context

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name

        context = self._context(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
