"""Tests for the JSON log formatter."""

import json
import logging
import sys

from mediafit.logging import JSONFormatter, TranscodeContextFilter, transcode_context


def make_record(msg="hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "mediafit.test", logging.WARNING, __file__, 10, msg, args, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(make_record()))
        assert entry["level"] == "WARNING"
        assert entry["message"] == "hello world"
        assert entry["logger"] == "mediafit.test"
        assert entry["timestamp"].endswith("+00:00")
        assert "context" not in entry

    def test_extra_attributes_in_context(self) -> None:
        record = make_record(command="ffprobe", returncode=1)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["context"] == {"command": "ffprobe", "returncode": 1}

    def test_transcode_context_included(self) -> None:
        record = make_record()
        with transcode_context("/media/clip.mp4", "thumb"):
            TranscodeContextFilter().filter(record)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["context"] == {"source_path": "/media/clip.mp4", "style": "thumb"}

    def test_filtered_record_outside_transcode_has_no_context(self) -> None:
        """Empty transcode fields and the text-only tag are left out."""
        record = make_record()
        TranscodeContextFilter().filter(record)
        entry = json.loads(JSONFormatter().format(record))
        assert "context" not in entry

    def test_non_serializable_values_stringified(self) -> None:
        record = make_record(elapsed=object())
        entry = json.loads(JSONFormatter().format(record))
        assert entry["context"]["elapsed"].startswith("<object object")

    def test_exception_included(self) -> None:
        try:
            raise ValueError("bad geometry")
        except ValueError:
            record = logging.LogRecord(
                "mediafit", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad geometry" in entry["exception"]
