"""Unit tests for logging context module."""

import logging
import threading
from pathlib import Path

from mediafit.logging.context import (
    TranscodeContextFilter,
    get_transcode_context,
    transcode_context,
)


def make_record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)


class TestTranscodeContextManager:
    """Tests for transcode_context context manager."""

    def test_default_context_is_none(self) -> None:
        assert get_transcode_context() == (None, None)

    def test_sets_and_restores_values(self) -> None:
        with transcode_context(Path("/media/clip.mp4"), "thumb"):
            assert get_transcode_context() == ("/media/clip.mp4", "thumb")
        assert get_transcode_context() == (None, None)

    def test_nested_contexts_restore_outer(self) -> None:
        with transcode_context("/media/a.mp4", "small"):
            with transcode_context("/media/b.mp4"):
                assert get_transcode_context() == ("/media/b.mp4", None)
            assert get_transcode_context() == ("/media/a.mp4", "small")

    def test_restored_after_exception(self) -> None:
        try:
            with transcode_context("/media/a.mp4"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_transcode_context() == (None, None)

    def test_isolated_between_threads(self) -> None:
        """A context set in one thread is not visible in another."""
        seen = []

        def worker() -> None:
            seen.append(get_transcode_context())

        with transcode_context("/media/a.mp4", "thumb"):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()

        assert seen == [(None, None)]


class TestTranscodeContextFilter:
    """Tests for TranscodeContextFilter."""

    def test_adds_tag_with_style(self) -> None:
        record = make_record()
        with transcode_context("/media/clip.mp4", "thumb"):
            assert TranscodeContextFilter().filter(record)
        assert record.transcode_tag == "[thumb:clip.mp4] "
        assert record.source_path == "/media/clip.mp4"
        assert record.style == "thumb"

    def test_adds_tag_without_style(self) -> None:
        record = make_record()
        with transcode_context("/media/clip.mp4"):
            TranscodeContextFilter().filter(record)
        assert record.transcode_tag == "[clip.mp4] "

    def test_empty_tag_outside_context(self) -> None:
        record = make_record()
        assert TranscodeContextFilter().filter(record)
        assert record.transcode_tag == ""
        assert record.source_path is None
