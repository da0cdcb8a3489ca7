"""Tests for the Transcoder."""

import logging
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from mediafit.executor import ToolNotFoundError
from mediafit.executor.transcode import (
    TranscodeError,
    TranscodeOptions,
    Transcoder,
)
from mediafit.geometry import InvalidGeometryError, MediaMetadata
from mediafit.introspector import MediaIntrospectionError

FFMPEG = Path("/usr/bin/ffmpeg")


@pytest.fixture
def make_transcoder(stub_introspector, fake_runner, landscape_meta):
    """Build a Transcoder around a stub introspector and fake runner."""

    def factory(options=None, meta=landscape_meta, runner=None, **kwargs):
        introspector = kwargs.pop("introspector", None) or stub_introspector(meta)
        return Transcoder(
            options or TranscodeOptions(geometry="320x240"),
            introspector=introspector,
            runner=runner or fake_runner(),
            ffmpeg_path=FFMPEG,
            **kwargs,
        )

    return factory


class TestBuildCommand:
    """Tests for Transcoder.build_command."""

    def test_builds_command(self, make_transcoder, source_file, tmp_path):
        transcoder = make_transcoder()
        cmd = transcoder.build_command(source_file, tmp_path / "out.mp4")
        assert cmd[0] == str(FFMPEG)
        assert cmd[cmd.index("-s") + 1] == "320x240"

    def test_unsupported_source_returns_none(self, make_transcoder, source_file):
        transcoder = make_transcoder(meta=None)
        assert transcoder.build_command(source_file, Path("out.mp4")) is None

    def test_introspection_failure_returns_none(
        self, make_transcoder, stub_introspector, source_file, caplog
    ):
        introspector = stub_introspector(error=MediaIntrospectionError("bad file"))
        transcoder = make_transcoder(introspector=introspector)
        with caplog.at_level(logging.WARNING):
            assert transcoder.build_command(source_file, Path("out.mp4")) is None
        assert "[transcoder] Could not introspect" in caplog.text

    def test_missing_size_returns_none(self, make_transcoder, source_file):
        transcoder = make_transcoder(meta=MediaMetadata(format="matroska"))
        assert transcoder.build_command(source_file, Path("out.mkv")) is None

    def test_invalid_geometry_propagates(self, make_transcoder, source_file):
        transcoder = make_transcoder(TranscodeOptions(geometry="huge"))
        with pytest.raises(InvalidGeometryError):
            transcoder.build_command(source_file, Path("out.mp4"))


class TestMake:
    """Tests for Transcoder.make."""

    def test_success(self, make_transcoder, fake_runner, source_file, tmp_path, caplog):
        runner = fake_runner()
        transcoder = make_transcoder(runner=runner, timeout=600)
        dest = tmp_path / "out.mp4"

        with caplog.at_level(logging.INFO):
            result = transcoder.make(source_file, dest)

        assert result.success
        assert not result.passthrough
        assert result.output_path == dest
        assert result.command == runner.calls[0][0]
        assert runner.calls[0][1] == 600
        assert "[transcoder] Transcoding supported file" in caplog.text
        assert "Successfully transcoded clip.mp4" in caplog.text

    def test_passthrough_copies_source(
        self, make_transcoder, fake_runner, source_file, tmp_path
    ):
        runner = fake_runner()
        transcoder = make_transcoder(meta=None, runner=runner)
        dest = tmp_path / "copy.mp4"

        result = transcoder.make(source_file, dest)

        assert result.success
        assert result.passthrough
        assert dest.read_bytes() == source_file.read_bytes()
        assert runner.calls == []

    def test_failure_raises_when_whiny(self, make_transcoder, fake_runner, source_file):
        runner = fake_runner(stderr="line1\nInvalid argument\n", returncode=1)
        transcoder = make_transcoder(runner=runner)

        with pytest.raises(TranscodeError) as exc_info:
            transcoder.make(source_file, Path("out.mp4"))

        error = exc_info.value
        assert error.returncode == 1
        assert "error while transcoding clip.mp4" in str(error)
        assert error.stderr_tail.endswith("Invalid argument")

    def test_failure_returns_result_when_not_whiny(
        self, make_transcoder, fake_runner, source_file, caplog
    ):
        runner = fake_runner(stderr="boom", returncode=1)
        options = TranscodeOptions(geometry="320x240", whiny=False)
        transcoder = make_transcoder(options, runner=runner)

        with caplog.at_level(logging.WARNING):
            result = transcoder.make(source_file, Path("out.mp4"))

        assert not result.success
        assert result.output_path is None
        assert "boom" in result.error_message
        assert "error while transcoding" in caplog.text

    def test_timeout_treated_as_failure(
        self, make_transcoder, fake_runner, source_file
    ):
        runner = fake_runner(error=subprocess.TimeoutExpired(["ffmpeg"], 5))
        transcoder = make_transcoder(runner=runner, timeout=5)

        with pytest.raises(TranscodeError, match="timed out after 5s") as exc_info:
            transcoder.make(source_file, Path("out.mp4"))
        assert exc_info.value.returncode == -1

    def test_stderr_tail_is_limited(self, make_transcoder, fake_runner, source_file):
        stderr = "\n".join(f"line {i}" for i in range(100))
        runner = fake_runner(stderr=stderr, returncode=1)
        transcoder = make_transcoder(runner=runner)

        with pytest.raises(TranscodeError) as exc_info:
            transcoder.make(source_file, Path("out.mp4"))
        tail = exc_info.value.stderr_tail.splitlines()
        assert len(tail) == 20
        assert tail[-1] == "line 99"

    def test_uses_injected_logger(self, make_transcoder, source_file, tmp_path, caplog):
        logger = logging.getLogger("attachments")
        transcoder = make_transcoder(logger=logger)
        with caplog.at_level(logging.INFO, logger="attachments"):
            transcoder.make(source_file, tmp_path / "out.mp4")
        assert any(r.name == "attachments" for r in caplog.records)


class TestToolResolution:
    """Tests for lazy ffmpeg/ffprobe lookup."""

    def test_ffmpeg_resolved_once(self, stub_introspector, landscape_meta):
        transcoder = Transcoder(
            TranscodeOptions(), introspector=stub_introspector(landscape_meta)
        )
        with patch(
            "mediafit.executor.transcode.executor.require_tool",
            return_value=Path("/opt/ffmpeg"),
        ) as mock_require:
            assert transcoder.ffmpeg_path == Path("/opt/ffmpeg")
            assert transcoder.ffmpeg_path == Path("/opt/ffmpeg")
        mock_require.assert_called_once_with("ffmpeg", None)

    def test_missing_ffprobe_falls_back_to_copy(self, source_file, tmp_path):
        """Without ffprobe the source cannot be introspected, so it is copied."""
        transcoder = Transcoder(TranscodeOptions(geometry="10x10"), ffmpeg_path=FFMPEG)
        with (
            patch(
                "mediafit.executor.transcode.executor.get_tool_path",
                return_value=None,
            ),
            patch(
                "mediafit.introspector.ffprobe.require_tool",
                side_effect=ToolNotFoundError("ffprobe"),
            ),
        ):
            result = transcoder.make(source_file, tmp_path / "out.mp4")
        assert result.passthrough
