"""FFprobe-based implementation of the MediaIntrospector protocol."""

import json
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from mediafit.core.subprocess_utils import CommandRunner, run_command
from mediafit.executor.interface import ToolNotFoundError, require_tool
from mediafit.geometry.types import MediaMetadata
from mediafit.introspector.interface import MediaIntrospectionError
from mediafit.introspector.parsers import parse_media_metadata

FFPROBE_TIMEOUT = 60


class FFprobeIntrospector:
    """Extracts MediaMetadata from media files using ffprobe."""

    def __init__(
        self,
        ffprobe_path: Path | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Explicit path to ffprobe. Looked up on PATH if None.
            runner: Command runner used to invoke ffprobe.

        Raises:
            MediaIntrospectionError: If ffprobe is not available.
        """
        if ffprobe_path is None:
            try:
                ffprobe_path = require_tool("ffprobe")
            except ToolNotFoundError as e:
                raise MediaIntrospectionError(str(e)) from e
        self._ffprobe_path = ffprobe_path
        self._runner = runner

    def get_metadata(self, path: Path) -> MediaMetadata | None:
        """Extract metadata from a media file.

        Args:
            path: Path to the media file.

        Returns:
            MediaMetadata, or None if the file has no video stream.

        Raises:
            MediaIntrospectionError: If the file cannot be introspected.
        """
        if not path.exists():
            raise MediaIntrospectionError(f"File not found: {path}")
        return parse_media_metadata(self.probe(path), str(path))

    def probe(self, path: Path) -> dict:
        """Run ffprobe and return its parsed JSON output.

        Raises:
            MediaIntrospectionError: If ffprobe fails, times out or prints
                something other than the expected JSON.
        """
        args: list[str | Path] = [
            self._ffprobe_path,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_streams",
            "-show_format",
            path,
        ]
        try:
            stdout, stderr, returncode = self._runner(args, timeout=FFPROBE_TIMEOUT)
        except subprocess.TimeoutExpired as e:
            raise MediaIntrospectionError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e

        if returncode != 0:
            raise MediaIntrospectionError(
                f"ffprobe failed for {path}: {stderr.strip() or returncode}"
            )

        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise MediaIntrospectionError(
                f"Invalid ffprobe output for {path}: {e}"
            ) from e

        if "streams" not in data:
            raise MediaIntrospectionError(
                f"Missing 'streams' in ffprobe output for {path}. "
                "File may be corrupted or not a valid media file."
            )
        return data
