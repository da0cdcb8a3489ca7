"""Transcoder: runs ffmpeg to render a source into one output.

Sources that cannot be introspected, or whose geometry cannot be resolved
for lack of a size, are copied to the destination untouched.
"""

import logging
import shutil
import subprocess  # nosec B404 - only for the TimeoutExpired type
from pathlib import Path

from mediafit.config.models import ToolPathsConfig
from mediafit.core.subprocess_utils import CommandRunner, run_command
from mediafit.executor.interface import get_tool_path, require_tool
from mediafit.geometry import UnresolvableGeometryError
from mediafit.introspector import (
    FFprobeIntrospector,
    MediaIntrospectionError,
    MediaIntrospector,
)

from .command import build_transcode_command
from .decisions import plan_transcode
from .types import TranscodeError, TranscodeOptions, TranscodeResult

STDERR_TAIL_LINES = 20


def _stderr_tail(stderr: str, lines: int = STDERR_TAIL_LINES) -> str:
    return "\n".join(stderr.strip().splitlines()[-lines:])


class Transcoder:
    """Transcodes media files according to TranscodeOptions."""

    def __init__(
        self,
        options: TranscodeOptions,
        *,
        introspector: MediaIntrospector | None = None,
        runner: CommandRunner = run_command,
        ffmpeg_path: Path | None = None,
        tools: ToolPathsConfig | None = None,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the transcoder.

        Args:
            options: Output options.
            introspector: Metadata source. Defaults to ffprobe.
            runner: Command runner used to invoke ffmpeg.
            ffmpeg_path: Explicit ffmpeg path. Resolved on first use if None.
            tools: Configured tool paths used when resolving ffmpeg/ffprobe.
            timeout: Encoder timeout in seconds (None = no limit).
            logger: Logger to report progress on.
        """
        self.options = options
        self.runner = runner
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self._introspector = introspector
        self._ffmpeg_path = ffmpeg_path
        self._tools = tools

    @property
    def ffmpeg_path(self) -> Path:
        """Path to ffmpeg, resolved on first use.

        Raises:
            ToolNotFoundError: If ffmpeg is not available.
        """
        if self._ffmpeg_path is None:
            self._ffmpeg_path = require_tool("ffmpeg", self._tools)
        return self._ffmpeg_path

    @property
    def introspector(self) -> MediaIntrospector:
        if self._introspector is None:
            ffprobe = get_tool_path("ffprobe", self._tools)
            self._introspector = FFprobeIntrospector(ffprobe_path=ffprobe)
        return self._introspector

    def log(self, level: int, message: str, *args: object) -> None:
        self.logger.log(level, "[transcoder] " + message, *args)

    def build_command(self, source: Path, destination: Path) -> list[str] | None:
        """Build the ffmpeg command for ``source``.

        Returns:
            The command, or None if the source should be copied untouched.

        Raises:
            InvalidGeometryError: If the configured geometry is malformed.
        """
        try:
            meta = self.introspector.get_metadata(source)
        except MediaIntrospectionError as e:
            self.log(logging.WARNING, "Could not introspect %s: %s", source, e)
            return None

        if meta is None:
            self.log(logging.INFO, "Unsupported file %s", source)
            return None

        try:
            plan = plan_transcode(meta, self.options)
        except UnresolvableGeometryError as e:
            self.log(logging.WARNING, "Passing %s through untouched: %s", source, e)
            return None

        if plan.unchanged:
            self.log(
                logging.DEBUG,
                "Geometry %s leaves %s at its current size",
                self.options.geometry,
                source,
            )
        return build_transcode_command(self.ffmpeg_path, source, destination, plan)

    def make(self, source: Path, destination: Path) -> TranscodeResult:
        """Render ``source`` into ``destination``.

        Args:
            source: Input media file.
            destination: Output path; its parent directory must exist.

        Returns:
            TranscodeResult describing the outcome.

        Raises:
            TranscodeError: If ffmpeg fails and the options are whiny.
            InvalidGeometryError: If the configured geometry is malformed.
        """
        cmd = self.build_command(source, destination)
        if cmd is None:
            shutil.copyfile(source, destination)
            return TranscodeResult(
                success=True, output_path=destination, passthrough=True
            )

        self.log(logging.INFO, "Transcoding supported file %s", source)
        try:
            _, stderr, returncode = self.runner(cmd, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            stderr, returncode = f"timed out after {self.timeout}s", -1

        if returncode != 0:
            tail = _stderr_tail(stderr)
            message = f"error while transcoding {source.name}: {tail or returncode}"
            if self.options.whiny:
                raise TranscodeError(message, returncode=returncode, stderr_tail=tail)
            self.log(logging.WARNING, "%s", message)
            return TranscodeResult(
                success=False, output_path=None, command=cmd, error_message=message
            )

        self.log(
            logging.INFO, "Successfully transcoded %s to %s", source.name, destination
        )
        return TranscodeResult(success=True, output_path=destination, command=cmd)
