"""Transcode executor: plans, builds and runs ffmpeg for one output.

- TranscodeOptions: what one output should look like
- plan_transcode: pure geometry and seek planning for one source
- build_transcode_command: ffmpeg argument list for a plan
- Transcoder: runs the command, copying unsupported sources untouched
"""

from mediafit.executor.transcode.command import (
    build_param_args,
    build_transcode_command,
)
from mediafit.executor.transcode.decisions import plan_transcode
from mediafit.executor.transcode.executor import Transcoder
from mediafit.executor.transcode.types import (
    DEFAULT_SEEK_SECONDS,
    ComputedFromMetadata,
    ConvertOptions,
    FixedSeconds,
    SeekTime,
    TranscodeError,
    TranscodeOptions,
    TranscodePlan,
    TranscodeResult,
    fraction_of_duration,
)

__all__ = [
    # Types
    "ComputedFromMetadata",
    "ConvertOptions",
    "DEFAULT_SEEK_SECONDS",
    "FixedSeconds",
    "SeekTime",
    "TranscodeError",
    "TranscodeOptions",
    "TranscodePlan",
    "TranscodeResult",
    "fraction_of_duration",
    # Operations
    "Transcoder",
    "build_param_args",
    "build_transcode_command",
    "plan_transcode",
]
