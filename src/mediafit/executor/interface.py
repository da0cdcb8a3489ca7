"""External tool resolution.

Tools are looked up in the configured paths first (config file, environment
or CLI flags, via ToolPathsConfig) and then on the system PATH.
"""

import logging
import shutil
from pathlib import Path

from mediafit.config.models import ToolPathsConfig
from mediafit.exceptions import MediafitError

logger = logging.getLogger(__name__)

KNOWN_TOOLS = ("ffmpeg", "ffprobe")

_INSTALL_HINT = (
    "Install ffmpeg (which provides ffprobe) or configure its path via "
    "MEDIAFIT_{upper}_PATH or [tools] {name} in ~/.mediafit/config.toml"
)


class ToolNotFoundError(MediafitError):
    """Raised when a required external tool is not available."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        hint = _INSTALL_HINT.format(upper=tool_name.upper(), name=tool_name)
        super().__init__(f"Required tool not available: {tool_name}. {hint}")


def get_tool_path(
    tool_name: str, tools: ToolPathsConfig | None = None
) -> Path | None:
    """Get the path to a tool, or None if not available.

    Args:
        tool_name: Name of the tool ("ffmpeg" or "ffprobe").
        tools: Configured tool paths. Unset entries fall back to PATH.

    Returns:
        Path to the executable, or None.
    """
    configured = getattr(tools, tool_name, None) if tools is not None else None
    if configured is not None:
        configured = Path(configured).expanduser()
        if configured.is_file():
            return configured
        logger.warning(
            "Configured %s path does not exist: %s; falling back to PATH",
            tool_name,
            configured,
        )

    found = shutil.which(tool_name)
    return Path(found) if found else None


def require_tool(tool_name: str, tools: ToolPathsConfig | None = None) -> Path:
    """Get the path to a required tool.

    Raises:
        ToolNotFoundError: If the tool is not available.
    """
    path = get_tool_path(tool_name, tools)
    if path is None:
        raise ToolNotFoundError(tool_name)
    return path


def check_tool_availability(tools: ToolPathsConfig | None = None) -> dict[str, bool]:
    """Map each known tool name to whether it is available."""
    return {name: get_tool_path(name, tools) is not None for name in KNOWN_TOOLS}
