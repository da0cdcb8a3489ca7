"""External tool execution.

Only the tool lookup helpers are exported here; import the transcode
executor from mediafit.executor.transcode.
"""

from mediafit.executor.interface import (
    KNOWN_TOOLS,
    ToolNotFoundError,
    check_tool_availability,
    get_tool_path,
    require_tool,
)

__all__ = [
    "KNOWN_TOOLS",
    "ToolNotFoundError",
    "check_tool_availability",
    "get_tool_path",
    "require_tool",
]
