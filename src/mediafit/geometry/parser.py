"""Pure parser for ImageMagick-style geometry strings.

Examples of accepted input: ``"300x200"``, ``"x150"``, ``"300x200#"``,
``"<640x480"``, ``"100x100!"``. The modifier characters ``#``, ``<`` and
``>`` may sit at either end of the string; a trailing ``!`` on either
dimension token forces the exact size.
"""

import re

from mediafit.geometry.exceptions import InvalidGeometryError
from mediafit.geometry.types import GeometrySpec, ResizeMode

MODIFIER_MODES: dict[str, ResizeMode] = {
    "#": ResizeMode.PAD,
    "<": ResizeMode.ENLARGE_ONLY,
    ">": ResizeMode.SHRINK_ONLY,
}

FORCE_MARKER = "!"

# Highest precedence first.
_MODE_PRECEDENCE = (
    ResizeMode.FORCE_ASPECT,
    ResizeMode.PAD,
    ResizeMode.ENLARGE_ONLY,
    ResizeMode.SHRINK_ONLY,
)

_LEADING_DIGITS = re.compile(r"\d*")


def _strip_modifiers(raw: str) -> tuple[str, set[ResizeMode]]:
    """Remove modifier characters from both ends of a geometry string."""
    modes: set[ResizeMode] = set()
    body = raw
    if body and body[0] in MODIFIER_MODES:
        modes.add(MODIFIER_MODES[body[0]])
        body = body[1:]
    if body and body[-1] in MODIFIER_MODES:
        modes.add(MODIFIER_MODES[body[-1]])
        body = body[:-1]
    return body, modes


def _parse_dimension(token: str) -> tuple[int | None, bool]:
    """Parse one dimension token into (value, forced)."""
    forced = token.endswith(FORCE_MARKER)
    if forced:
        token = token.rstrip(FORCE_MARKER)
    digits = _LEADING_DIGITS.match(token).group(0)
    return (int(digits) if digits else None), forced


def parse_geometry(raw: str | None) -> GeometrySpec:
    """Parse a geometry string into a GeometrySpec.

    Args:
        raw: Geometry string such as ``"300x200#"``.

    Returns:
        GeometrySpec with target width/height and resize mode.

    Raises:
        InvalidGeometryError: If no numeric WxH pattern can be extracted,
            or if either dimension is zero.
    """
    if not raw or not raw.strip():
        raise InvalidGeometryError(raw, "geometry is empty")

    body, modes = _strip_modifiers(raw.strip())

    tokens = body.split("x")
    if len(tokens) != 2:
        raise InvalidGeometryError(raw, "expected a single 'x' separating WxH")

    width, width_forced = _parse_dimension(tokens[0])
    height, height_forced = _parse_dimension(tokens[1])
    if width is None and height is None:
        raise InvalidGeometryError(raw, "no width or height found")
    if width == 0 or height == 0:
        raise InvalidGeometryError(raw, "width and height must be positive")

    if width_forced or height_forced:
        modes.add(ResizeMode.FORCE_ASPECT)

    mode = next((m for m in _MODE_PRECEDENCE if m in modes), ResizeMode.NONE)
    return GeometrySpec(width=width, height=height, mode=mode)
