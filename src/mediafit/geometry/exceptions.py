"""Exceptions raised by the geometry engine."""

from mediafit.exceptions import MediafitError


class GeometryError(MediafitError):
    """Base class for geometry errors."""

    pass


class InvalidGeometryError(GeometryError):
    """Raised when a geometry string has no parseable WxH pattern."""

    def __init__(self, geometry: str | None, reason: str | None = None) -> None:
        """Initialize the error.

        Args:
            geometry: The raw geometry string that failed to parse.
            reason: Optional detail about what was wrong with it.
        """
        self.geometry = geometry
        self.reason = reason
        message = f"Invalid geometry {geometry!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnresolvableGeometryError(GeometryError):
    """Raised when source metadata lacks the size needed for resolution."""

    pass
