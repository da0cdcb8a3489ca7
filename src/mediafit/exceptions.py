"""Base exception for mediafit.

Component-specific errors live beside the components that raise them and
derive from MediafitError so callers can catch everything in one place.
"""


class MediafitError(Exception):
    """Base class for all mediafit errors."""

    pass
