"""MediaIntrospector interface for source metadata extraction."""

from pathlib import Path
from typing import Protocol

from mediafit.exceptions import MediafitError
from mediafit.geometry.types import MediaMetadata


class MediaIntrospectionError(MediafitError):
    """Raised when media introspection fails."""

    pass


class MediaIntrospector(Protocol):
    """Protocol for media introspection implementations.

    Implementations extract the size, aspect ratio, rotation, format and
    duration the geometry engine and transcoder need.
    """

    def get_metadata(self, path: Path) -> MediaMetadata | None:
        """Extract metadata from a media file.

        Args:
            path: Path to the media file.

        Returns:
            MediaMetadata, or None if the file has no video stream.

        Raises:
            MediaIntrospectionError: If the file cannot be introspected.
        """
        ...
