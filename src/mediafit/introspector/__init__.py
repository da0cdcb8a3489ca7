"""Source media introspection.

- MediaIntrospector: Protocol defining the introspection interface
- FFprobeIntrospector: Implementation using ffprobe
- parse_media_metadata: Pure ffprobe JSON parser
- MediaIntrospectionError: Exception for introspection failures
"""

from mediafit.introspector.ffprobe import FFprobeIntrospector
from mediafit.introspector.interface import (
    MediaIntrospectionError,
    MediaIntrospector,
)
from mediafit.introspector.parsers import parse_media_metadata

__all__ = [
    "FFprobeIntrospector",
    "MediaIntrospectionError",
    "MediaIntrospector",
    "parse_media_metadata",
]
