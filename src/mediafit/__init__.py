"""mediafit: geometry resolution and ffmpeg transcoding for images and video."""

__version__ = "0.3.0"
