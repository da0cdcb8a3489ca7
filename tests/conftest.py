"""Shared test fixtures for mediafit."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from mediafit.config.loader import clear_config_cache
from mediafit.geometry import MediaMetadata


def load_ffprobe_fixture(name: str) -> dict:
    """Load an ffprobe JSON fixture by name.

    Args:
        name: Name of the fixture file (without .json extension).

    Returns:
        Parsed JSON data from the fixture.
    """
    fixture_path = Path(__file__).parent / "fixtures" / "ffprobe" / f"{name}.json"
    return json.loads(fixture_path.read_text())


@pytest.fixture
def landscape_fixture() -> dict:
    """640x480 H.264 clip with an audio track."""
    return load_ffprobe_fixture("landscape_h264")


@pytest.fixture
def rotated_fixture() -> dict:
    """1920x1080 phone recording with a -90 degree display matrix."""
    return load_ffprobe_fixture("rotated_phone")


@pytest.fixture
def audio_only_fixture() -> dict:
    """MP3 with embedded cover art and no real video stream."""
    return load_ffprobe_fixture("audio_only")


@pytest.fixture
def missing_size_fixture() -> dict:
    """Video stream without width/height."""
    return load_ffprobe_fixture("missing_size")


@pytest.fixture
def landscape_meta() -> MediaMetadata:
    """Metadata for a 640x480 4:3 source."""
    return MediaMetadata(
        width=640,
        height=480,
        aspect=None,
        rotation=None,
        format="mov,mp4,m4a,3gp,3g2,mj2",
        duration_seconds=12.0,
    )


class StubIntrospector:
    """MediaIntrospector returning canned metadata and recording calls."""

    def __init__(self, meta: MediaMetadata | None = None, error=None) -> None:
        self.meta = meta
        self.error = error
        self.calls: list[Path] = []

    def get_metadata(self, path: Path) -> MediaMetadata | None:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return self.meta


class FakeRunner:
    """CommandRunner recording commands and returning a fixed result."""

    def __init__(
        self, stdout: str = "", stderr: str = "", returncode: int = 0, error=None
    ) -> None:
        self.result = (stdout, stderr, returncode)
        self.error = error
        self.calls: list[tuple[list, float | None]] = []

    def __call__(self, args, timeout=None):
        self.calls.append((list(args), timeout))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def stub_introspector():
    """Factory for StubIntrospector instances."""
    return StubIntrospector


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """A small placeholder source file."""
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path):
    """Point mediafit at an empty config and clear the config cache.

    Keeps tests independent of ~/.mediafit/config.toml and any MEDIAFIT_*
    variables set in the developer's shell.
    """
    clean_env = {k: v for k, v in os.environ.items() if not k.startswith("MEDIAFIT_")}
    clean_env["MEDIAFIT_CONFIG_PATH"] = str(tmp_path / "no-config.toml")
    clear_config_cache()
    with patch.dict(os.environ, clean_env, clear=True):
        yield
    clear_config_cache()
