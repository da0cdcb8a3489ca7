"""Fixtures for CLI tests."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mediafit.config import MediafitConfig


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep CLI invocations from reconfiguring the root logger."""
    with patch("mediafit.cli._configure_logging") as mock_configure:
        yield mock_configure


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_obj() -> dict:
    """Context object with a default configuration injected."""
    return {"config": MediafitConfig()}
