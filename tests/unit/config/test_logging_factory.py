"""Tests for the logging configuration factory."""

from pathlib import Path
from unittest.mock import patch

import pytest

from mediafit.config import (
    LoggingConfig,
    build_logging_config,
    configure_logging_from_cli,
)


class TestBuildLoggingConfig:
    def test_no_overrides_keeps_base(self):
        base = LoggingConfig(level="warning", format="json", max_bytes=1024)
        result = build_logging_config(base)
        assert result == base

    def test_overrides_applied(self):
        base = LoggingConfig(level="warning", backup_count=2)
        result = build_logging_config(
            base, level="debug", file=Path("/tmp/m.log"), format="json"
        )
        assert result.level == "debug"
        assert result.file == Path("/tmp/m.log")
        assert result.format == "json"
        assert result.backup_count == 2

    def test_invalid_override_raises(self):
        with pytest.raises(ValueError):
            build_logging_config(LoggingConfig(), format="yaml")


class TestConfigureLoggingFromCli:
    def test_configures_with_merged_config(self):
        with patch("mediafit.logging.configure_logging") as mock_configure:
            applied = configure_logging_from_cli(LoggingConfig(), level="error")
        mock_configure.assert_called_once_with(applied)
        assert applied.level == "error"
