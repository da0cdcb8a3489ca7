"""Tests for the top-level CLI group."""

from pathlib import Path

from mediafit.cli import main
from mediafit.cli.exit_codes import ExitCode


class TestMainGroup:
    """Tests for main group options."""

    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("doctor", "inspect", "resolve", "transcode"):
            assert command in result.output

    def test_log_options_forwarded(self, runner, no_logging_setup, tmp_path):
        log_file = tmp_path / "m.log"
        result = runner.invoke(
            main,
            [
                "--log-level",
                "debug",
                "--log-file",
                str(log_file),
                "--log-json",
                "resolve",
                "100x",
                "--size",
                "200x100",
            ],
        )
        assert result.exit_code == 0, result.output
        _, level, file, log_json = no_logging_setup.call_args[0]
        assert (level, file, log_json) == ("debug", log_file, True)

    def test_unreadable_explicit_config(self, runner, tmp_path: Path):
        config = tmp_path / "config.toml"
        config.write_text("[logging\n")
        result = runner.invoke(
            main, ["--config", str(config), "resolve", "100x", "--size", "2x2"]
        )
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Could not read config file" in result.output

    def test_invalid_config_value(self, runner, tmp_path: Path):
        config = tmp_path / "config.toml"
        config.write_text('[logging]\nlevel = "loud"\n')
        result = runner.invoke(
            main, ["--config", str(config), "resolve", "100x", "--size", "2x2"]
        )
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Invalid configuration" in result.output

    def test_config_loaded_into_context(self, runner, tmp_path: Path):
        config = tmp_path / "config.toml"
        config.write_text('[transcode]\npad_color = "white"\n')
        obj: dict = {}
        result = runner.invoke(
            main,
            ["--config", str(config), "resolve", "100x", "--size", "2x2"],
            obj=obj,
        )
        assert result.exit_code == 0, result.output
        assert obj["config"].transcode.pad_color == "white"
