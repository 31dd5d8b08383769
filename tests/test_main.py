"""Tests for the tap-capture CLI that do not need a session bus."""
from typer.testing import CliRunner

from tap_capture.constants import __version__
from tap_capture.main import app

runner = CliRunner()


class TestCli:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_check_config(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[app]\nbackend = "pynput"\nlog_level = "WARNING"\n')

        result = runner.invoke(app, ["check-config", "--config", str(path)])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.stdout
        assert "Keyboard backend: pynput" in result.stdout
        assert "Log level: WARNING" in result.stdout

    def test_check_config_missing_file(self, tmp_path):
        result = runner.invoke(app, ["check-config", "--config", str(tmp_path / "nope.toml")])
        assert result.exit_code == 1

    def test_begin_rejects_out_of_range_before_calling_bus(self):
        result = runner.invoke(app, ["begin", "100", "3"])
        assert result.exit_code == 2

    def test_begin_rejects_bad_target_count(self):
        result = runner.invoke(app, ["begin", "1000", "256"])
        assert result.exit_code == 2
