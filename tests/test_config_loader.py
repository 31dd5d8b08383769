"""Tests for configuration loading and validation."""
from pathlib import Path

import pytest

from tap_capture.config_loader import ConfigLoader
from tap_capture.constants import DEFAULT_LOCK_TIMEOUT
from tap_capture.models import AppConfig


def write_config(tmp_path, body):
    path = tmp_path / "config.toml"
    path.write_text(body)
    return path


class TestConfigLoader:
    def test_defaults_when_no_file_found(self, tmp_path, monkeypatch):
        monkeypatch.setattr(ConfigLoader, "DEFAULT_PATHS", [tmp_path / "missing.toml"])
        config, path = ConfigLoader.load()
        assert path is None
        assert config == AppConfig()
        assert config.backend == "evdev"
        assert config.lock_timeout == DEFAULT_LOCK_TIMEOUT

    def test_default_path_is_used(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, '[app]\nbackend = "pynput"\n')
        monkeypatch.setattr(ConfigLoader, "DEFAULT_PATHS", [tmp_path / "missing.toml", path])
        config, loaded = ConfigLoader.load()
        assert loaded == path.resolve()
        assert config.backend == "pynput"

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(tmp_path / "nope.toml")

    def test_full_config(self, tmp_path):
        path = write_config(tmp_path, """
[app]
log_level = "debug"
log_file = "~/logs/tap-capture.log"
verbose_logging = true
backend = "evdev"
device_name = "A4tech"
lock_timeout = 1
""")
        config, _ = ConfigLoader.load(path)
        assert config.log_level == "DEBUG"
        assert config.log_file == Path("~/logs/tap-capture.log").expanduser()
        assert config.verbose_logging is True
        assert config.device_name == "A4tech"
        assert config.lock_timeout == 1.0

    def test_empty_file_uses_defaults(self, tmp_path):
        config, _ = ConfigLoader.load(write_config(tmp_path, ""))
        assert config == AppConfig()

    @pytest.mark.parametrize("body", [
        '[app]\nlog_level = "LOUD"\n',
        '[app]\nbackend = "x11"\n',
        '[app]\nlock_timeout = 0\n',
        '[app]\nbackend = "pynput"\ndevice_name = "A4tech"\n',
    ])
    def test_invalid_values_raise_value_error(self, tmp_path, body):
        with pytest.raises(ValueError, match="Invalid configuration"):
            ConfigLoader.load(write_config(tmp_path, body))

    @pytest.mark.parametrize("body", [
        '[app]\nverbose_logging = "yes"\n',
        '[app]\nlock_timeout = "fast"\n',
        '[app]\nlock_timeout = true\n',
        '[app]\nlog_file = 3\n',
    ])
    def test_wrong_types_raise_type_error(self, tmp_path, body):
        with pytest.raises(TypeError):
            ConfigLoader.load(write_config(tmp_path, body))

    def test_invalid_toml_raises_value_error(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid TOML syntax"):
            ConfigLoader.load(write_config(tmp_path, "[app\n"))
