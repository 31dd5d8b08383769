"""Configuration loader for tap-capture.

This module handles loading and validating the optional TOML configuration
file. Without a file the daemon runs on built-in defaults.
"""

import tomllib
from pathlib import Path
from typing import ClassVar

from .models import AppConfig


class ConfigLoader:
    """Load and validate TOML configuration files."""

    DEFAULT_PATHS: ClassVar[list[Path]] = [
        Path.home() / '.config/tap-capture/config.toml',
        Path('/etc/tap-capture/config.toml'),
    ]

    @staticmethod
    def load(config_path: Path | None = None) -> tuple[AppConfig, Path | None]:
        """Load configuration from TOML file.

        Args:
            config_path: Path to config file. If None, tries default paths.

        Returns:
            tuple[AppConfig, Path | None]: Parsed configuration and path to
            the loaded file (None when defaults were used)

        Raises:
            FileNotFoundError: If an explicit config_path does not exist
            ValueError: If configuration is invalid
        """
        if config_path:
            if not config_path.exists():
                raise FileNotFoundError(f'Config file not found: {config_path}')  # noqa: TRY003
            config = ConfigLoader._load_from_path(config_path)
            return (config, config_path.resolve())

        for path in ConfigLoader.DEFAULT_PATHS:
            if path.exists():
                config = ConfigLoader._load_from_path(path)
                return (config, path.resolve())

        return (AppConfig(), None)

    @staticmethod
    def _load_from_path(path: Path) -> AppConfig:
        try:
            with path.open('rb') as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f'Invalid TOML syntax in {path}: {e}') from e  # noqa: TRY003

        return ConfigLoader._parse_config(data)

    @staticmethod
    def _parse_config(data: dict) -> AppConfig:
        """Parse TOML data into AppConfig.

        Args:
            data: Parsed TOML data

        Returns:
            AppConfig: Validated configuration object

        Raises:
            ValueError: If configuration is invalid
        """
        app_data = data.get('app', {})
        if not isinstance(app_data, dict):
            raise TypeError("'app' must be a table")  # noqa: TRY003

        log_level = app_data.get('log_level', 'INFO')
        if not isinstance(log_level, str):
            raise TypeError("'log_level' must be a string")  # noqa: TRY003

        log_file_str = app_data.get('log_file')
        if log_file_str is not None and not isinstance(log_file_str, str):
            raise TypeError("'log_file' must be a string")  # noqa: TRY003
        log_file = Path(log_file_str).expanduser() if log_file_str else None

        verbose_logging = app_data.get('verbose_logging', False)
        if not isinstance(verbose_logging, bool):
            raise TypeError("'verbose_logging' must be a boolean")  # noqa: TRY003

        backend = app_data.get('backend', 'evdev')
        if not isinstance(backend, str):
            raise TypeError("'backend' must be a string")  # noqa: TRY003

        device_name = app_data.get('device_name')
        if device_name is not None and not isinstance(device_name, str):
            raise TypeError("'device_name' must be a string")  # noqa: TRY003

        lock_timeout = app_data.get('lock_timeout', AppConfig.lock_timeout)
        if isinstance(lock_timeout, bool) or not isinstance(lock_timeout, (int, float)):
            raise TypeError("'lock_timeout' must be a number")  # noqa: TRY003

        try:
            config = AppConfig(
                log_level=log_level.upper(),
                log_file=log_file,
                verbose_logging=verbose_logging,
                backend=backend.lower(),
                device_name=device_name or None,
                lock_timeout=float(lock_timeout),
            )
        except ValueError as e:
            raise ValueError(f'Invalid configuration: {e}') from e  # noqa: TRY003

        return config
