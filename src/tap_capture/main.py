"""Main entry point for tap-capture CLI application."""

import asyncio
from pathlib import Path

import typer
from dbus_fast.errors import DBusError

from common.backends import BackendNotAvailableError, create_backend
from common.logging_utils import get_logger
from common.logging_utils import setup_logging_handler

from .capture_service import validate_window
from .config_loader import ConfigLoader
from .constants import BUS_NAME
from .constants import MAX_DURATION_MS
from .constants import MAX_TARGET_COUNT
from .constants import MIN_DURATION_MS
from .constants import MIN_TARGET_COUNT
from .constants import __version__
from .daemon import CaptureDaemon
from .dbus_service import KeyPressedClient
from .dbus_service import connect_session_bus
from .models import AppConfig
from .models import InvalidWindowError

app = typer.Typer(
    help='🎯 Tap Capture - Capture repeated key taps and serve them over D-Bus',
    no_args_is_help=True
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f'tap-capture {__version__}')
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, '--version', callback=_version_callback, is_eager=True,
        help='Show version and exit',
    ),
) -> None:
    """Capture repeated key taps and serve them over D-Bus."""


def _load_config(config: Path | None, debug: bool = False) -> tuple[AppConfig, Path | None]:
    """Load configuration or exit with a readable error."""
    try:
        app_config, config_path = ConfigLoader.load(config)
    except FileNotFoundError as e:
        typer.echo(f'❌ Config file not found: {e}', err=True)
        raise typer.Exit(1) from e
    except Exception as e:
        typer.echo(f'❌ Failed to load config: {e}', err=True)
        raise typer.Exit(1) from e

    if debug:
        app_config.log_level = 'DEBUG'
        app_config.verbose_logging = True

    return app_config, config_path


def _run_client(coro_factory) -> object:
    """Run one client call against the session bus, exiting on bus errors."""
    async def runner():
        bus = await connect_session_bus()
        try:
            return await coro_factory(KeyPressedClient(bus))
        finally:
            bus.disconnect()

    try:
        return asyncio.run(runner())
    except DBusError as e:
        typer.echo(f'❌ D-Bus call failed: {e.text}', err=True)
        typer.echo(f"   Is 'tap-capture serve' running and owning {BUS_NAME}?", err=True)
        raise typer.Exit(1) from e
    except OSError as e:
        typer.echo(f'❌ Cannot connect to the session bus: {e}', err=True)
        raise typer.Exit(1) from e


@app.command()
def serve(
    config: Path | None = typer.Option(None, help='Path to config file'),
    debug: bool = typer.Option(False, '--debug', help='Enable debug logging'),
) -> None:
    """Run the capture daemon in the foreground.

    Listens to the keyboard and serves org.zay.KeyPressed on the session bus
    until Ctrl+C or SIGTERM.

    Examples:
        tap-capture serve
        tap-capture serve --debug
        tap-capture serve --config /path/to/config.toml
    """
    app_config, _config_path = _load_config(config, debug)
    setup_logging_handler(app_config.log_level, app_config.log_file)
    logger = get_logger('tap_capture')

    try:
        backend = create_backend(app_config.backend, device_name=app_config.device_name)
    except BackendNotAvailableError as e:
        typer.echo(f'❌ {e}', err=True)
        raise typer.Exit(1) from e

    typer.echo('✓ Starting tap capture in foreground...', err=True)
    typer.echo('   Press Ctrl+C to stop', err=True)

    daemon = CaptureDaemon(app_config, backend)
    try:
        daemon.run()
    except BackendNotAvailableError as e:
        typer.echo(f'❌ {e}', err=True)
        raise typer.Exit(1) from e
    except Exception as e:
        logger.error(f'Fatal error: {e}', exc_info=True)
        raise typer.Exit(1) from e


@app.command()
def begin(
    duration_ms: int = typer.Argument(..., help=f'Window duration in ms ({MIN_DURATION_MS}-{MAX_DURATION_MS})'),
    target_count: int = typer.Argument(..., help=f'Taps that complete the window ({MIN_TARGET_COUNT}-{MAX_TARGET_COUNT})'),
) -> None:
    """Arm a capture window on the running daemon.

    Examples:
        tap-capture begin 1000 3
    """
    try:
        validate_window(duration_ms, target_count)
    except InvalidWindowError as e:
        typer.echo(f'❌ {e}', err=True)
        raise typer.Exit(2) from e

    _run_client(lambda client: client.init_action(duration_ms, target_count))
    typer.echo(f'✓ Capture window armed: {duration_ms}ms, {target_count} tap(s)')


@app.command()
def drain(
    wait: float = typer.Option(0.0, '--wait', help='Keep polling for up to this many seconds'),
    interval: float = typer.Option(0.1, '--interval', help='Seconds between polls'),
) -> None:
    """Poll the running daemon for the captured taps.

    Prints the captured text, '#escape' if the gesture was cancelled, or
    nothing while the window is incomplete (exit status 1 in that case).

    Examples:
        tap-capture drain
        tap-capture begin 2000 3 && tap-capture drain --wait 2.5
    """
    async def poll(client: KeyPressedClient) -> str:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + wait
        while True:
            result = await client.get_key_seq()
            if result or loop.time() >= deadline:
                return result
            await asyncio.sleep(interval)

    result = _run_client(poll)
    if not result:
        raise typer.Exit(1)
    typer.echo(result)


@app.command()
def check_config(
    config: Path | None = typer.Option(None, help='Path to config file'),
) -> None:
    """Validate configuration file and display the effective settings.

    Examples:
        tap-capture check-config
        tap-capture check-config --config /path/to/config.toml
    """
    app_config, config_path = _load_config(config)

    typer.echo('✓ Configuration is valid\n')
    typer.echo(f'Config file: {config_path or "(none, using defaults)"}')
    typer.echo(f'Log level: {app_config.log_level}')
    if app_config.log_file:
        typer.echo(f'Log file: {app_config.log_file}')
    typer.echo(f'Verbose logging: {app_config.verbose_logging}')
    typer.echo(f'Keyboard backend: {app_config.backend}')
    if app_config.device_name:
        typer.echo(f'Device name: {app_config.device_name}')
    typer.echo(f'Lock timeout: {app_config.lock_timeout}s')


if __name__ == '__main__':
    app()
