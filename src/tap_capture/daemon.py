"""Capture daemon: keyboard backend thread plus D-Bus service.

This module wires the single SharedCapture into both sides: the keyboard
backend feeds it on a background thread, the D-Bus interface arms and
drains it from the asyncio event loop.
"""

import asyncio
import signal
import threading

from common.backends import BackendNotAvailableError, KeyboardBackend
from common.logging_utils import get_logger

from .capture_service import CaptureService
from .dbus_service import connect_session_bus
from .dbus_service import export_service
from .key_feeder import KeyTapFeeder
from .models import AppConfig
from .shared_capture import SharedCapture


class CaptureDaemon:
    """Run the capture engine until SIGINT/SIGTERM.

    Args:
        config: Application configuration
        backend: Keyboard backend delivering key presses
        shared: Capture state (a fresh one is created if not given)
    """

    def __init__(
        self,
        config: AppConfig,
        backend: KeyboardBackend,
        shared: SharedCapture | None = None,
    ) -> None:
        self.config = config
        self.backend = backend
        self.shared = shared or SharedCapture(lock_timeout=config.lock_timeout)
        self.service = CaptureService(self.shared)
        self.feeder = KeyTapFeeder(self.shared, verbose=config.verbose_logging)
        self.logger = get_logger('tap_capture.daemon')
        self.backend_error: Exception | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop: asyncio.Event | None = None
        self._keyboard_thread: threading.Thread | None = None

    def run(self) -> None:
        """Serve until stopped (blocking call).

        Raises:
            BackendNotAvailableError: If the keyboard backend could not start
            Exception: Whatever else stopped the keyboard backend
        """
        asyncio.run(self._serve())
        if self.backend_error is not None:
            raise self.backend_error

    def request_stop(self) -> None:
        """Ask the daemon to shut down; safe to call from any thread."""
        if self._loop is not None and self._stop is not None:
            self._loop.call_soon_threadsafe(self._stop.set)

    def _run_keyboard(self) -> None:
        try:
            self.backend.start(on_press=self.feeder.on_press)
        except BackendNotAvailableError as e:
            self.logger.error(f'Keyboard backend failed: {e}')
            self.backend_error = e
            self.request_stop()
        except Exception as e:
            self.logger.error(f'Keyboard backend stopped unexpectedly: {e}', exc_info=True)
            self.backend_error = e
            self.request_stop()

    async def _serve(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._stop = asyncio.Event()
        for signum in (signal.SIGINT, signal.SIGTERM):
            self._loop.add_signal_handler(signum, self._on_signal, signum)

        bus = await connect_session_bus()
        try:
            await export_service(bus, self.service)

            self.logger.info(f'Starting keyboard backend: {self.backend.get_backend_name()}')
            self._keyboard_thread = threading.Thread(
                target=self._run_keyboard,
                daemon=True,
                name='tap-capture-keyboard',
            )
            self._keyboard_thread.start()

            await self._stop.wait()
        finally:
            self.backend.stop()
            bus.disconnect()
            for signum in (signal.SIGINT, signal.SIGTERM):
                self._loop.remove_signal_handler(signum)

        if self._keyboard_thread is not None:
            self._keyboard_thread.join(timeout=2.0)
        self.logger.info('Tap capture stopped')

    def _on_signal(self, signum: int) -> None:
        self.logger.info(f'Received signal {signum}, shutting down...')
        self._stop.set()
