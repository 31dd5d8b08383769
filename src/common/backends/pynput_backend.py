"""Pynput-based keyboard backend for X11.

This backend wraps pynput.keyboard.Listener. It works only on X11 and is not
compatible with Wayland. Events are observed, never suppressed.
"""

from typing import Any, Callable

from common.key_normalizer import key_to_text
from common.logging_utils import get_logger

from .base import BackendNotAvailableError


class PynputBackend:
    """Keyboard backend using pynput (X11 only).

    Conforms to KeyboardBackend through structural subtyping.
    """

    def __init__(self) -> None:
        """Initialize pynput backend.

        Raises:
            BackendNotAvailableError: If pynput library is not installed.
        """
        self.logger = get_logger('common.backend.pynput')
        self.listener: Any = None  # Will be pynput.keyboard.Listener
        self._pressed: set[Any] = set()

        try:
            import pynput  # noqa: F401
        except ImportError as e:
            raise BackendNotAvailableError(
                'pynput library is not installed. '
                'Install it with: pip install pynput'
            ) from e

        self.logger.debug('PynputBackend initialized successfully')

    def start(self, on_press: Callable[[str], None]) -> None:
        """Start listening for keyboard events using pynput.

        Args:
            on_press: Callback receiving the text produced by each key press.
        """
        from pynput import keyboard

        def handle_press(key: Any) -> None:
            # Ignore auto-repeat (key already pressed)
            if key in self._pressed:
                return
            self._pressed.add(key)
            on_press(key_to_text(key))

        def handle_release(key: Any) -> None:
            self._pressed.discard(key)

        self.logger.info('Starting pynput keyboard listener (X11)')

        self.listener = keyboard.Listener(
            on_press=handle_press,
            on_release=handle_release,
            suppress=False,  # Do NOT suppress events for other applications
        )
        self.listener.start()
        self.listener.join()  # This blocks until stopped

    def stop(self) -> None:
        """Stop the pynput listener."""
        if self.listener:
            self.logger.info('Stopping pynput keyboard listener')
            self.listener.stop()
            self.listener = None
        self._pressed.clear()

    def get_backend_name(self) -> str:
        """Return backend name for logging."""
        return 'pynput (X11)'
