"""Base keyboard backend abstraction using Protocol.

This module defines the KeyboardBackend protocol that all backends must implement.
Using Protocol instead of ABC allows for structural subtyping (duck typing + type checking)
without requiring explicit inheritance.
"""

from typing import Callable, Protocol


class KeyboardBackend(Protocol):
    """Protocol for keyboard event sources feeding the capture engine.

    Example:
        class MyBackend:  # No inheritance needed!
            def start(self, on_press) -> None: ...
            def stop(self) -> None: ...
            def get_backend_name(self) -> str: ...
    """

    def start(self, on_press: Callable[[str], None]) -> None:
        """Start listening for keyboard events (blocking call).

        This method should block until stop() is called from another thread
        or signal handler, calling on_press once per key press.

        Args:
            on_press: Callback receiving the text the key press produced
                ('' for keys producing none, '\\x1b' for Escape).
                Autorepeat events are not reported.
        """
        ...

    def stop(self) -> None:
        """Stop listening for keyboard events.

        This method should cause start() to unblock and return.
        It should clean up any resources (file descriptors, threads, etc).
        """
        ...

    def get_backend_name(self) -> str:
        """Return the name of this backend for logging and debugging."""
        ...


class BackendNotAvailableError(Exception):
    """Raised when a backend cannot be initialized.

    This can happen for various reasons:
    - Required library not installed (e.g., evdev)
    - No suitable input devices found (for evdev)
    - Permission denied (for evdev /dev/input/ access)

    The error message should provide actionable guidance for the user.
    """
    pass
