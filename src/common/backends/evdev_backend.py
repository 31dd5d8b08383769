"""Evdev-based keyboard backend.

This backend reads keyboard events directly from /dev/input/event* devices
using the evdev library. It works on both X11 and Wayland. Devices are not
grabbed, so other applications keep receiving every key.

Requires:
- evdev library installed
- User in 'input' group or appropriate permissions for /dev/input/
"""

import queue
import threading
from contextlib import suppress
from typing import Any, Callable

from common.logging_utils import get_logger

from .base import BackendNotAvailableError
from .key_mapping import SHIFT_KEYCODES
from .key_mapping import evdev_to_text

KEY_RELEASE = 0
KEY_PRESS = 1
KEY_REPEAT = 2


class EvdevBackend:
    """Keyboard backend using evdev (Wayland/X11 compatible).

    One reader thread per keyboard device pushes raw events into a queue;
    start() drains the queue on the calling thread and reports the text of
    each key press. Shift state is tracked across all devices.

    Args:
        device_path: Optional path to a specific input device
        device_name: Optional partial device name (case-insensitive).
            Takes precedence over device_path.
    """

    def __init__(
        self,
        device_path: str | None = None,
        device_name: str | None = None
    ) -> None:
        self.logger = get_logger('common.backend.evdev')
        self.device_path = device_path
        self.device_name = device_name
        self.devices: list[Any] = []  # List of evdev.InputDevice objects
        self._stop_event = threading.Event()
        self._device_threads: list[threading.Thread] = []
        self._event_queue: queue.Queue[tuple[Any, Any]] = queue.Queue(maxsize=1000)
        self._held_shifts: set[tuple[int, str]] = set()

        try:
            import evdev  # noqa: F401
        except ImportError as e:
            raise BackendNotAvailableError(
                'evdev library is not installed. '
                'Install it with: pip install evdev'
            ) from e

        self.logger.debug('EvdevBackend initialized')

    @staticmethod
    def _device_has_keyboard_caps(device: Any) -> bool:
        from evdev import ecodes
        caps = device.capabilities()
        if ecodes.EV_KEY not in caps:
            return False
        keys = caps[ecodes.EV_KEY]
        return (
            ecodes.KEY_LEFTCTRL in keys
            or ecodes.KEY_RIGHTCTRL in keys
            or ecodes.KEY_LEFTALT in keys
            or ecodes.KEY_A in keys
        )

    @staticmethod
    def _is_virtual_uinput(device: Any) -> bool:
        return 'uinput' in device.name.lower() or 'uinput' in str(device.path).lower()

    def _discover_devices(self) -> list[Any]:
        import evdev

        if self.device_name:
            needle = self.device_name.lower()
        elif self.device_path:
            try:
                return [evdev.InputDevice(self.device_path)]
            except (OSError, PermissionError) as e:
                raise BackendNotAvailableError(
                    f'Cannot access device {self.device_path}: {e}'
                ) from e
        else:
            needle = None

        try:
            paths = evdev.list_devices()
        except PermissionError as e:
            raise BackendNotAvailableError('Permission denied accessing /dev/input/') from e

        keyboards = []
        for path in paths:
            try:
                device = evdev.InputDevice(path)
            except (OSError, PermissionError):
                continue
            if not self._device_has_keyboard_caps(device):
                device.close()
                continue
            if needle and needle not in device.name.lower():
                device.close()
                continue
            keyboards.append(device)

        if needle and not keyboards:
            raise BackendNotAvailableError(
                f'No keyboard device found matching name "{self.device_name}"'
            )
        # Prefer physical keyboards over uinput devices
        physical = [d for d in keyboards if not self._is_virtual_uinput(d)]
        if not physical:
            return keyboards
        for device in keyboards:
            if device not in physical:
                device.close()
        return physical

    def _reader_loop(self, device: Any) -> None:
        try:
            for event in device.read_loop():
                if self._stop_event.is_set():
                    break
                try:
                    self._event_queue.put_nowait((device, event))
                except queue.Full:
                    self.logger.warning(f'Event queue full, dropping event from {device.name}')
        except OSError as e:
            if not self._stop_event.is_set():
                self.logger.error(f'Error reading from device {device.name}: {e}')

    def _handle_event(self, device: Any, event: Any, on_press: Callable[[str], None]) -> None:
        from evdev import categorize, ecodes

        if event.type != ecodes.EV_KEY or event.value == KEY_REPEAT:
            return
        keycode = categorize(event).keycode
        name = keycode[0] if isinstance(keycode, (list, tuple)) and keycode else keycode
        if not isinstance(name, str):
            return

        if name in SHIFT_KEYCODES:
            shift_ref = (id(device), name)
            if event.value == KEY_PRESS:
                self._held_shifts.add(shift_ref)
            else:
                self._held_shifts.discard(shift_ref)

        if event.value == KEY_PRESS:
            on_press(evdev_to_text(name, shifted=bool(self._held_shifts)))

    def _cleanup_devices(self) -> None:
        self._stop_event.set()
        for device in self.devices:
            with suppress(OSError):
                device.close()
        for thread in self._device_threads:
            if thread.is_alive() and thread is not threading.current_thread():
                thread.join(timeout=1.0)
        self._device_threads.clear()
        self.devices.clear()
        self._held_shifts.clear()

    # -------------------- Public API --------------------
    def start(self, on_press: Callable[[str], None]) -> None:
        self.devices = self._discover_devices()
        if not self.devices:
            raise BackendNotAvailableError('No keyboard devices found')

        for device in self.devices:
            self.logger.info(f'Using keyboard device: {device.name} ({device.path})')

        self._stop_event.clear()
        self._device_threads = []
        for device in self.devices:
            thread = threading.Thread(
                target=self._reader_loop,
                args=(device,),
                daemon=True,
                name=f'evdev-read-{device.name}',
            )
            thread.start()
            self._device_threads.append(thread)

        try:
            while not self._stop_event.is_set():
                try:
                    device, event = self._event_queue.get(timeout=0.1)
                except queue.Empty:
                    continue
                self._handle_event(device, event, on_press)
        finally:
            self._cleanup_devices()

    def stop(self) -> None:
        self.logger.info('Stopping evdev keyboard listener')
        self._stop_event.set()

    def get_backend_name(self) -> str:
        """Return backend name for logging."""
        return 'evdev (Wayland/X11)'
