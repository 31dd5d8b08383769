"""Backend factory.

evdev works on both X11 and Wayland and is the default; pynput is available
for X11 sessions where /dev/input access is not granted.
"""

from typing import Any

from common.logging_utils import get_logger

from .base import BackendNotAvailableError, KeyboardBackend

logger = get_logger('common.backend')

EVDEV_TROUBLESHOOTING = (
    'Troubleshooting:\n'
    '1. Install evdev library: pip install evdev\n'
    '2. Add user to input group:\n'
    '   sudo usermod -a -G input $USER\n'
    '   Then log out and back in.\n'
    '3. On X11 you can use the pynput backend instead (backend = "pynput").'
)


def create_backend(
    backend_name: str = 'evdev',
    device_name: str | None = None,
    **kwargs: Any
) -> KeyboardBackend:
    """Create a keyboard backend.

    Args:
        backend_name: 'evdev' or 'pynput'
        device_name: Partial keyboard device name (evdev only)
        **kwargs: Additional arguments passed to EvdevBackend
            (e.g., device_path).

    Returns:
        KeyboardBackend: Initialized backend instance.

    Raises:
        BackendNotAvailableError: If the backend cannot be initialized.
        ValueError: If backend_name is unknown.

    Examples:
        backend = create_backend()
        backend = create_backend('evdev', device_name='A4tech')
        backend = create_backend('pynput')
    """
    if backend_name == 'pynput':
        from .pynput_backend import PynputBackend
        backend = PynputBackend()
        logger.info(f'Created backend: {backend.get_backend_name()}')
        return backend

    if backend_name != 'evdev':
        raise ValueError(f'Unknown keyboard backend: {backend_name}')  # noqa: TRY003

    from .evdev_backend import EvdevBackend
    try:
        if device_name:
            kwargs['device_name'] = device_name
        backend = EvdevBackend(**kwargs)
    except BackendNotAvailableError as e:
        raise BackendNotAvailableError(
            f'Evdev backend is not available: {e}\n\n{EVDEV_TROUBLESHOOTING}'
        ) from e
    logger.info(f'Created backend: {backend.get_backend_name()}')
    return backend
