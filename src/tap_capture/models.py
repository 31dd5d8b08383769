"""Data models for tap-capture."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from pathlib import Path

from .constants import DEFAULT_LOCK_TIMEOUT
from .constants import ESCAPE_SENTINEL


class InvalidWindowError(ValueError):
    """Raised when a capture window is requested with out-of-range parameters."""


@dataclass
class CaptureState:
    """State of the current capture window.

    Attributes:
        keys: Characters appended so far, in arrival order
        target_count: Tap count that completes the window exactly
        window_start: Clock value when the window was armed (None while idle)
        last_key_time: Clock value of the latest append (None until the first one)
        window_duration: Maximum lifetime of the window in seconds
    """
    keys: list[str] = field(default_factory=list)
    target_count: int = 0
    window_start: float | None = None
    last_key_time: float | None = None
    window_duration: float = 0.0

    @property
    def is_armed(self) -> bool:
        """Whether a capture window is currently armed."""
        return self.window_start is not None

    def arm(self, now: float, duration: float, target_count: int) -> None:
        """Start a new window, discarding whatever the previous one held."""
        self.keys.clear()
        self.target_count = target_count
        self.window_start = now
        self.last_key_time = None
        self.window_duration = duration

    def clear(self) -> None:
        """Return to idle, dropping the buffered keys."""
        self.window_start = None
        self.keys.clear()

    def take_keys(self) -> list[str]:
        """Disarm the window and hand over the buffer, leaving an empty one."""
        self.window_start = None
        keys, self.keys = self.keys, []
        return keys


class DrainStatus(Enum):
    """Outcome kind of a drain() call."""
    INCOMPLETE = 'incomplete'
    ESCAPED = 'escaped'
    SEQUENCE = 'sequence'


@dataclass(frozen=True)
class DrainResult:
    """Result of polling the capture window.

    Only SEQUENCE results carry text. The wire form collapses the result into
    a single string: empty for INCOMPLETE, the escape sentinel for ESCAPED.
    """
    status: DrainStatus
    text: str = ''

    @classmethod
    def sequence(cls, text: str) -> 'DrainResult':
        return cls(DrainStatus.SEQUENCE, text)

    def to_wire(self) -> str:
        if self.status is DrainStatus.ESCAPED:
            return ESCAPE_SENTINEL
        if self.status is DrainStatus.SEQUENCE:
            return self.text
        return ''


INCOMPLETE = DrainResult(DrainStatus.INCOMPLETE)
ESCAPED = DrainResult(DrainStatus.ESCAPED)


@dataclass
class AppConfig:
    """Application configuration.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file (None for console logging only)
        verbose_logging: Log every key event that reaches the capture buffer
        backend: Keyboard backend name ('evdev' or 'pynput')
        device_name: Partial keyboard device name for the evdev backend
        lock_timeout: Seconds to wait for the capture lock before giving up
    """
    log_level: str = 'INFO'
    log_file: Path | None = None
    verbose_logging: bool = False
    backend: str = 'evdev'
    device_name: str | None = None
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT

    def __post_init__(self) -> None:
        """Validate the application configuration."""
        if self.log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR'):
            raise ValueError(f'Invalid log_level: {self.log_level}')  # noqa: TRY003

        if self.backend not in ('evdev', 'pynput'):
            raise ValueError(f'Invalid backend: {self.backend}')  # noqa: TRY003

        if self.lock_timeout <= 0:
            raise ValueError(f'lock_timeout must be positive, got {self.lock_timeout}')  # noqa: TRY003

        if self.device_name is not None and self.backend != 'evdev':
            raise ValueError('device_name is only supported by the evdev backend')  # noqa: TRY003
