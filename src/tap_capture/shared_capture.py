"""Lock-guarded capture state shared by the key producer and the D-Bus consumer.

The keyboard backend thread appends characters while the D-Bus handlers arm
and drain the window from the event loop. Every field is read and written
under one lock so completion checks never see a half-updated record.
"""

import threading
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from time import perf_counter

from common.logging_utils import get_logger

from .constants import DEFAULT_LOCK_TIMEOUT
from .models import CaptureState


class SharedCapture:
    """Owner of the single CaptureState instance.

    Args:
        clock: Monotonic clock returning seconds (injectable for tests)
        lock_timeout: Seconds to wait for the lock before the call degrades
            to its no-effect result
    """

    def __init__(
        self,
        clock: Callable[[], float] = perf_counter,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ) -> None:
        self.clock = clock
        self.lock_timeout = lock_timeout
        self._state = CaptureState()
        self._lock = threading.Lock()
        self.logger = get_logger('tap_capture.shared_capture')

    @contextmanager
    def locked(self, operation: str) -> Iterator[CaptureState | None]:
        """Hold the lock for the duration of the block.

        Yields None when the lock could not be acquired in time; callers
        must then skip their update.
        """
        if not self._lock.acquire(timeout=self.lock_timeout):
            self.logger.warning('%s: capture lock not acquired within %.3fs', operation, self.lock_timeout)
            yield None
            return
        try:
            yield self._state
        finally:
            self._lock.release()

    def append(self, text: str) -> None:
        """Append the characters produced by one key event.

        Dropped silently when no window is armed or the armed window has
        already outlived its duration.
        """
        with self.locked('append') as state:
            if state is None or state.window_start is None:
                return
            now = self.clock()
            if now - state.window_start > state.window_duration:
                return
            state.keys.extend(text)
            state.last_key_time = now

    def snapshot(self) -> CaptureState | None:
        """Return a copy of the current state (None if the lock is busy)."""
        with self.locked('snapshot') as state:
            if state is None:
                return None
            return CaptureState(
                keys=list(state.keys),
                target_count=state.target_count,
                window_start=state.window_start,
                last_key_time=state.last_key_time,
                window_duration=state.window_duration,
            )
