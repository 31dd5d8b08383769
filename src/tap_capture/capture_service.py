"""Capture window control: arming a window and draining its result.

This module implements the consumer side of the capture engine. A window is
armed with begin() and polled with drain() until it finalizes.
"""

from common.logging_utils import get_logger

from .constants import ESCAPE_CHAR
from .constants import INACTIVITY_TIMEOUT
from .constants import MAX_DURATION_MS
from .constants import MAX_TARGET_COUNT
from .constants import MIN_DURATION_MS
from .constants import MIN_TARGET_COUNT
from .models import ESCAPED
from .models import INCOMPLETE
from .models import CaptureState
from .models import DrainResult
from .models import InvalidWindowError
from .shared_capture import SharedCapture


def validate_window(duration_ms: int, target_count: int) -> None:
    """Check begin() arguments against the accepted ranges.

    Raises:
        InvalidWindowError: If either value is out of range
    """
    if not MIN_DURATION_MS <= duration_ms <= MAX_DURATION_MS:
        raise InvalidWindowError(  # noqa: TRY003
            f'duration must be between {MIN_DURATION_MS}ms and {MAX_DURATION_MS}ms, got {duration_ms}'
        )
    if not MIN_TARGET_COUNT <= target_count <= MAX_TARGET_COUNT:
        raise InvalidWindowError(  # noqa: TRY003
            f'target count must be between {MIN_TARGET_COUNT} and {MAX_TARGET_COUNT}, got {target_count}'
        )


class CaptureService:
    """Arm and drain capture windows on a SharedCapture.

    A valid capture is a repeated tap of one single key. The window finishes
    when the target count is reached, or earlier once taps stop arriving for
    INACTIVITY_TIMEOUT. Any divergent key or an Escape cancels it.

    Args:
        shared: The capture state shared with the key producer
    """

    def __init__(self, shared: SharedCapture) -> None:
        self.shared = shared
        self.logger = get_logger('tap_capture.capture_service')

    def begin(self, duration_ms: int, target_count: int) -> bool:
        """Arm a new capture window, replacing any previous one.

        Args:
            duration_ms: Window lifetime in milliseconds (500..10000)
            target_count: Number of taps that completes the window (1..255)

        Returns:
            bool: True if armed, False if the capture lock was unavailable

        Raises:
            InvalidWindowError: If an argument is out of range. The current
                window is left untouched.
        """
        validate_window(duration_ms, target_count)

        with self.shared.locked('begin') as state:
            if state is None:
                return False
            state.arm(self.shared.clock(), duration_ms / 1000, target_count)

        self.logger.info('Capture window armed: %dms, %d tap(s)', duration_ms, target_count)
        return True

    def drain(self) -> DrainResult:
        """Poll the capture window.

        Returns:
            DrainResult: INCOMPLETE while the window is idle, still filling or
            timed out; ESCAPED when the gesture was cancelled; otherwise the
            captured sequence. ESCAPED and sequence results clear the window.
        """
        with self.shared.locked('drain') as state:
            if state is None or state.window_start is None:
                return INCOMPLETE

            if state.keys:
                first = state.keys[0]
                for key in state.keys:
                    if key != first:
                        state.clear()
                        self.logger.info('Capture escaped: divergent key in window')
                        return ESCAPED

            if not self._is_complete(state, self.shared.clock()):
                return INCOMPLETE

            keys = state.take_keys()

        if ESCAPE_CHAR in keys:
            self.logger.info('Capture escaped: escape key in window')
            return ESCAPED

        self.logger.info('Capture finalized with %d tap(s)', len(keys))
        return DrainResult.sequence(''.join(keys))

    @staticmethod
    def _is_complete(state: CaptureState, now: float) -> bool:
        # A timed-out window stays armed and keeps draining as incomplete
        # until the next begin().
        if now - state.window_start > state.window_duration:
            return False
        if not state.keys or state.last_key_time is None:
            return False
        if len(state.keys) > state.target_count:
            return False
        if len(state.keys) < state.target_count and now - state.last_key_time < INACTIVITY_TIMEOUT:
            return False
        return True
