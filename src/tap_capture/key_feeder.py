"""Key event producer feeding the shared capture state."""

from common.key_normalizer import describe_text
from common.logging_utils import get_logger

from .shared_capture import SharedCapture


class KeyTapFeeder:
    """Forward key presses from a keyboard backend into the capture buffer.

    on_press is handed to KeyboardBackend.start() and runs on the backend's
    thread, once per key press.

    Args:
        shared: The capture state shared with the D-Bus service
        verbose: Log every key press (text is logged, so keep off in production)
    """

    def __init__(self, shared: SharedCapture, verbose: bool = False) -> None:
        self.shared = shared
        self.verbose = verbose
        self.logger = get_logger('tap_capture.key_feeder')

    def on_press(self, text: str) -> None:
        self.shared.append(text)
        if self.verbose:
            state = self.shared.snapshot()
            if state is not None:
                self.logger.debug('Key pressed: %s (%d buffered)', describe_text(text), len(state.keys))
