"""Shared fixtures for tap-capture tests."""
import pytest

from tap_capture.capture_service import CaptureService
from tap_capture.shared_capture import SharedCapture


class FakeClock:
    """Manually advanced clock standing in for perf_counter."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def shared(clock):
    return SharedCapture(clock=clock, lock_timeout=0.01)


@pytest.fixture
def service(shared):
    return CaptureService(shared)
