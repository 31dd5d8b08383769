"""Tests for the D-Bus facing interface."""
import logging

import pytest

from tap_capture.constants import INTERFACE_NAME
from tap_capture.dbus_service import KeyPressedInterface


@pytest.fixture
def interface(service):
    return KeyPressedInterface(service)


class TestKeyPressedInterface:
    def test_interface_name(self, interface):
        assert interface.name == INTERFACE_NAME

    def test_init_action_then_get_key_seq(self, interface, shared):
        interface.init_action(1000, 3)
        assert interface.get_key_seq() == ""

        for _ in range(3):
            shared.append("a")
        assert interface.get_key_seq() == "aaa"
        assert interface.get_key_seq() == ""

    def test_escape_sentinel_on_wire(self, interface, shared):
        interface.init_action(1000, 3)
        shared.append("a")
        shared.append("b")
        assert interface.get_key_seq() == "#escape"

    def test_invalid_init_action_is_logged_not_raised(self, interface, shared, caplog):
        interface.init_action(1000, 2)
        shared.append("a")

        with caplog.at_level(logging.WARNING, logger="tap_capture.dbus"):
            interface.init_action(20000, 2)

        assert "InitAction rejected" in caplog.text
        shared.append("a")
        assert interface.get_key_seq() == "aa"

    def test_get_key_seq_when_idle(self, interface):
        assert interface.get_key_seq() == ""
