"""Tests for key-to-text translation used by the keyboard backends."""
import enum
from types import SimpleNamespace

import pytest

from common.backends.key_mapping import evdev_to_text
from common.key_normalizer import describe_text
from common.key_normalizer import key_to_text


class FakeKey(enum.Enum):
    """Stand-in for pynput.keyboard.Key."""
    esc = 1
    space = 2
    shift = 3
    enter = 4


class TestKeyToText:
    def test_keycode_with_char(self):
        assert key_to_text(SimpleNamespace(char="a")) == "a"
        assert key_to_text(SimpleNamespace(char="A")) == "A"

    def test_keycode_without_char(self):
        assert key_to_text(SimpleNamespace(char=None)) == ""

    @pytest.mark.parametrize("key,expected", [
        (FakeKey.esc, "\x1b"),
        (FakeKey.space, " "),
        (FakeKey.enter, "\r"),
        (FakeKey.shift, ""),
    ])
    def test_special_keys(self, key, expected):
        assert key_to_text(key) == expected

    @pytest.mark.parametrize("name,expected", [
        ("a", "a"), ("esc", "\x1b"), ("shift_l", ""), ("f1", ""), ("tab", "\t"),
    ])
    def test_canonical_names(self, name, expected):
        assert key_to_text(name) == expected

    def test_describe_text(self):
        assert describe_text("a") == "'a'"
        assert describe_text("\x1b") == "esc"
        assert describe_text("") == "(no text)"


class TestEvdevToText:
    @pytest.mark.parametrize("keycode,shifted,expected", [
        ("KEY_A", False, "a"),
        ("KEY_A", True, "A"),
        ("KEY_1", False, "1"),
        ("KEY_1", True, "!"),
        ("KEY_SLASH", True, "?"),
        ("KEY_ESC", False, "\x1b"),
        ("KEY_SPACE", True, " "),
        ("KEY_LEFTCTRL", False, ""),
        ("KEY_F1", False, ""),
        ("KEY_UP", False, ""),
    ])
    def test_mapping(self, keycode, shifted, expected):
        assert evdev_to_text(keycode, shifted=shifted) == expected

    def test_alias_list_uses_first_name(self):
        assert evdev_to_text(["KEY_Z", "KEY_OTHER"]) == "z"
        assert evdev_to_text([]) == ""

    def test_alias_tuple_uses_first_name(self):
        assert evdev_to_text(("KEY_Q", "KEY_OTHER")) == "q"
        assert evdev_to_text(("KEY_MIN_INTERESTING", "KEY_MUTE")) == ""
        assert evdev_to_text(()) == ""


class TestEvdevBackendEvents:
    @pytest.fixture
    def backend(self):
        pytest.importorskip("evdev")
        from common.backends.evdev_backend import EvdevBackend
        return EvdevBackend()

    def key_event(self, code, value):
        from evdev import InputEvent, ecodes
        return InputEvent(0, 0, ecodes.EV_KEY, code, value)

    def test_aliased_keycode_press_is_reported(self, backend):
        from evdev import ecodes
        presses = []
        backend._handle_event(object(), self.key_event(ecodes.KEY_MUTE, 1), presses.append)
        assert presses == [""]

    def test_shift_and_repeat_handling(self, backend):
        from evdev import ecodes
        device = object()
        presses = []
        backend._handle_event(device, self.key_event(ecodes.KEY_LEFTSHIFT, 1), presses.append)
        backend._handle_event(device, self.key_event(ecodes.KEY_A, 1), presses.append)
        backend._handle_event(device, self.key_event(ecodes.KEY_A, 2), presses.append)
        backend._handle_event(device, self.key_event(ecodes.KEY_LEFTSHIFT, 0), presses.append)
        backend._handle_event(device, self.key_event(ecodes.KEY_A, 1), presses.append)
        assert presses == ["", "A", "a"]
