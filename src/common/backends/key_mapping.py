"""Mapping from evdev key codes to produced text.

This module translates evdev keycodes like 'KEY_A' or 'KEY_ESC' into the text
a US-layout keyboard produces for them, honouring Shift for letters, digits
and symbols. Keys producing no text map to ''.
"""

from common.key_normalizer import ESC

SHIFT_KEYCODES = frozenset({'KEY_LEFTSHIFT', 'KEY_RIGHTSHIFT'})

EVDEV_TO_TEXT: dict[str, tuple[str, str]] = {
    # keycode: (plain, shifted)
    'KEY_ESC': (ESC, ESC), 'KEY_ENTER': ('\r', '\r'), 'KEY_KPENTER': ('\r', '\r'),
    'KEY_TAB': ('\t', '\t'), 'KEY_SPACE': (' ', ' '),

    # Digits row
    'KEY_1': ('1', '!'), 'KEY_2': ('2', '@'), 'KEY_3': ('3', '#'), 'KEY_4': ('4', '$'),
    'KEY_5': ('5', '%'), 'KEY_6': ('6', '^'), 'KEY_7': ('7', '&'), 'KEY_8': ('8', '*'),
    'KEY_9': ('9', '('), 'KEY_0': ('0', ')'),

    # Symbols
    'KEY_SLASH': ('/', '?'), 'KEY_DOT': ('.', '>'), 'KEY_COMMA': (',', '<'),
    'KEY_MINUS': ('-', '_'), 'KEY_EQUAL': ('=', '+'), 'KEY_LEFTBRACE': ('[', '{'),
    'KEY_RIGHTBRACE': (']', '}'), 'KEY_SEMICOLON': (';', ':'), 'KEY_APOSTROPHE': ("'", '"'),
    'KEY_BACKSLASH': ('\\', '|'), 'KEY_GRAVE': ('`', '~'),

    # Numpad
    'KEY_KP0': ('0', '0'), 'KEY_KP1': ('1', '1'), 'KEY_KP2': ('2', '2'), 'KEY_KP3': ('3', '3'),
    'KEY_KP4': ('4', '4'), 'KEY_KP5': ('5', '5'), 'KEY_KP6': ('6', '6'), 'KEY_KP7': ('7', '7'),
    'KEY_KP8': ('8', '8'), 'KEY_KP9': ('9', '9'), 'KEY_KPPLUS': ('+', '+'), 'KEY_KPMINUS': ('-', '-'),
    'KEY_KPASTERISK': ('*', '*'), 'KEY_KPSLASH': ('/', '/'), 'KEY_KPDOT': ('.', '.'),
}


def evdev_to_text(keycode: str | list[str] | tuple[str, ...], shifted: bool = False) -> str:
    """Convert an evdev keycode to the text it produces.

    Args:
        keycode: evdev keycode name, or the alias list or tuple evdev reports for
            some codes (the first alias is used)
        shifted: Whether a Shift key is held

    Returns:
        str: Produced text, '' for keys that produce none

    Examples:
        >>> evdev_to_text('KEY_A')
        'a'
        >>> evdev_to_text('KEY_A', shifted=True)
        'A'
        >>> evdev_to_text('KEY_LEFTCTRL')
        ''
    """
    if isinstance(keycode, (list, tuple)):
        if not keycode:
            return ''
        keycode = keycode[0]
    if keycode in EVDEV_TO_TEXT:
        plain, upper = EVDEV_TO_TEXT[keycode]
        return upper if shifted else plain
    if keycode.startswith('KEY_') and len(keycode) == 5 and keycode[4].isalpha():
        ch = keycode[4].lower()
        return ch.upper() if shifted else ch
    return ''
