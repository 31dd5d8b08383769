"""Key-to-text utilities for the keyboard backends.

Backends hand the capture engine the text a key press produces, not the key
itself. Printable keys yield their character, Escape yields the ESC control
character, and keys that produce nothing (modifiers, arrows, F-keys) yield ''.
"""

from typing import Any

ESC = '\x1b'

# Named keys that produce text
NAMED_KEY_TEXT: dict[str, str] = {
    'esc': ESC,
    'space': ' ',
    'tab': '\t',
    'enter': '\r',
    'kpenter': '\r',
}


def key_to_text(key: Any) -> str:
    """Return the text produced by a key press.

    Accepts pynput Key/KeyCode objects as well as canonical key names.

    Args:
        key: pynput key object, canonical key name (str) or character

    Returns:
        str: Produced text, '' for keys that produce none

    Examples:
        >>> key_to_text('a')
        'a'
        >>> key_to_text('esc')
        '\\x1b'
        >>> key_to_text('shift_l')
        ''
    """
    char = getattr(key, 'char', None)
    if char:
        return str(char)

    # pynput special keys are enum members (Key.esc), canonical names are str
    name = getattr(key, 'name', None) if not isinstance(key, str) else key
    if not name:
        return ''
    if len(name) == 1:
        return name
    return NAMED_KEY_TEXT.get(name.lower(), '')


def describe_text(text: str) -> str:
    """Format produced text for log output.

    Examples:
        >>> describe_text('a')
        "'a'"
        >>> describe_text('\\x1b')
        'esc'
        >>> describe_text('')
        '(no text)'
    """
    if not text:
        return '(no text)'
    if text == ESC:
        return 'esc'
    return repr(text)
