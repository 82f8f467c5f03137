"""Shared keyboard utility functions."""

from blessed.keyboard import Keystroke

from ..messages import KeyPress

# blessed key names -> KeyPress types
_NAMED_KEYS = {
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "escape",
    "KEY_BACKSPACE": "backspace",
    "KEY_UP": "arrow_up",
    "KEY_DOWN": "arrow_down",
    "KEY_LEFT": "arrow_left",
    "KEY_RIGHT": "arrow_right",
    "KEY_PGUP": "page_up",
    "KEY_PGDOWN": "page_down",
    "KEY_HOME": "home",
    "KEY_END": "end",
}


def parse_key(key: Keystroke) -> KeyPress:
    """
    Parse keystroke into a KeyPress event.

    Args:
        key: blessed Keystroke

    Returns:
        KeyPress describing the key press ("unknown" type if unrecognized)
    """
    if key.name in _NAMED_KEYS:
        return KeyPress(_NAMED_KEYS[key.name])

    text = str(key)
    if text in ("\x7f", "\x08"):
        return KeyPress("backspace")
    if text in ("\r", "\n"):
        return KeyPress("enter")
    if text == "\x1b":
        return KeyPress("escape")
    if text == "\x03":  # Ctrl+C
        return KeyPress("ctrl_c")
    if text and text.isprintable():
        return KeyPress("char", text)

    return KeyPress("unknown")
