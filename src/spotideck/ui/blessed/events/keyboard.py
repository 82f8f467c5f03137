"""Keyboard event handling dispatcher for all modes.

Key Functions:
    - handle_key: Main keyboard dispatcher
"""

from spotideck.ui.blessed.state import UIMode, UIState

from .keys import handle_help_key, handle_normal_mode_key, handle_search_key
from .messages import KeyPress, Work


def detect_mode(state: UIState) -> UIMode:
    """Current input mode; exactly one is active at a time."""
    return state.mode


def handle_key(state: UIState, event: KeyPress) -> tuple[UIState, list[Work]]:
    """
    Handle keyboard input and return updated state.

    Routes keyboard events to the handler for the active mode:
    search captures all typing, help closes on escape or ? and otherwise
    behaves like normal mode.

    Args:
        state: Current UI state
        event: Parsed key press

    Returns:
        Tuple of (updated state, work items)
    """
    match detect_mode(state):
        case UIMode.SEARCHING:
            return handle_search_key(state, event)
        case UIMode.HELP:
            return handle_help_key(state, event)
        case _:
            return handle_normal_mode_key(state, event)
