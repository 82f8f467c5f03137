"""Pointer input: SGR mouse report parsing and hit-testing.

Terminals in SGR mode (1006) report mouse activity as

    ESC [ < button ; column ; row M     (press, wheel)
    ESC [ < button ; column ; row m     (release)

with 1-based coordinates. Button bit 32 marks motion, bit 64 marks the wheel.
"""

import re
from typing import Optional

from loguru import logger

from ..components.layout import Button, compute_layout
from ..state import UIMode, UIState, move_search_cursor
from . import actions
from .messages import MouseAction, MouseButton, PointerEvent, Work

SGR_MOUSE_RE = re.compile(r"\x1b\[<(\d+);(\d+);(\d+)([Mm])")

_MOTION_FLAG = 32
_WHEEL_FLAG = 64

_BUTTONS = {0: MouseButton.LEFT, 1: MouseButton.MIDDLE, 2: MouseButton.RIGHT, 3: MouseButton.NONE}

_BUTTON_ACTIONS = {
    Button.SEARCH: actions.start_search,
    Button.PLAY_PAUSE: actions.play_pause,
    Button.PREVIOUS: actions.skip_previous,
    Button.NEXT: actions.skip_next,
    Button.LIKE: actions.toggle_like,
}


def parse_mouse_sequence(text: str) -> Optional[PointerEvent]:
    """
    Parse an SGR mouse report into a PointerEvent.

    Args:
        text: Raw escape sequence as read from the terminal

    Returns:
        PointerEvent with 0-based coordinates, or None if text is not a report
    """
    match = SGR_MOUSE_RE.match(text)
    if not match:
        return None

    code, column, row, final = match.groups()
    code = int(code)

    if code & _WHEEL_FLAG:
        button = MouseButton.WHEEL_DOWN if code & 1 else MouseButton.WHEEL_UP
    else:
        button = _BUTTONS[code & 3]

    if code & _MOTION_FLAG:
        action = MouseAction.MOTION
    elif final == "m":
        action = MouseAction.RELEASE
    else:
        action = MouseAction.PRESS

    return PointerEvent(x=int(column) - 1, y=int(row) - 1, button=button, action=action)


def _handle_search_wheel(state: UIState, event: PointerEvent) -> tuple[UIState, list[Work]]:
    if event.button == MouseButton.WHEEL_UP:
        return move_search_cursor(state, -1), []
    if event.button == MouseButton.WHEEL_DOWN:
        return move_search_cursor(state, 1), []
    return state, []


def handle_pointer(state: UIState, event: PointerEvent) -> tuple[UIState, list[Work]]:
    """
    Route a pointer event to the control under it.

    The wheel scrolls search results. Clicks act on release only and only on the
    main screen, using the same layout the renderer draws.

    Args:
        state: Current UI state
        event: Parsed pointer event

    Returns:
        Tuple of (updated state, work items)
    """
    if state.mode == UIMode.SEARCHING:
        return _handle_search_wheel(state, event)

    if state.mode != UIMode.NORMAL or event.action != MouseAction.RELEASE:
        return state, []

    layout = compute_layout(state)

    button = layout.button_at(event.x, event.y)
    if button is not None:
        logger.debug(f"Clicked {button.value} at ({event.x}, {event.y})")
        return _BUTTON_ACTIONS[button](state)

    progress = layout.progress
    if progress is not None and event.y == progress.row:
        fraction = progress.seek_fraction(event.x)
        if fraction is not None:
            return actions.seek_to_fraction(state, fraction)

    return state, []
