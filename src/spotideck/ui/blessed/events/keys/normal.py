"""Normal mode keyboard handlers."""

from spotideck.ui.blessed.state import UIState

from .. import actions
from ..actions import VOLUME_STEP
from ..messages import KeyPress, Work

# Printable keys -> actions
_CHAR_ACTIONS = {
    "q": actions.quit_app,
    "p": actions.play_pause,
    " ": actions.play_pause,
    "n": actions.skip_next,
    "b": actions.skip_previous,
    "l": actions.toggle_like,
    "+": lambda s: actions.change_volume(s, VOLUME_STEP),
    "=": lambda s: actions.change_volume(s, VOLUME_STEP),
    "-": lambda s: actions.change_volume(s, -VOLUME_STEP),
    "_": lambda s: actions.change_volume(s, -VOLUME_STEP),
    "s": actions.start_search,
    "/": actions.start_search,
    "?": actions.show_help,
}

_KEY_ACTIONS = {
    "ctrl_c": actions.quit_app,
    "arrow_left": actions.seek_backward,
    "arrow_right": actions.seek_forward,
}


def handle_normal_mode_key(state: UIState, event: KeyPress) -> tuple[UIState, list[Work]]:
    """
    Handle keyboard events for the main playback screen.

    Args:
        state: Current UI state
        event: Parsed key event from parse_key()

    Returns:
        Tuple of (updated state, work items); unbound keys change nothing
    """
    if event.type == "char":
        handler = _CHAR_ACTIONS.get(event.char)
    else:
        handler = _KEY_ACTIONS.get(event.type)

    if handler is None:
        return state, []
    return handler(state)
