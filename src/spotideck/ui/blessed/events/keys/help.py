"""Help overlay keyboard handlers."""

from spotideck.ui.blessed.state import UIState, hide_help

from ..messages import KeyPress, Work
from .normal import handle_normal_mode_key


def handle_help_key(state: UIState, event: KeyPress) -> tuple[UIState, list[Work]]:
    """Escape or ? closes the help; everything else works as in normal mode."""
    if event.type == "escape" or (event.type == "char" and event.char == "?"):
        return hide_help(state), []
    return handle_normal_mode_key(state, event)
