"""Render the whole screen for the current state."""

from .components.dashboard import render_dashboard
from .components.help import render_help
from .components.search import render_search
from .state import UIMode, UIState
from .styles.theme import Palette


def render_lines(state: UIState, palette: Palette) -> list[str]:
    """
    Render the active mode's screen.

    Args:
        state: Current UI state
        palette: Color styles

    Returns:
        One styled string per terminal row
    """
    match state.mode:
        case UIMode.SEARCHING:
            return render_search(state, palette)
        case UIMode.HELP:
            return render_help(state, palette)
        case _:
            return render_dashboard(state, palette)


def render_screen(state: UIState, palette: Palette) -> str:
    """Full screen as text, rows joined by newlines."""
    return "\n".join(render_lines(state, palette))
