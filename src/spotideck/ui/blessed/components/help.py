"""Help screen rendering."""

from ..state import UIState
from ..styles.theme import Palette, plain
from .frame import BLANK, BodyLine, render_frame

# Left padding inside the help and search boxes
PADDING = 2

HELP_LINES = [
    "Keyboard Controls",
    "─────────────────",
    "  p / Space    Play/Pause",
    "  n            Next track",
    "  b            Previous track",
    "  l            Like/Unlike song",
    "",
    "  + / =        Volume up (+10%)",
    "  - / _        Volume down (-10%)",
    "",
    "  ← / →        Seek -/+10 seconds",
    "",
    "  s / /        Search for songs",
    "  ?            Toggle help",
    "  q / Ctrl+C   Quit",
    "",
    "Mouse: click the control buttons, click the progress bar to seek",
    "",
    "Press ESC or ? to close this screen",
]


def render_help(state: UIState, palette: Palette) -> list[str]:
    """Render the key reference, one string per terminal row."""
    body = [BLANK]
    for text in HELP_LINES:
        style = palette.header if text == HELP_LINES[0] else plain
        body.append(BodyLine(((text, style),), PADDING))

    return render_frame(
        palette,
        state.dimensions.width,
        state.dimensions.height,
        "  spotideck help ",
        body,
    )
