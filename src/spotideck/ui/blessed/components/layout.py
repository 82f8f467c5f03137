"""Layout calculation functions.

Single source of truth for where things sit on screen. The renderer draws
from compute_layout() and the pointer handler hit-tests against the very
same result, so a click lands on exactly the cells that were drawn.

Screen rows (0-based):

    0  header
    1  top border
    2  track name
    3  artist
    4  (blank)
    5  progress line: "m:ss/m:ss " + bar
    6  control bar
    7  volume
    8  (blank)
    9  status
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from spotideck.domain.playback.models import PlaybackState

from ..state import UIState
from ..styles.formatting import center_offset, display_width, format_time

HEADER_ROW = 0
TOP_BORDER_ROW = 1
TRACK_ROW = 2
ARTIST_ROW = 3
PROGRESS_ROW = 5
CONTROL_ROW = 6
VOLUME_ROW = 7
STATUS_ROW = 9

# Columns taken by the border on each side
BORDER_WIDTH = 1

# Cells reserved next to the bar: container frame and padding, plus the timer
CONTAINER_RESERVE = 4
TIMER_RESERVE = 15
MIN_BAR_WIDTH = 10

PLAY_ICON = "▶"
PAUSE_ICON = "⏸"
LIKED_ICON = "♥"
UNLIKED_ICON = "♡"


class Button(str, Enum):
    """Clickable regions of the control bar, left to right."""

    SEARCH = "search"
    PLAY_PAUSE = "play_pause"
    PREVIOUS = "previous"
    NEXT = "next"
    LIKE = "like"


@dataclass(frozen=True)
class Bounds:
    """Horizontal span [left, right] (inclusive) on one row."""

    row: int
    left: int
    right: int

    def contains(self, x: int, y: int) -> bool:
        return y == self.row and self.left <= x <= self.right


@dataclass(frozen=True)
class ProgressGeometry:
    """Where the progress line sits; the bar follows the timer text."""

    row: int
    x: int
    timer: str
    bar_x: int
    bar_width: int
    last_x: int  # Rightmost column drawn inside the border

    def seek_fraction(self, x: int) -> Optional[float]:
        """Fraction of the bar at column x, or None if x is off the drawn bar."""
        if x < self.bar_x or x >= self.bar_x + self.bar_width or x > self.last_x:
            return None
        return (x - self.bar_x) / self.bar_width


@dataclass(frozen=True)
class Layout:
    """Positions of everything drawn on the main screen."""

    width: int
    height: int
    inner_width: int
    controls_text: str
    controls_x: int
    buttons: tuple[tuple[Button, Bounds], ...]
    progress: Optional[ProgressGeometry]

    def button_at(self, x: int, y: int) -> Optional[Button]:
        for button, bounds in self.buttons:
            if bounds.contains(x, y):
                return button
        return None

    def bounds_of(self, button: Button) -> Optional[Bounds]:
        """Bounds of a button, or None when it is clipped off a narrow screen."""
        return dict(self.buttons).get(button)


def control_segments(playback: PlaybackState) -> list[tuple[Optional[Button], str]]:
    """
    Control bar text split into its clickable and spacer segments.

    Args:
        playback: Current playback snapshot (play and heart glyphs depend on it)

    Returns:
        List of (button or None for spacing, text) in display order
    """
    play_icon = PAUSE_ICON if playback.playing else PLAY_ICON
    heart = LIKED_ICON if playback.liked else UNLIKED_ICON
    return [
        (None, " "),
        (Button.SEARCH, "[ 🔍 Search ]"),
        (None, "  "),
        (Button.PLAY_PAUSE, f"[ {play_icon} ]"),
        (None, "  "),
        (Button.PREVIOUS, "[ ⏮ ]"),
        (None, "  "),
        (Button.NEXT, "[ ⏭ ]"),
        (None, "  "),
        (Button.LIKE, f"[ {heart} ]"),
        (None, " "),
    ]


def build_controls_text(playback: PlaybackState) -> str:
    return "".join(text for _, text in control_segments(playback))


def progress_bar_width(width: int) -> int:
    """Bar cells for a terminal width, never fewer than MIN_BAR_WIDTH."""
    return max(MIN_BAR_WIDTH, width - CONTAINER_RESERVE - TIMER_RESERVE)


def progress_timer(playback: PlaybackState) -> str:
    return f"{format_time(playback.progress_ms)}/{format_time(playback.duration_ms)} "


def body_x(inner_width: int, line_width: int) -> int:
    """Screen column where a centered body line starts."""
    return BORDER_WIDTH + center_offset(inner_width, line_width)


def compute_layout(state: UIState) -> Layout:
    """
    Pure function: calculate positions for the main screen.

    Args:
        state: Current UI state (dimensions and playback)

    Returns:
        Layout with control bar button spans and progress bar geometry
    """
    width = state.dimensions.width
    height = state.dimensions.height
    inner_width = max(0, width - 2 * BORDER_WIDTH)
    # Lines wider than the container are clipped at this column
    last_x = BORDER_WIDTH + inner_width - 1
    playback = state.playback

    segments = control_segments(playback)
    controls_text = "".join(text for _, text in segments)
    controls_x = body_x(inner_width, display_width(controls_text))

    buttons: list[tuple[Button, Bounds]] = []
    cursor = controls_x
    for button, text in segments:
        cells = display_width(text)
        if button is not None and cursor <= last_x:
            right = min(cursor + cells - 1, last_x)
            buttons.append((button, Bounds(CONTROL_ROW, cursor, right)))
        cursor += cells

    progress = None
    if playback.duration_ms > 0:
        timer = progress_timer(playback)
        bar_width = progress_bar_width(width)
        timer_width = display_width(timer)
        line_x = body_x(inner_width, timer_width + bar_width)
        progress = ProgressGeometry(
            row=PROGRESS_ROW,
            x=line_x,
            timer=timer,
            bar_x=line_x + timer_width,
            bar_width=bar_width,
            last_x=last_x,
        )

    return Layout(
        width=width,
        height=height,
        inner_width=inner_width,
        controls_text=controls_text,
        controls_x=controls_x,
        buttons=tuple(buttons),
        progress=progress,
    )
