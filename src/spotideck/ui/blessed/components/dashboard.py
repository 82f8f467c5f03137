"""Dashboard rendering functions (the main playback screen)."""

from spotideck.domain.playback.models import PlaybackState

from ..state import UIState, is_error_status
from ..styles.formatting import display_width, truncate
from ..styles.theme import Palette, Style
from .frame import BLANK, BodyLine, render_frame
from .layout import (
    ARTIST_ROW,
    BORDER_WIDTH,
    CONTROL_ROW,
    PROGRESS_ROW,
    STATUS_ROW,
    TOP_BORDER_ROW,
    TRACK_ROW,
    VOLUME_ROW,
    Layout,
    ProgressGeometry,
    body_x,
    compute_layout,
)

FILLED_CHAR = "━"
EMPTY_CHAR = "─"
HELP_HINT = "  |  ? for help"
NO_TRACK = "No track playing"


def _centered(text: str, style: Style, inner_width: int) -> BodyLine:
    text = truncate(text, inner_width)
    return BodyLine(((text, style),), body_x(inner_width, display_width(text)) - BORDER_WIDTH)


def format_track_line(playback: PlaybackState) -> str:
    if not playback.has_track:
        return NO_TRACK
    if playback.playing:
        return playback.track_name
    return f"{playback.track_name} (paused)"


def create_progress_bar(
    playback: PlaybackState, progress: ProgressGeometry, palette: Palette
) -> BodyLine:
    """Timer text followed by a filled/empty bar of progress.bar_width cells."""
    ratio = playback.progress_ms / playback.duration_ms
    filled = min(progress.bar_width, int(max(0.0, min(1.0, ratio)) * progress.bar_width))
    return BodyLine(
        (
            (progress.timer, palette.artist),
            (FILLED_CHAR * filled, palette.progress_bar),
            (EMPTY_CHAR * (progress.bar_width - filled), palette.artist),
        ),
        progress.x - BORDER_WIDTH,
    )


def format_status_line(state: UIState, palette: Palette, inner_width: int) -> BodyLine:
    if is_error_status(state):
        return _centered(state.status, palette.error, inner_width)
    return _centered(state.status + HELP_HINT, palette.status, inner_width)


def build_dashboard_body(state: UIState, layout: Layout, palette: Palette) -> list[BodyLine]:
    """
    Build the container lines of the main screen.

    Args:
        state: Current UI state
        layout: Layout computed from the same state
        palette: Color styles

    Returns:
        Body lines, index 0 being the row just below the top border
    """
    playback = state.playback
    inner = layout.inner_width

    rows: dict[int, BodyLine] = {}

    if playback.has_track:
        track_style = palette.track_playing if playback.playing else palette.track_paused
        rows[TRACK_ROW] = _centered(format_track_line(playback), track_style, inner)
        rows[ARTIST_ROW] = _centered(playback.artist_name, palette.artist, inner)
    else:
        rows[TRACK_ROW] = _centered(NO_TRACK, palette.artist, inner)

    if layout.progress is not None:
        rows[PROGRESS_ROW] = create_progress_bar(playback, layout.progress, palette)

    rows[CONTROL_ROW] = BodyLine(
        ((layout.controls_text, palette.artist),), layout.controls_x - BORDER_WIDTH
    )
    rows[VOLUME_ROW] = _centered(f"🔊 {playback.volume_percent}%", palette.artist, inner)
    rows[STATUS_ROW] = format_status_line(state, palette, inner)

    first = TOP_BORDER_ROW + 1
    return [rows.get(row, BLANK) for row in range(first, STATUS_ROW + 1)]


def render_dashboard(state: UIState, palette: Palette) -> list[str]:
    """Render the main playback screen, one string per terminal row."""
    layout = compute_layout(state)
    body = build_dashboard_body(state, layout, palette)
    return render_frame(
        palette,
        layout.width,
        layout.height,
        f"  spotideck v{state.version} ",
        body,
    )
