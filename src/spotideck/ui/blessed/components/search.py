"""Search screen rendering."""

from ..helpers.selection import compute_scroll_window
from ..state import UIState
from ..styles.theme import Palette, plain
from .frame import BLANK, BodyLine, render_frame
from .help import PADDING

# Rows not available to results: header, borders, padding, query, labels, footer
SEARCH_RESERVED_LINES = 11
MIN_VISIBLE_RESULTS = 3

PLACEHOLDER = "Search for songs..."
CURSOR = "█"


def visible_result_count(height: int, total: int) -> int:
    """How many results fit on screen (at least MIN_VISIBLE_RESULTS)."""
    return min(total, max(MIN_VISIBLE_RESULTS, height - SEARCH_RESERVED_LINES))


def _line(text: str, style=plain) -> BodyLine:
    return BodyLine(((text, style),), PADDING)


def build_search_body(state: UIState, palette: Palette) -> list[BodyLine]:
    """
    Build the container lines of the search screen.

    Args:
        state: Current UI state (mode must be SEARCHING)
        palette: Color styles

    Returns:
        Body lines: query input, then hints or a scrolling result window
    """
    search = state.search
    query = search.query if search else ""
    results = search.results if search else ()

    if query:
        input_line = BodyLine((("Search: ", plain), (query + CURSOR, palette.track_playing)), PADDING)
    else:
        input_line = BodyLine((("Search: ", plain), (CURSOR + PLACEHOLDER, palette.status)), PADDING)

    body = [BLANK, input_line, BLANK]

    if not results:
        if query:
            body.append(_line("Press Enter to search..."))
        else:
            body.append(_line("Type to search for songs, then press Enter"))
    else:
        cursor = search.cursor
        visible = visible_result_count(state.dimensions.height, len(results))
        start, end = compute_scroll_window(cursor, len(results), visible)

        body.append(
            _line(f"Results {start + 1}-{end} of {len(results)} (↑/↓ to scroll, Enter to play):")
        )
        body.append(BLANK)

        if start > 0:
            body.append(_line("  ↑ more results above", palette.artist))

        for i in range(start, end):
            track = results[i]
            label = f"{track.name} - {track.primary_artist}"
            if i == cursor:
                body.append(_line(f"▶ {label}", palette.track_playing))
            else:
                body.append(_line(f"  {label}", palette.artist))

        if end < len(results):
            body.append(_line("  ↓ more results below", palette.artist))

    body.extend([BLANK, _line("Press ESC to cancel")])
    return body


def render_search(state: UIState, palette: Palette) -> list[str]:
    """Render the search screen, one string per terminal row."""
    return render_frame(
        palette,
        state.dimensions.width,
        state.dimensions.height,
        "  🔍 Search ",
        build_search_body(state, palette),
    )
