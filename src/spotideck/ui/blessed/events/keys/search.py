"""Search mode keyboard handlers."""

from loguru import logger

from spotideck.ui.blessed.state import (
    UIState,
    append_search_char,
    delete_search_char,
    exit_search,
    move_search_cursor,
    selected_search_track,
)

from ...components.search import visible_result_count
from ..messages import Action, KeyPress, Quit, RunCommand, Work


def handle_search_key(state: UIState, event: KeyPress) -> tuple[UIState, list[Work]]:
    """
    Handle keyboard events while the search screen is open.

    Enter runs the query when there are no results yet, and plays the
    highlighted track once results are shown. Arrows, Page Up/Down and
    Home/End move through the results. Typing goes to the query.

    Args:
        state: Current UI state (mode must be SEARCHING)
        event: Parsed key event from parse_key()

    Returns:
        Tuple of (updated state, work items)
    """
    search = state.search
    if search is None:
        return state, []

    if event.type == "ctrl_c":
        return state, [Quit()]

    if event.type == "escape":
        return exit_search(state), []

    if event.type == "enter":
        if search.results:
            track = selected_search_track(state)
            logger.info(f"Playing search result: {track.name} - {track.primary_artist}")
            return exit_search(state), [RunCommand(Action.PLAY_URI, {"uri": track.uri})]

        query = search.query.strip()
        if not query or not state.connected:
            return state, []
        return state, [RunCommand(Action.SEARCH, {"query": query})]

    if search.results:
        total = len(search.results)
        page = visible_result_count(state.dimensions.height, total)
        moves = {
            "arrow_up": -1,
            "arrow_down": 1,
            "page_up": -page,
            "page_down": page,
            "home": -total,
            "end": total,
        }
        if event.type in moves:
            return move_search_cursor(state, moves[event.type]), []

    if event.type == "backspace":
        return delete_search_char(state), []

    if event.type == "char":
        return append_search_char(state, event.char), []

    return state, []
