"""UI state management - immutable state updates."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from spotideck.domain.playback.models import PlaybackState, SearchTrack

# Search results kept per query
MAX_SEARCH_RESULTS = 10

# Terminal size assumed until the first resize event
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

# Status lines starting with this are drawn in the error style
ERROR_PREFIX = "Error: "


class UIMode(Enum):
    """Exactly one of these is active at a time."""

    NORMAL = "normal"
    HELP = "help"
    SEARCHING = "searching"


@dataclass(frozen=True)
class SearchState:
    """Modal search session; only exists while mode is SEARCHING."""

    query: str = ""
    results: tuple[SearchTrack, ...] = ()
    cursor: int = 0


@dataclass(frozen=True)
class PollSchedule:
    """Adaptive polling rate: fast while burst ticks remain."""

    interval_ms: int = 1000
    burst_ticks_remaining: int = 0


@dataclass(frozen=True)
class Dimensions:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT


@dataclass(frozen=True)
class UIState:
    """
    Whole controller state - immutable updates only.

    Owned by the event loop; every transformation returns a new UIState.
    """

    # ============================================================================
    # PLAYBACK
    # ============================================================================
    playback: PlaybackState = field(default_factory=PlaybackState)
    has_initial_state: bool = False  # True after the first track-bearing refresh
    connected: bool = True  # A remote client is available

    # ============================================================================
    # MODES
    # ============================================================================
    mode: UIMode = UIMode.NORMAL
    search: Optional[SearchState] = None

    # ============================================================================
    # POLLING, LAYOUT, STATUS
    # ============================================================================
    poll: PollSchedule = field(default_factory=PollSchedule)
    dimensions: Dimensions = field(default_factory=Dimensions)
    status: str = ""
    status_generation: int = 0  # Bumped on every new status; stale clears are ignored

    version: str = "dev"


def create_initial_state(
    version: str = "dev", connected: bool = True, status: str = ""
) -> UIState:
    """Create the state the controller starts with."""
    return UIState(version=version, connected=connected, status=status)


# ============================================================================
# STATUS
# ============================================================================


def set_status(state: UIState, message: str) -> UIState:
    """Set the status line; the caller schedules the matching clear."""
    return replace(
        state, status=message, status_generation=state.status_generation + 1
    )


def set_error(state: UIState, detail: str) -> UIState:
    return set_status(state, f"{ERROR_PREFIX}{detail}")


def is_error_status(state: UIState) -> bool:
    return state.status.startswith(ERROR_PREFIX)


def clear_status(state: UIState, generation: int) -> UIState:
    """Clear the status only if it is still the message the timer was set for."""
    if generation != state.status_generation:
        return state
    return replace(state, status="")


# ============================================================================
# PLAYBACK
# ============================================================================


def apply_refresh(state: UIState, playback: PlaybackState) -> UIState:
    """Replace the playback snapshot wholesale with a fresh one."""
    return replace(state, playback=playback, has_initial_state=True)


def set_dimensions(state: UIState, width: int, height: int) -> UIState:
    return replace(state, dimensions=Dimensions(width=width, height=height))


# ============================================================================
# HELP
# ============================================================================


def toggle_help(state: UIState) -> UIState:
    mode = UIMode.NORMAL if state.mode == UIMode.HELP else UIMode.HELP
    return replace(state, mode=mode)


def hide_help(state: UIState) -> UIState:
    return replace(state, mode=UIMode.NORMAL)


# ============================================================================
# SEARCH
# ============================================================================


def enter_search(state: UIState) -> UIState:
    """Start a search session with an empty query, no results, cursor 0."""
    return replace(state, mode=UIMode.SEARCHING, search=SearchState())


def exit_search(state: UIState) -> UIState:
    """Leave search, discarding the session."""
    return replace(state, mode=UIMode.NORMAL, search=None)


def append_search_char(state: UIState, char: str) -> UIState:
    if state.search is None:
        return state
    return replace(state, search=replace(state.search, query=state.search.query + char))


def delete_search_char(state: UIState) -> UIState:
    if state.search is None or not state.search.query:
        return state
    return replace(state, search=replace(state.search, query=state.search.query[:-1]))


def move_search_cursor(state: UIState, delta: int) -> UIState:
    """Move the result cursor without wrapping past either end."""
    search = state.search
    if search is None or not search.results:
        return state
    cursor = max(0, min(len(search.results) - 1, search.cursor + delta))
    if cursor == search.cursor:
        return state
    return replace(state, search=replace(search, cursor=cursor))


def set_search_results(state: UIState, tracks: tuple[SearchTrack, ...]) -> UIState:
    """Store at most MAX_SEARCH_RESULTS results and reset the cursor."""
    if state.search is None:
        return state
    results = tuple(tracks[:MAX_SEARCH_RESULTS])
    return replace(state, search=replace(state.search, results=results, cursor=0))


def selected_search_track(state: UIState) -> Optional[SearchTrack]:
    search = state.search
    if search is None or not search.results:
        return None
    return search.results[search.cursor]
