"""The update step: fold one event into the state.

update() is the only place UIState changes. It is pure: remote calls and
timers are requested as work items and their outcomes come back later as
events, applied in arrival order.
"""

from loguru import logger

from ..state import (
    UIMode,
    UIState,
    apply_refresh,
    clear_status,
    set_dimensions,
    set_error,
    set_search_results,
    set_status,
)
from .keyboard import handle_key
from .messages import (
    CommandResult,
    Event,
    KeyPress,
    PointerEvent,
    RefreshResult,
    Resize,
    ScheduleStatusClear,
    SearchResults,
    StatusClear,
    Tick,
    Work,
)
from .mouse import handle_pointer
from .poller import handle_tick

STATUS_CLEAR_DELAY_S = 5.0

WAITING_STATUS = "Waiting for playback..."
NO_RESULTS_STATUS = "No results found"


def _expire_status(state: UIState) -> tuple[UIState, list[Work]]:
    return state, [ScheduleStatusClear(state.status_generation, STATUS_CLEAR_DELAY_S)]


def show_status(state: UIState, message: str) -> tuple[UIState, list[Work]]:
    """Set the status line and schedule its expiry."""
    return _expire_status(set_status(state, message))


def show_error(state: UIState, detail: str) -> tuple[UIState, list[Work]]:
    """Set an error status (drawn in the error style) and schedule its expiry."""
    return _expire_status(set_error(state, detail))


def _handle_refresh(state: UIState, event: RefreshResult) -> tuple[UIState, list[Work]]:
    if event.playback is None:
        # Nothing playing or the poll failed; keep showing the last snapshot
        return show_status(state, WAITING_STATUS)
    return apply_refresh(state, event.playback), []


def _handle_command_result(
    state: UIState, event: CommandResult
) -> tuple[UIState, list[Work]]:
    if event.error:
        return show_error(state, event.message)
    return show_status(state, event.message)


def _handle_search_results(
    state: UIState, event: SearchResults
) -> tuple[UIState, list[Work]]:
    if state.mode != UIMode.SEARCHING or state.search is None:
        logger.debug("Dropping search results: search was cancelled")
        return state, []
    if not event.tracks:
        return show_status(state, NO_RESULTS_STATUS)
    return set_search_results(state, event.tracks), []


def update(state: UIState, event: Event) -> tuple[UIState, list[Work]]:
    """
    Apply one event to the state.

    Args:
        state: Current UI state
        event: Next event from the loop's queue

    Returns:
        Tuple of (new state, work items for the loop to carry out)
    """
    match event:
        case Resize(width=width, height=height):
            return set_dimensions(state, width, height), []
        case KeyPress():
            return handle_key(state, event)
        case PointerEvent():
            return handle_pointer(state, event)
        case Tick():
            return handle_tick(state)
        case RefreshResult():
            return _handle_refresh(state, event)
        case CommandResult():
            return _handle_command_result(state, event)
        case StatusClear(generation=generation):
            return clear_status(state, generation), []
        case SearchResults():
            return _handle_search_results(state, event)
        case _:
            logger.warning(f"Unhandled event: {event!r}")
            return state, []
