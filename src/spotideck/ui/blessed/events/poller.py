"""Adaptive polling: 1 Hz normally, 10 Hz for one second after user actions."""

from dataclasses import replace

from ..state import PollSchedule, UIState
from .messages import Action, RunCommand, ScheduleTick, Work

FAST_INTERVAL_MS = 100
NORMAL_INTERVAL_MS = 1000
BURST_TICKS = 10


def trigger_burst(state: UIState) -> UIState:
    """Start (or restart) a burst window of BURST_TICKS fast ticks."""
    return replace(
        state,
        poll=PollSchedule(interval_ms=FAST_INTERVAL_MS, burst_ticks_remaining=BURST_TICKS),
    )


def advance_progress(state: UIState, elapsed_ms: int) -> UIState:
    """Move the displayed position forward between refreshes.

    Only while playing and after a real refresh has arrived; the estimate is
    overwritten by the next refresh result.
    """
    if not (state.connected and state.has_initial_state and state.playback.playing):
        return state
    playback = state.playback.with_progress(state.playback.progress_ms + elapsed_ms)
    return replace(state, playback=playback)


def handle_tick(state: UIState) -> tuple[UIState, list[Work]]:
    """
    Decide the next tick interval and request a refresh.

    Args:
        state: Current UI state

    Returns:
        Tuple of (updated state, [refresh request, next tick])
    """
    remaining = state.poll.burst_ticks_remaining

    if remaining > 0:
        delay = FAST_INTERVAL_MS
        state = replace(
            state,
            poll=PollSchedule(interval_ms=delay, burst_ticks_remaining=remaining - 1),
        )
    else:
        delay = NORMAL_INTERVAL_MS
        state = replace(state, poll=PollSchedule(interval_ms=delay, burst_ticks_remaining=0))
        # Smooth progress only on normal ticks, not during a burst
        state = advance_progress(state, NORMAL_INTERVAL_MS)

    work: list[Work] = []
    if state.connected:
        work.append(RunCommand(Action.REFRESH))
    work.append(ScheduleTick(delay))
    return state, work
