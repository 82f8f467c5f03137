"""Playback actions shared by the keyboard and pointer handlers.

Each function takes the current state and returns (new state, work items).
Every remote-bound action also opens a burst window of fast polls.
"""

from loguru import logger

from spotideck.domain.playback.models import clamp

from ..state import UIState, enter_search, toggle_help
from .messages import Action, Quit, RunCommand, Work
from .poller import trigger_burst

VOLUME_STEP = 10
SEEK_STEP_MS = 10_000


def _remote(state: UIState, command: RunCommand) -> tuple[UIState, list[Work]]:
    if not state.connected:
        logger.debug(f"Ignoring {command.action.value}: no remote client")
        return state, []
    return trigger_burst(state), [command]


def play_pause(state: UIState) -> tuple[UIState, list[Work]]:
    """Pause when the local snapshot says playing, resume otherwise."""
    action = Action.PAUSE if state.playback.playing else Action.RESUME
    return _remote(state, RunCommand(action))


def skip_next(state: UIState) -> tuple[UIState, list[Work]]:
    return _remote(state, RunCommand(Action.NEXT))


def skip_previous(state: UIState) -> tuple[UIState, list[Work]]:
    return _remote(state, RunCommand(Action.PREVIOUS))


def toggle_like(state: UIState) -> tuple[UIState, list[Work]]:
    """Like or unlike the current track; no-op without a track id."""
    track_id = state.playback.track_id
    if not track_id:
        return state, []
    action = Action.UNLIKE if state.playback.liked else Action.LIKE
    return _remote(state, RunCommand(action, {"track_id": track_id}))


def change_volume(state: UIState, delta: int) -> tuple[UIState, list[Work]]:
    """
    Step the volume by delta percent.

    Args:
        state: Current UI state
        delta: Signed step, usually +/- VOLUME_STEP

    Returns:
        Tuple of (updated state, [SET_VOLUME command])
    """
    volume = clamp(state.playback.volume_percent + delta, 0, 100)
    return _remote(state, RunCommand(Action.SET_VOLUME, {"volume": volume}))


def seek_backward(state: UIState) -> tuple[UIState, list[Work]]:
    """Jump back SEEK_STEP_MS, stopping at 0. Nothing to do at position 0."""
    if state.playback.progress_ms <= 0:
        return state, []
    target = max(0, state.playback.progress_ms - SEEK_STEP_MS)
    return _remote(state, RunCommand(Action.SEEK, {"position_ms": target}))


def seek_forward(state: UIState) -> tuple[UIState, list[Work]]:
    """Jump forward SEEK_STEP_MS, stopping at the end of the track."""
    duration = state.playback.duration_ms
    if duration <= 0:
        return state, []
    target = min(state.playback.progress_ms + SEEK_STEP_MS, duration)
    return _remote(state, RunCommand(Action.SEEK, {"position_ms": target}))


def seek_to_fraction(state: UIState, fraction: float) -> tuple[UIState, list[Work]]:
    """Seek to a fraction (0.0-1.0) of the current track."""
    duration = state.playback.duration_ms
    if duration <= 0:
        return state, []
    target = clamp(int(fraction * duration), 0, duration)
    return _remote(state, RunCommand(Action.SEEK, {"position_ms": target}))


def start_search(state: UIState) -> tuple[UIState, list[Work]]:
    return enter_search(state), []


def show_help(state: UIState) -> tuple[UIState, list[Work]]:
    return toggle_help(state), []


def quit_app(state: UIState) -> tuple[UIState, list[Work]]:
    return state, [Quit()]
