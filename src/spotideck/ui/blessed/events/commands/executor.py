"""Run remote playback commands off the UI thread.

run_command() maps one RunCommand onto Spotify client calls and turns the
outcome, success or failure, into exactly one result event. CommandExecutor
runs it on a thread pool and posts the event back to the loop's queue.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Callable

from loguru import logger

from spotideck.domain.playback.devices import ensure_active_device
from spotideck.domain.spotify.exceptions import SpotifyError

from ..messages import (
    Action,
    CommandResult,
    Event,
    RefreshResult,
    RunCommand,
    SearchResults,
)

# Worker threads for concurrent remote calls (a refresh plus a user action)
MAX_WORKERS = 4


def _refresh(client, data: dict[str, Any]) -> Event:
    playback = client.get_state()
    if playback is None:
        return RefreshResult(None)

    liked = False
    if playback.track_id:
        try:
            liked = client.is_liked(playback.track_id)
        except SpotifyError as e:
            logger.debug(f"Liked lookup failed, assuming not liked: {e}")
    return RefreshResult(replace(playback, liked=liked))


def _resume(client, data: dict[str, Any]) -> Event:
    ensure_active_device(client)
    current = client.get_state()
    if current is None or not current.playing:
        client.play()
    return CommandResult("Resumed playback.")


def _pause(client, data: dict[str, Any]) -> Event:
    client.pause()
    return CommandResult("Paused.")


def _next(client, data: dict[str, Any]) -> Event:
    client.next_track()
    return CommandResult("Skipped to next track.")


def _previous(client, data: dict[str, Any]) -> Event:
    client.previous_track()
    return CommandResult("Went back to previous track.")


def _like(client, data: dict[str, Any]) -> Event:
    client.add_to_library(data["track_id"])
    return CommandResult("Added to Liked Songs.")


def _unlike(client, data: dict[str, Any]) -> Event:
    client.remove_from_library(data["track_id"])
    return CommandResult("Removed from Liked Songs.")


def _set_volume(client, data: dict[str, Any]) -> Event:
    client.set_volume(data["volume"])
    return CommandResult(f"Volume: {data['volume']}%")


def _seek(client, data: dict[str, Any]) -> Event:
    client.seek(data["position_ms"])
    # The seek went through; a failed follow-up poll degrades like any refresh
    try:
        return _refresh(client, data)
    except SpotifyError as e:
        logger.debug(f"Refresh after seek failed: {e}")
        return RefreshResult(None)


def _search(client, data: dict[str, Any]) -> Event:
    tracks = client.search_tracks(data["query"])
    return SearchResults(tuple(tracks))


def _play_uri(client, data: dict[str, Any]) -> Event:
    client.play_uri(data["uri"])
    return CommandResult("Playing selected track")


COMMAND_HANDLERS: dict[Action, Callable[[Any, dict[str, Any]], Event]] = {
    Action.REFRESH: _refresh,
    Action.RESUME: _resume,
    Action.PAUSE: _pause,
    Action.NEXT: _next,
    Action.PREVIOUS: _previous,
    Action.LIKE: _like,
    Action.UNLIKE: _unlike,
    Action.SET_VOLUME: _set_volume,
    Action.SEEK: _seek,
    Action.SEARCH: _search,
    Action.PLAY_URI: _play_uri,
}


def _failure_event(action: Action, error: Exception) -> Event:
    if action == Action.REFRESH:
        return RefreshResult(None)
    if action == Action.SEARCH:
        # Plain status; the search screen stays open
        return CommandResult(f"Search failed: {error}")
    return CommandResult(str(error), error=True)


def run_command(client, command: RunCommand) -> Event:
    """
    Execute one command against the Spotify client.

    Never raises: failures come back as result events.

    Args:
        client: SpotifyClient (or anything with the same methods)
        command: Command to run

    Returns:
        Exactly one event describing the outcome
    """
    handler = COMMAND_HANDLERS[command.action]
    try:
        return handler(client, command.data)
    except SpotifyError as e:
        logger.warning(f"{command.action.value} failed: {e}")
        return _failure_event(command.action, e)
    except Exception as e:
        logger.exception(f"Unexpected error running {command.action.value}: {e}")
        return _failure_event(command.action, e)


class CommandExecutor:
    """Runs commands on a thread pool and posts result events."""

    def __init__(
        self, client, post: Callable[[Event], None], max_workers: int = MAX_WORKERS
    ):
        self.client = client
        self._post = post
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="spotify-command"
        )

    def submit(self, command: RunCommand) -> Future:
        logger.debug(f"Submitting {command.action.value} {command.data}")
        return self._pool.submit(self._run, command)

    def _run(self, command: RunCommand) -> None:
        self._post(run_command(self.client, command))

    def shutdown(self) -> None:
        """Stop accepting work; in-flight requests finish on their own."""
        self._pool.shutdown(wait=False, cancel_futures=True)
