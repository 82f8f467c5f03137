"""Tests for the command executor."""

import queue
from unittest.mock import MagicMock

import pytest

from spotideck.domain.playback.models import Device, PlaybackState, SearchTrack
from spotideck.domain.spotify.exceptions import NoDeviceError, SpotifyAPIError
from spotideck.ui.blessed.events.commands import CommandExecutor, run_command
from spotideck.ui.blessed.events.messages import (
    Action,
    CommandResult,
    RefreshResult,
    RunCommand,
    SearchResults,
)


@pytest.fixture
def client() -> MagicMock:
    """Spotify client with one active computer and a playing track."""
    mock = MagicMock()
    mock.list_devices.return_value = [Device(id="dev1", name="Laptop", type="Computer", active=True)]
    mock.get_state.return_value = PlaybackState(
        track_name="Avril 14th", track_id="t1", duration_ms=120_000, playing=True
    )
    mock.is_liked.return_value = True
    return mock


class TestRefresh:
    def test_refresh_includes_liked_flag(self, client):
        event = run_command(client, RunCommand(Action.REFRESH))

        assert isinstance(event, RefreshResult)
        assert event.playback.track_name == "Avril 14th"
        assert event.playback.liked is True
        client.is_liked.assert_called_once_with("t1")

    def test_refresh_without_session(self, client):
        client.get_state.return_value = None
        assert run_command(client, RunCommand(Action.REFRESH)) == RefreshResult(None)
        client.is_liked.assert_not_called()

    def test_failed_refresh_is_silent(self, client):
        client.get_state.side_effect = SpotifyAPIError("Network error", None)
        assert run_command(client, RunCommand(Action.REFRESH)) == RefreshResult(None)

    def test_liked_lookup_failure_means_not_liked(self, client):
        client.is_liked.side_effect = SpotifyAPIError("rate limited", 429)
        event = run_command(client, RunCommand(Action.REFRESH))
        assert event.playback.liked is False

    def test_track_without_id_skips_liked_lookup(self, client):
        client.get_state.return_value = PlaybackState(track_name="Local file")
        event = run_command(client, RunCommand(Action.REFRESH))
        assert event.playback.liked is False
        client.is_liked.assert_not_called()


class TestResume:
    def test_resume_with_active_device(self, client):
        client.get_state.return_value = PlaybackState(track_name="A", playing=False)

        event = run_command(client, RunCommand(Action.RESUME))

        assert event == CommandResult("Resumed playback.")
        client.transfer_playback.assert_not_called()
        client.play.assert_called_once()

    def test_resume_transfers_to_only_valid_device(self, client):
        """No active device but one valid one: transfer, then play."""
        client.list_devices.return_value = [
            Device(id="tv", name="TV", type="TV", restricted=True),
            Device(id="phone", name="Phone", type="Smartphone"),
        ]
        client.get_state.return_value = None

        event = run_command(client, RunCommand(Action.RESUME))

        assert event == CommandResult("Resumed playback.")
        client.transfer_playback.assert_called_once_with("phone", play=False)
        client.play.assert_called_once()

    def test_resume_skips_play_when_already_playing(self, client):
        event = run_command(client, RunCommand(Action.RESUME))
        assert event == CommandResult("Resumed playback.")
        client.play.assert_not_called()

    def test_resume_without_devices_is_an_error(self, client):
        client.list_devices.return_value = []
        event = run_command(client, RunCommand(Action.RESUME))
        assert event.error is True
        assert "no devices" in event.message
        client.play.assert_not_called()


class TestSimpleCommands:
    @pytest.mark.parametrize(
        "command, method, args, message",
        [
            (RunCommand(Action.PAUSE), "pause", (), "Paused."),
            (RunCommand(Action.NEXT), "next_track", (), "Skipped to next track."),
            (RunCommand(Action.PREVIOUS), "previous_track", (), "Went back to previous track."),
            (RunCommand(Action.LIKE, {"track_id": "t1"}), "add_to_library", ("t1",), "Added to Liked Songs."),
            (
                RunCommand(Action.UNLIKE, {"track_id": "t1"}),
                "remove_from_library",
                ("t1",),
                "Removed from Liked Songs.",
            ),
            (RunCommand(Action.SET_VOLUME, {"volume": 70}), "set_volume", (70,), "Volume: 70%"),
            (
                RunCommand(Action.PLAY_URI, {"uri": "spotify:track:x"}),
                "play_uri",
                ("spotify:track:x",),
                "Playing selected track",
            ),
        ],
    )
    def test_command_calls_client_and_reports(self, client, command, method, args, message):
        event = run_command(client, command)

        getattr(client, method).assert_called_once_with(*args)
        assert event == CommandResult(message)

    def test_failure_becomes_error_result(self, client):
        client.next_track.side_effect = SpotifyAPIError("Player command failed: Restriction violated", 403)

        event = run_command(client, RunCommand(Action.NEXT))

        assert event == CommandResult("Player command failed: Restriction violated", error=True)

    def test_unexpected_exception_is_contained(self, client):
        client.pause.side_effect = RuntimeError("boom")
        event = run_command(client, RunCommand(Action.PAUSE))
        assert event == CommandResult("boom", error=True)


class TestSeekAndSearch:
    def test_seek_then_refresh(self, client):
        event = run_command(client, RunCommand(Action.SEEK, {"position_ms": 30_000}))

        client.seek.assert_called_once_with(30_000)
        assert isinstance(event, RefreshResult)

    def test_failed_refresh_after_seek_is_not_an_error(self, client):
        """The seek itself succeeded, so only the follow-up poll degrades."""
        client.get_state.side_effect = SpotifyAPIError("Network error: timeout")

        event = run_command(client, RunCommand(Action.SEEK, {"position_ms": 1000}))

        client.seek.assert_called_once_with(1000)
        assert event == RefreshResult(None)

    def test_seek_failure_is_an_error(self, client):
        client.seek.side_effect = SpotifyAPIError("Restriction violated", 403)
        event = run_command(client, RunCommand(Action.SEEK, {"position_ms": 1000}))
        assert event == CommandResult("Restriction violated", error=True)
        client.get_state.assert_not_called()

    def test_search_returns_results_in_order(self, client):
        found = [
            SearchTrack(id="a", name="A", artists=("X",), uri="spotify:track:a"),
            SearchTrack(id="b", name="B", artists=("Y",), uri="spotify:track:b"),
        ]
        client.search_tracks.return_value = found

        event = run_command(client, RunCommand(Action.SEARCH, {"query": "ab"}))

        assert event == SearchResults(tuple(found))
        client.search_tracks.assert_called_once_with("ab")

    def test_search_failure_is_plain_status(self, client):
        client.search_tracks.side_effect = SpotifyAPIError("timeout")
        event = run_command(client, RunCommand(Action.SEARCH, {"query": "ab"}))
        assert event == CommandResult("Search failed: timeout")

    def test_no_device_error_message(self, client):
        client.list_devices.side_effect = NoDeviceError("no controllable devices available")
        event = run_command(client, RunCommand(Action.RESUME))
        assert event == CommandResult("no controllable devices available", error=True)


class TestCommandExecutor:
    def test_posts_exactly_one_event_per_command(self, client):
        events: queue.Queue = queue.Queue()
        executor = CommandExecutor(client, events.put, max_workers=2)
        try:
            executor.submit(RunCommand(Action.PAUSE)).result(timeout=5)
            executor.submit(RunCommand(Action.NEXT)).result(timeout=5)
        finally:
            executor.shutdown()

        posted = [events.get_nowait(), events.get_nowait()]
        assert set(posted) == {CommandResult("Paused."), CommandResult("Skipped to next track.")}
        assert events.empty()
