"""Tests for the update step (the reducer)."""

from dataclasses import replace

import pytest

from spotideck.domain.playback.models import PlaybackState
from spotideck.ui.blessed.events.messages import (
    Action,
    CommandResult,
    KeyPress,
    RefreshResult,
    Resize,
    RunCommand,
    ScheduleStatusClear,
    SearchResults,
    StatusClear,
    Tick,
)
from spotideck.ui.blessed.events.update import (
    NO_RESULTS_STATUS,
    STATUS_CLEAR_DELAY_S,
    WAITING_STATUS,
    update,
)
from spotideck.ui.blessed.state import (
    ERROR_PREFIX,
    UIMode,
    create_initial_state,
    enter_search,
    is_error_status,
    set_error,
)


class TestRefreshResult:
    def test_track_bearing_refresh_replaces_playback(self, state):
        fresh = PlaybackState(track_name="Xtal", artist_name="Aphex Twin", duration_ms=290_000)

        new_state, work = update(state, RefreshResult(fresh))

        assert new_state.playback == fresh
        assert new_state.has_initial_state
        assert work == []

    def test_empty_refresh_keeps_track_and_shows_waiting(self, state):
        """No active session: status changes, displayed track does not."""
        new_state, work = update(state, RefreshResult(None))

        assert new_state.status == WAITING_STATUS
        assert new_state.playback == state.playback
        assert work == [ScheduleStatusClear(new_state.status_generation, STATUS_CLEAR_DELAY_S)]

    def test_stale_refresh_is_applied_as_is(self, state):
        """Results are applied in arrival order with no reconciliation."""
        stale = replace(state.playback, playing=False)
        new_state, _ = update(state, RefreshResult(stale))
        assert new_state.playback.playing is False

    def test_first_refresh_marks_initial_state(self):
        state = create_initial_state()
        assert not state.has_initial_state

        new_state, _ = update(state, RefreshResult(PlaybackState(track_name="A")))

        assert new_state.has_initial_state


class TestStatusMessages:
    def test_command_result_sets_status_and_schedules_clear(self, state):
        new_state, work = update(state, CommandResult("Paused."))

        assert new_state.status == "Paused."
        assert work == [ScheduleStatusClear(new_state.status_generation, 5.0)]

    def test_error_result_gets_error_prefix(self, state):
        new_state, work = update(state, CommandResult("no devices found", error=True))

        assert new_state == set_error(state, "no devices found")
        assert new_state.status == f"{ERROR_PREFIX}no devices found"
        assert is_error_status(new_state)
        assert work == [ScheduleStatusClear(new_state.status_generation, 5.0)]

    def test_plain_result_is_not_error_styled(self, state):
        new_state, _ = update(state, CommandResult("Paused."))
        assert not is_error_status(new_state)

    def test_clear_removes_current_status(self, state):
        state, work = update(state, CommandResult("Paused."))
        generation = work[0].generation

        new_state, _ = update(state, StatusClear(generation))

        assert new_state.status == ""

    def test_stale_clear_keeps_newer_status(self, state):
        """A clear scheduled for an older message does not wipe a newer one."""
        state, first = update(state, CommandResult("Paused."))
        state, _ = update(state, CommandResult("Resumed playback."))

        new_state, _ = update(state, StatusClear(first[0].generation))

        assert new_state.status == "Resumed playback."


class TestSearchResults:
    def test_results_truncate_to_ten_and_reset_cursor(self, state, tracks):
        state = enter_search(state)
        state, _ = update(state, SearchResults(tracks[:3]))
        state = replace(state, search=replace(state.search, cursor=2))

        new_state, _ = update(state, SearchResults(tracks))

        assert len(new_state.search.results) == 10
        assert new_state.search.results == tracks[:10]
        assert new_state.search.cursor == 0

    def test_empty_results_show_status_and_stay_in_search(self, state):
        state = enter_search(state)

        new_state, _ = update(state, SearchResults(()))

        assert new_state.status == NO_RESULTS_STATUS
        assert new_state.mode == UIMode.SEARCHING
        assert new_state.search.results == ()

    def test_late_results_after_cancel_are_dropped(self, state, tracks):
        """Escape discards search unconditionally, even mid-request."""
        new_state, work = update(state, SearchResults(tracks))

        assert new_state == state
        assert work == []

    def test_search_failure_is_plain_status(self, state):
        state = enter_search(state)
        new_state, _ = update(state, CommandResult("Search failed: timeout"))

        assert not is_error_status(new_state)
        assert new_state.mode == UIMode.SEARCHING


class TestRouting:
    def test_resize_updates_dimensions(self, state):
        new_state, work = update(state, Resize(120, 40))

        assert new_state.dimensions.width == 120
        assert new_state.dimensions.height == 40
        assert work == []

    def test_tick_is_routed_to_poller(self, state):
        _, work = update(state, Tick())
        assert RunCommand(Action.REFRESH) in work

    def test_keypress_is_routed_to_keyboard(self, state):
        _, work = update(state, KeyPress("char", "n"))
        assert work == [RunCommand(Action.NEXT)]

    def test_unknown_event_is_a_no_op(self, state):
        new_state, work = update(state, object())
        assert new_state == state
        assert work == []


class TestScenarios:
    def test_volume_up_from_95_requests_100(self, state):
        state = replace(state, playback=replace(state.playback, volume_percent=95))
        _, work = update(state, KeyPress("char", "+"))
        assert work == [RunCommand(Action.SET_VOLUME, {"volume": 100})]

    def test_volume_down_from_5_requests_0(self, state):
        state = replace(state, playback=replace(state.playback, volume_percent=5))
        _, work = update(state, KeyPress("char", "-"))
        assert work == [RunCommand(Action.SET_VOLUME, {"volume": 0})]

    def test_backward_seek_from_3s_requests_zero(self, state):
        state = replace(state, playback=state.playback.with_progress(3000))
        _, work = update(state, KeyPress("arrow_left"))
        assert work == [RunCommand(Action.SEEK, {"position_ms": 0})]

    @pytest.mark.parametrize("progress, expected", [(60_000, 70_000), (175_000, 180_000)])
    def test_forward_seek_clamps_to_duration(self, state, progress, expected):
        state = replace(state, playback=state.playback.with_progress(progress))
        _, work = update(state, KeyPress("arrow_right"))
        assert work == [RunCommand(Action.SEEK, {"position_ms": expected})]

    def test_play_while_paused_resumes_and_bursts(self, state):
        state = replace(state, playback=replace(state.playback, playing=False))

        new_state, work = update(state, KeyPress("char", "p"))

        assert work == [RunCommand(Action.RESUME)]
        assert new_state.poll.burst_ticks_remaining == 10
