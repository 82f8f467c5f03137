"""Tests for layout geometry shared by rendering and hit-testing."""

from dataclasses import replace

import pytest

from spotideck.ui.blessed.components.layout import (
    CONTROL_ROW,
    MIN_BAR_WIDTH,
    PROGRESS_ROW,
    Button,
    build_controls_text,
    compute_layout,
    progress_bar_width,
)
from spotideck.ui.blessed.render import render_lines
from spotideck.ui.blessed.state import set_dimensions
from spotideck.ui.blessed.styles.formatting import display_width


def cell_text(line: str, left: int, right: int) -> str:
    """Characters drawn in screen columns [left, right] of an unstyled line."""
    column = 0
    chars = []
    for char in line:
        if left <= column <= right:
            chars.append(char)
        column += display_width(char)
    return "".join(chars)


class TestControlBar:
    def test_controls_text_reflects_playback(self, state):
        assert "⏸" in build_controls_text(state.playback)
        assert "♡" in build_controls_text(state.playback)

        paused_liked = replace(state.playback, playing=False, liked=True)
        text = build_controls_text(paused_liked)
        assert "▶" in text
        assert "♥" in text

    def test_buttons_in_display_order(self, state):
        layout = compute_layout(state)
        assert [button for button, _ in layout.buttons] == list(Button)

    def test_controls_are_centered_in_container(self, state):
        layout = compute_layout(state)
        width = display_width(layout.controls_text)
        assert layout.controls_x == 1 + (layout.inner_width - width) // 2

    def test_search_button_spans_wide_glyph(self, state):
        """The magnifier glyph is two cells wide, so the bracket ends later."""
        layout = compute_layout(state)
        bounds = layout.bounds_of(Button.SEARCH)
        assert bounds.right - bounds.left + 1 == display_width("[ 🔍 Search ]")
        assert bounds.left == layout.controls_x + 1

    def test_buttons_do_not_overlap(self, state):
        spans = [bounds for _, bounds in compute_layout(state).buttons]
        for a, b in zip(spans, spans[1:]):
            assert a.right < b.left

    @pytest.mark.parametrize("width", [50, 80, 81, 132])
    def test_bounds_match_rendered_brackets(self, state, palette, width):
        """Each button's bounds cover exactly its bracketed label on screen."""
        state = set_dimensions(state, width, 24)
        layout = compute_layout(state)
        row = render_lines(state, palette)[CONTROL_ROW]

        for _, bounds in layout.buttons:
            text = cell_text(row, bounds.left, bounds.right)
            assert text.startswith("[")
            assert text.endswith("]")

    def test_playing_state_changes_do_not_shift_buttons(self, state):
        """Play/pause glyphs have equal width, so bounds stay put."""
        paused = replace(state, playback=replace(state.playback, playing=False))
        assert compute_layout(state).buttons == compute_layout(paused).buttons


class TestProgressBar:
    def test_bar_width_formula(self):
        assert progress_bar_width(80) == 80 - 4 - 15

    def test_bar_width_has_minimum(self):
        assert progress_bar_width(20) == MIN_BAR_WIDTH

    def test_no_progress_without_duration(self, state):
        state = replace(state, playback=replace(state.playback, duration_ms=0))
        assert compute_layout(state).progress is None

    def test_bar_follows_timer_text(self, state):
        progress = compute_layout(state).progress

        assert progress.row == PROGRESS_ROW
        assert progress.timer == "1:00/3:00 "
        assert progress.bar_x == progress.x + display_width(progress.timer)
        assert progress.bar_width == 61

    def test_seek_fraction_inside_and_outside_bar(self, state):
        progress = compute_layout(state).progress

        assert progress.seek_fraction(progress.bar_x) == 0.0
        assert progress.seek_fraction(progress.bar_x - 1) is None
        assert progress.seek_fraction(progress.bar_x + progress.bar_width) is None
        last = progress.seek_fraction(progress.bar_x + progress.bar_width - 1)
        assert 0.0 < last < 1.0

    def test_rendered_bar_starts_at_bar_x(self, state, palette):
        layout = compute_layout(state)
        progress = layout.progress
        row = render_lines(state, palette)[PROGRESS_ROW]

        assert cell_text(row, progress.x, progress.bar_x - 1) == progress.timer
        bar = cell_text(row, progress.bar_x, progress.bar_x + progress.bar_width - 1)
        assert len(bar) == progress.bar_width
        assert set(bar) <= {"━", "─"}


class TestNarrowTerminal:
    """Lines wider than the container are clipped at the border; so are hit boxes."""

    def test_button_bounds_stop_at_inner_edge(self, state):
        layout = compute_layout(set_dimensions(state, 40, 24))

        assert all(bounds.right <= 38 for _, bounds in layout.buttons)
        assert layout.button_at(39, CONTROL_ROW) is None
        assert layout.bounds_of(Button.LIKE).right == 38

    def test_fully_clipped_button_is_dropped(self, state):
        layout = compute_layout(set_dimensions(state, 36, 24))

        assert layout.bounds_of(Button.LIKE) is None
        assert layout.bounds_of(Button.NEXT).right == 34

    @pytest.mark.parametrize("width", [30, 36, 40])
    def test_clipped_bounds_start_on_rendered_brackets(self, state, palette, width):
        state = set_dimensions(state, width, 24)
        layout = compute_layout(state)
        row = render_lines(state, palette)[CONTROL_ROW]

        for _, bounds in layout.buttons:
            assert cell_text(row, bounds.left, bounds.right).startswith("[")
            assert "│" not in cell_text(row, bounds.left, bounds.right)

    def test_progress_bar_stops_at_inner_edge(self, state):
        progress = compute_layout(set_dimensions(state, 20, 24)).progress

        assert progress.bar_x == 11
        assert progress.seek_fraction(18) == 0.7
        assert progress.seek_fraction(19) is None
