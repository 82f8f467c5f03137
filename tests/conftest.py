"""Shared fixtures for spotideck tests."""

import pytest

from spotideck.domain.playback.models import PlaybackState, SearchTrack
from spotideck.ui.blessed.state import UIState, apply_refresh, create_initial_state
from spotideck.ui.blessed.styles.theme import Palette


@pytest.fixture
def playing() -> PlaybackState:
    """A track 1:00 into a 3:00 song, playing at 50% volume."""
    return PlaybackState(
        track_name="Windowlicker",
        artist_name="Aphex Twin",
        progress_ms=60_000,
        duration_ms=180_000,
        playing=True,
        track_id="track123",
        liked=False,
        volume_percent=50,
    )


@pytest.fixture
def state(playing: PlaybackState) -> UIState:
    """Connected 80x24 controller that has received one refresh."""
    return apply_refresh(create_initial_state(version="1.2.3"), playing)


@pytest.fixture
def palette() -> Palette:
    """Unstyled palette so rendered text can be compared directly."""
    return Palette()


def make_tracks(count: int) -> tuple[SearchTrack, ...]:
    return tuple(
        SearchTrack(id=f"id{i}", name=f"Song {i}", artists=(f"Artist {i}",), uri=f"spotify:track:id{i}")
        for i in range(count)
    )


@pytest.fixture
def tracks() -> tuple[SearchTrack, ...]:
    """Fifteen search results in relevance order."""
    return make_tracks(15)
