"""Playback data models and Web API response parsing."""

from dataclasses import dataclass, replace
from typing import Any, Optional

# Device types the controller is willing to drive
CONTROLLABLE_DEVICE_TYPES = frozenset({"computer", "smartphone", "speaker"})


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class PlaybackState:
    """Snapshot of remote playback.

    Empty strings mean "no track". progress_ms never exceeds duration_ms and
    volume_percent stays within 0-100; both are enforced on every construction,
    including dataclasses.replace().
    """

    track_name: str = ""
    artist_name: str = ""
    progress_ms: int = 0
    duration_ms: int = 0
    playing: bool = False
    track_id: str = ""
    liked: bool = False
    volume_percent: int = 0

    def __post_init__(self) -> None:
        duration = max(0, int(self.duration_ms))
        object.__setattr__(self, "duration_ms", duration)
        object.__setattr__(self, "progress_ms", clamp(int(self.progress_ms), 0, duration))
        object.__setattr__(self, "volume_percent", clamp(int(self.volume_percent), 0, 100))

    @property
    def has_track(self) -> bool:
        return bool(self.track_name)

    def with_progress(self, progress_ms: int) -> "PlaybackState":
        """Return a copy with progress moved (clamped to the track length)."""
        return replace(self, progress_ms=progress_ms)


@dataclass(frozen=True)
class SearchTrack:
    """A track returned by search, in relevance order."""

    id: str
    name: str
    artists: tuple[str, ...]
    uri: str

    @property
    def primary_artist(self) -> str:
        return self.artists[0] if self.artists else ""


@dataclass(frozen=True)
class Device:
    """A Spotify Connect device."""

    id: str
    name: str
    type: str
    active: bool = False
    restricted: bool = False
    volume_percent: Optional[int] = None

    @property
    def controllable(self) -> bool:
        return not self.restricted and self.type.lower() in CONTROLLABLE_DEVICE_TYPES


def playback_from_api(
    data: Optional[dict[str, Any]], liked: bool = False
) -> Optional[PlaybackState]:
    """Convert a /me/player response into a PlaybackState.

    Returns None when there is no active session or no current item
    (podcast episodes without an item, private sessions, etc.).
    """
    if not data or not data.get("item"):
        return None

    item = data["item"]
    artists = item.get("artists") or []
    device = data.get("device") or {}

    return PlaybackState(
        track_name=item.get("name", ""),
        artist_name=artists[0].get("name", "") if artists else "",
        progress_ms=data.get("progress_ms") or 0,
        duration_ms=item.get("duration_ms") or 0,
        playing=bool(data.get("is_playing")),
        track_id=item.get("id") or "",
        liked=liked,
        volume_percent=device.get("volume_percent") or 0,
    )


def track_from_api(item: dict[str, Any]) -> SearchTrack:
    """Convert a search result item into a SearchTrack."""
    return SearchTrack(
        id=item.get("id") or "",
        name=item.get("name", "").strip(),
        artists=tuple(
            a["name"] for a in item.get("artists", []) if a.get("name") is not None
        ),
        uri=item.get("uri") or f"spotify:track:{item.get('id', '')}",
    )


def device_from_api(data: dict[str, Any]) -> Device:
    """Convert a /me/player/devices entry into a Device."""
    return Device(
        id=data.get("id") or "",
        name=data.get("name", ""),
        type=data.get("type", ""),
        active=bool(data.get("is_active")),
        restricted=bool(data.get("is_restricted")),
        volume_percent=data.get("volume_percent"),
    )
