"""Inbound events and outbound work items for the update loop.

Everything that can change UIState arrives as one of the event dataclasses
below, in arrival order. Everything the update step wants done outside of
itself (remote calls, timers, quitting) leaves as a work item.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from spotideck.domain.playback.models import PlaybackState, SearchTrack

# ============================================================================
# EVENTS
# ============================================================================


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class KeyPress:
    """A parsed key press.

    type is "char" for printable input (the character is in char), otherwise a
    key name such as "enter", "escape", "backspace", "arrow_up" or "ctrl_c".
    """

    type: str
    char: Optional[str] = None


class MouseButton(str, Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"
    NONE = "none"


class MouseAction(str, Enum):
    PRESS = "press"
    RELEASE = "release"
    MOTION = "motion"


@dataclass(frozen=True)
class PointerEvent:
    """Mouse report with 0-based cell coordinates."""

    x: int
    y: int
    button: MouseButton = MouseButton.LEFT
    action: MouseAction = MouseAction.RELEASE


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class RefreshResult:
    """Result of a state poll; None means no active session or a failed poll."""

    playback: Optional[PlaybackState]


@dataclass(frozen=True)
class CommandResult:
    """Status text from a finished command; error results get error styling."""

    message: str
    error: bool = False


@dataclass(frozen=True)
class StatusClear:
    generation: int


@dataclass(frozen=True)
class SearchResults:
    tracks: tuple[SearchTrack, ...]


Event = Union[
    Resize,
    KeyPress,
    PointerEvent,
    Tick,
    RefreshResult,
    CommandResult,
    StatusClear,
    SearchResults,
]

# ============================================================================
# WORK ITEMS
# ============================================================================


class Action(str, Enum):
    """Remote operations the executor knows how to run."""

    REFRESH = "refresh"
    RESUME = "resume"
    PAUSE = "pause"
    NEXT = "next"
    PREVIOUS = "previous"
    LIKE = "like"
    UNLIKE = "unlike"
    SET_VOLUME = "set_volume"
    SEEK = "seek"
    SEARCH = "search"
    PLAY_URI = "play_uri"


@dataclass(frozen=True)
class RunCommand:
    """Run one remote operation; produces exactly one result event."""

    action: Action
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ScheduleTick:
    delay_ms: int


@dataclass(frozen=True)
class ScheduleStatusClear:
    generation: int
    delay_s: float = 5.0


@dataclass(frozen=True)
class Quit:
    pass


Work = Union[RunCommand, ScheduleTick, ScheduleStatusClear, Quit]
