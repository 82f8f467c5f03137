"""One-shot timers for the event loop.

Ticks and status clears are scheduled here by the loop and come back as
events once due. The loop sleeps in term.inkey() for at most
seconds_until_next(), so timers fire on time without a helper thread.
"""

import heapq
import itertools
import time
from typing import Optional

from .messages import Event


class TimerQueue:
    """Min-heap of (due time, sequence, event)."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._heap: list[tuple[float, int, Event]] = []
        self._sequence = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, delay_s: float, event: Event) -> None:
        due = self._clock() + max(0.0, delay_s)
        heapq.heappush(self._heap, (due, next(self._sequence), event))

    def pop_due(self) -> list[Event]:
        """Remove and return every event that is due, earliest first."""
        now = self._clock()
        due: list[Event] = []
        while self._heap and self._heap[0][0] <= now:
            due.append(heapq.heappop(self._heap)[2])
        return due

    def seconds_until_next(self) -> Optional[float]:
        """Time until the earliest timer, or None when nothing is scheduled."""
        if not self._heap:
            return None
        return max(0.0, self._heap[0][0] - self._clock())
