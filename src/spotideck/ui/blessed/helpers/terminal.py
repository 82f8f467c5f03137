"""Terminal output utilities that prevent rendering artifacts."""

import sys
from contextlib import contextmanager
from typing import Iterator

from blessed import Terminal

# xterm button-event tracking with SGR extended coordinates
MOUSE_ON = "\x1b[?1000h\x1b[?1006h"
MOUSE_OFF = "\x1b[?1006l\x1b[?1000l"


def write_at(
    term: Terminal, x: int, y: int, content: str, *, clear: bool = True
) -> None:
    """Write content at position, clearing the rest of the line by default.

    Args:
        term: Blessed terminal instance
        x: Column position (0-indexed)
        y: Row position (0-indexed)
        content: Text to write (can include terminal formatting)
        clear: Whether to clear to end of line (default True)
    """
    if clear:
        sys.stdout.write(term.move_xy(x, y) + term.clear_eol + content)
    else:
        sys.stdout.write(term.move_xy(x, y) + content)


@contextmanager
def mouse_reporting(term: Terminal) -> Iterator[None]:
    """Enable mouse press/release/wheel reports for the duration of the block."""
    if not term.is_a_tty:
        yield
        return

    sys.stdout.write(MOUSE_ON)
    sys.stdout.flush()
    try:
        yield
    finally:
        sys.stdout.write(MOUSE_OFF)
        sys.stdout.flush()
