"""Main event loop and entry point for blessed UI."""

import queue
import sys
from typing import Optional

from blessed import Terminal
from blessed.keyboard import Keystroke
from loguru import logger

from spotideck.core.config import ColorsConfig

from .events.commands import CommandExecutor
from .events.keys import parse_key
from .events.messages import (
    CommandResult,
    Event,
    KeyPress,
    Quit,
    Resize,
    RunCommand,
    ScheduleStatusClear,
    ScheduleTick,
    StatusClear,
    Tick,
    Work,
)
from .events.mouse import parse_mouse_sequence
from .events.timers import TimerQueue
from .events.update import update
from .helpers.terminal import mouse_reporting, write_at
from .render import render_lines
from .state import UIState, create_initial_state
from .styles.theme import Palette

# Longest wait in inkey() so resizes are noticed promptly
INPUT_TIMEOUT = 0.1

# Give up on an escape sequence after this many characters
MAX_SEQUENCE_LENGTH = 32

# Time allowed between characters of one escape sequence
SEQUENCE_CHAR_TIMEOUT = 0.01


def _read_escape_sequence(term: Terminal) -> Optional[Event]:
    """Finish reading an escape sequence blessed did not recognize.

    Mouse reports (ESC [ < ...) are not in blessed's keymap, so inkey()
    hands back a lone ESC and leaves the rest in its buffer.
    """
    following = term.inkey(timeout=0)
    if str(following) != "[":
        if following:
            term.ungetch(str(following))
        return KeyPress("escape")

    sequence = "\x1b["
    while len(sequence) < MAX_SEQUENCE_LENGTH:
        char = term.inkey(timeout=SEQUENCE_CHAR_TIMEOUT)
        if not char:
            break
        sequence += str(char)
        if str(char) in ("M", "m"):
            break

    event = parse_mouse_sequence(sequence)
    if event is None:
        logger.debug(f"Ignoring unknown escape sequence {sequence!r}")
    return event


def read_input_event(term: Terminal, key: Keystroke) -> Optional[Event]:
    """
    Turn one inkey() result into a KeyPress or PointerEvent.

    Args:
        term: blessed Terminal instance (to read the rest of a sequence)
        key: Keystroke returned by term.inkey()

    Returns:
        Event for the loop, or None for input nothing handles
    """
    text = str(key)
    if text.startswith("\x1b[<"):
        return parse_mouse_sequence(text)
    if text == "\x1b":
        return _read_escape_sequence(term)

    event = parse_key(key)
    if event.type == "unknown":
        return None
    return event


def perform_work(
    work: list[Work], timers: TimerQueue, executor: Optional[CommandExecutor]
) -> bool:
    """
    Carry out work items emitted by update().

    Args:
        work: Work items in emission order
        timers: Timer heap for ticks and status clears
        executor: Remote command executor (None when not connected)

    Returns:
        False if the loop should exit
    """
    for item in work:
        match item:
            case Quit():
                return False
            case ScheduleTick(delay_ms=delay_ms):
                timers.schedule(delay_ms / 1000, Tick())
            case ScheduleStatusClear(generation=generation, delay_s=delay_s):
                timers.schedule(delay_s, StatusClear(generation))
            case RunCommand():
                if executor is None:
                    logger.debug(f"No client, dropping {item.action.value}")
                else:
                    executor.submit(item)
    return True


def draw(term: Terminal, state: UIState, palette: Palette, clear: bool) -> None:
    """Write every screen row; clear first after a resize."""
    if clear:
        sys.stdout.write(term.home + term.clear)
    for y, line in enumerate(render_lines(state, palette)[: state.dimensions.height]):
        write_at(term, 0, y, line)
    sys.stdout.flush()


def main_loop(
    term: Terminal,
    state: UIState,
    palette: Palette,
    events: queue.Queue,
    executor: Optional[CommandExecutor],
) -> UIState:
    """
    Main event loop: one event at a time through update(), then redraw.

    Args:
        term: blessed Terminal instance
        state: Initial UI state
        palette: Color styles
        events: Inbound event queue (executor threads post results here)
        executor: Remote command executor

    Returns:
        Final UI state
    """
    timers = TimerQueue()
    size = (term.width, term.height)
    events.put(Resize(*size))
    events.put(Tick())

    rendered: Optional[UIState] = None

    while True:
        for event in timers.pop_due():
            events.put(event)

        while True:
            try:
                event = events.get_nowait()
            except queue.Empty:
                break
            state, work = update(state, event)
            if not perform_work(work, timers, executor):
                logger.info("Quit requested")
                return state

        if state != rendered:
            resized = rendered is None or rendered.dimensions != state.dimensions
            draw(term, state, palette, clear=resized)
            rendered = state

        timeout = timers.seconds_until_next()
        timeout = INPUT_TIMEOUT if timeout is None else min(timeout, INPUT_TIMEOUT)
        key = term.inkey(timeout=timeout)
        if key:
            event = read_input_event(term, key)
            if event is not None:
                events.put(event)

        current_size = (term.width, term.height)
        if current_size != size:
            size = current_size
            events.put(Resize(*size))


def run_interactive_ui(
    client,
    colors: ColorsConfig,
    version: str,
    status: str = "",
) -> UIState:
    """
    Run the full-screen controller until the user quits.

    Args:
        client: SpotifyClient, or None to run without remote control
        colors: Palette configuration
        version: Version shown in the header
        status: Initial status message (e.g. a device selection note)

    Returns:
        Final UI state
    """
    term = Terminal()
    palette = Palette.from_config(term, colors)
    events: queue.Queue = queue.Queue()
    executor = CommandExecutor(client, events.put) if client is not None else None
    state = create_initial_state(version=version, connected=client is not None)

    if status:
        events.put(CommandResult(status))

    with term.fullscreen(), term.cbreak(), term.hidden_cursor(), mouse_reporting(term):
        try:
            state = main_loop(term, state, palette, events, executor)
        except KeyboardInterrupt:
            logger.info("Ctrl+C detected - exiting")
        finally:
            if executor is not None:
                executor.shutdown()

    return state
