"""Cbreak-mode terminal loop driving the session state machine."""

from __future__ import annotations

import sys
import termios
import tty
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from rich.console import Console
from rich.live import Live

from helios.index.query import QueryEngine
from helios.logging import get_logger
from helios.session.keys import KeyReader
from helios.session.render import render
from helios.session.state import SessionState, SessionStateMachine

logger = get_logger(__name__)


@contextmanager
def cbreak_terminal(stream: TextIO) -> Iterator[int]:
    """Disable line buffering, echo and signal keys, restoring them on exit.

    Output post-processing stays on so rich can keep drawing with plain
    newlines. With ISIG cleared, Ctrl-C arrives as an ordinary key.
    """
    fd = stream.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        mode = termios.tcgetattr(fd)
        mode[tty.LFLAG] &= ~termios.ISIG
        termios.tcsetattr(fd, termios.TCSANOW, mode)
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def run_session(
    machine: SessionStateMachine,
    reader: KeyReader,
    live: Live,
    poll_interval: float,
) -> SessionState:
    """Render, poll for one key, apply it; repeat until the session terminates."""
    while not machine.terminated:
        live.update(render(machine.state), refresh=True)
        key = reader.poll(poll_interval)
        if key is None:
            continue
        machine.handle(key)
    return machine.state


def run_tui(
    engine: QueryEngine,
    poll_interval: float = 0.25,
    stdin: TextIO | None = None,
    console: Console | None = None,
) -> SessionState:
    """Run the interactive search interface on the current terminal."""
    in_stream = stdin or sys.stdin
    machine = SessionStateMachine(engine)
    out = console or Console()
    with cbreak_terminal(in_stream) as fd:
        with Live(
            render(machine.state),
            console=out,
            screen=True,
            auto_refresh=False,
            transient=True,
        ) as live:
            final = run_session(machine, KeyReader(fd), live, poll_interval)
    logger.debug("session_ended", results=len(final.results))
    return final
