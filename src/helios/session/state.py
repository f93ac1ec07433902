"""Interactive session state and its key-driven transition table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from helios.index.query import QueryEngine
from helios.session.keys import BACKSPACE, DOWN, ENTER, UP


class Mode(Enum):
    """Input mode of the interactive session."""

    INSERT = "insert"
    COMMAND = "command"
    SAFE = "safe"


@dataclass(slots=True, frozen=True)
class SessionState:
    """Snapshot of everything the terminal front end renders."""

    mode: Mode = Mode.INSERT
    query_buffer: str = ""
    results: tuple[str, ...] = ()
    scroll: int = 0
    terminated: bool = False

    @property
    def max_scroll(self) -> int:
        """Return the last valid scroll offset."""
        return max(0, len(self.results) - 1)


Handler = Callable[[SessionState, str, QueryEngine], SessionState]


def _enter_command(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    return replace(state, mode=Mode.COMMAND, query_buffer="")


def _enter_insert(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    return replace(state, mode=Mode.INSERT, query_buffer="")


def _enter_safe(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    return replace(state, mode=Mode.SAFE)


def _return_to_command(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    return replace(state, mode=Mode.COMMAND)


def _terminate(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    return replace(state, terminated=True)


def _append_char(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    return replace(state, query_buffer=state.query_buffer + key)


def _delete_char(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    if not state.query_buffer:
        return state
    return replace(state, query_buffer=state.query_buffer[:-1])


def _submit(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    if not state.query_buffer:
        return state
    return replace(state, results=tuple(engine.lookup(state.query_buffer)), scroll=0)


def _scroll_down(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    return replace(state, scroll=min(state.scroll + 1, state.max_scroll))


def _scroll_up(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    return replace(state, scroll=max(state.scroll - 1, 0))


TRANSITIONS: dict[tuple[Mode, str], Handler] = {
    (Mode.INSERT, ":"): _enter_command,
    (Mode.INSERT, BACKSPACE): _delete_char,
    (Mode.INSERT, ENTER): _submit,
    (Mode.INSERT, DOWN): _scroll_down,
    (Mode.INSERT, UP): _scroll_up,
    (Mode.COMMAND, "q"): _terminate,
    (Mode.COMMAND, "i"): _enter_insert,
    (Mode.COMMAND, "s"): _enter_safe,
    (Mode.COMMAND, "j"): _scroll_down,
    (Mode.COMMAND, DOWN): _scroll_down,
    (Mode.COMMAND, "k"): _scroll_up,
    (Mode.COMMAND, UP): _scroll_up,
    (Mode.SAFE, "i"): _enter_insert,
    (Mode.SAFE, "c"): _return_to_command,
    (Mode.SAFE, "q"): _terminate,
    (Mode.SAFE, "j"): _scroll_down,
    (Mode.SAFE, DOWN): _scroll_down,
    (Mode.SAFE, "k"): _scroll_up,
    (Mode.SAFE, UP): _scroll_up,
}


def transition(state: SessionState, key: str, engine: QueryEngine) -> SessionState:
    """Apply one key event and return the next state.

    Keys are single characters or the named keys from ``helios.session.keys``.
    Pairs missing from the table leave the state unchanged, except printable
    characters in Insert mode, which extend the query buffer.
    """
    if state.terminated:
        return state
    handler = TRANSITIONS.get((state.mode, key))
    if handler is None and state.mode is Mode.INSERT and _is_printable_char(key):
        handler = _append_char
    if handler is None:
        return state
    return handler(state, key, engine)


def _is_printable_char(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class SessionStateMachine:
    """Owns the current session state and applies key events in order."""

    def __init__(self, engine: QueryEngine, state: SessionState | None = None) -> None:
        self._engine = engine
        self._state = state or SessionState()

    @property
    def state(self) -> SessionState:
        """Return the current state snapshot."""
        return self._state

    @property
    def terminated(self) -> bool:
        """Return True once a quit key has been accepted."""
        return self._state.terminated

    def handle(self, key: str) -> SessionState:
        """Apply one key event and return the resulting state."""
        self._state = transition(self._state, key, self._engine)
        return self._state
