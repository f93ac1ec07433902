from __future__ import annotations

import pytest

from helios.index import InvertedIndex, QueryEngine
from helios.session import (
    BACKSPACE,
    CTRL_C,
    DOWN,
    ENTER,
    ESC,
    UP,
    Mode,
    SessionState,
    SessionStateMachine,
    transition,
)


@pytest.fixture()
def engine() -> QueryEngine:
    return QueryEngine(InvertedIndex({"hello": ("a.txt", "b.txt", "c.txt")}))


def _type(machine: SessionStateMachine, text: str) -> None:
    for char in text:
        machine.handle(char)


def test_initial_state_is_insert_with_empty_buffer(engine: QueryEngine) -> None:
    machine = SessionStateMachine(engine)

    assert machine.state == SessionState(mode=Mode.INSERT)
    assert machine.terminated is False


def test_typing_and_backspace_edit_the_buffer(engine: QueryEngine) -> None:
    machine = SessionStateMachine(engine)

    _type(machine, "hej k")
    machine.handle(BACKSPACE)
    machine.handle(BACKSPACE)

    assert machine.state.query_buffer == "hej"
    assert machine.state.mode is Mode.INSERT


def test_backspace_on_empty_buffer_is_noop(engine: QueryEngine) -> None:
    state = SessionState()

    assert transition(state, BACKSPACE, engine) == state


def test_enter_runs_lookup_and_resets_scroll(engine: QueryEngine) -> None:
    state = SessionState(query_buffer="Hello", results=("old", "rows", "here"), scroll=2)

    after = transition(state, ENTER, engine)

    assert after.results == (
        "'hello' found in a.txt",
        "'hello' found in b.txt",
        "'hello' found in c.txt",
    )
    assert after.scroll == 0
    assert after.query_buffer == "Hello"
    assert after.mode is Mode.INSERT


def test_enter_on_missing_word_shows_sentinel(engine: QueryEngine) -> None:
    after = transition(SessionState(query_buffer="nope"), ENTER, engine)

    assert after.results == ("'nope' not found in any file",)


def test_enter_with_empty_buffer_is_noop(engine: QueryEngine) -> None:
    state = SessionState(results=("kept",))

    assert transition(state, ENTER, engine) == state


@pytest.mark.parametrize("buffer", ["", "x", "some query"])
def test_colon_enters_command_and_clears_buffer(engine: QueryEngine, buffer: str) -> None:
    after = transition(SessionState(query_buffer=buffer), ":", engine)

    assert after.mode is Mode.COMMAND
    assert after.query_buffer == ""


def test_command_mode_ignores_text_input(engine: QueryEngine) -> None:
    state = SessionState(mode=Mode.COMMAND)

    for key in ("x", ":", ENTER, BACKSPACE, ESC, CTRL_C, " "):
        assert transition(state, key, engine) == state


def test_insert_from_command_clears_buffer(engine: QueryEngine) -> None:
    machine = SessionStateMachine(engine)
    _type(machine, ":i")
    _type(machine, "abc")
    machine.handle(":")
    machine.handle("i")

    assert machine.state.mode is Mode.INSERT
    assert machine.state.query_buffer == ""


def test_results_survive_mode_changes(engine: QueryEngine) -> None:
    machine = SessionStateMachine(engine)
    _type(machine, "hello")
    machine.handle(ENTER)
    _type(machine, ":s")

    assert machine.state.mode is Mode.SAFE
    assert len(machine.state.results) == 3


def test_safe_mode_transitions(engine: QueryEngine) -> None:
    safe = SessionState(mode=Mode.SAFE, query_buffer="kept")

    assert transition(safe, "c", engine) == SessionState(mode=Mode.COMMAND, query_buffer="kept")
    assert transition(safe, "i", engine) == SessionState(mode=Mode.INSERT, query_buffer="")
    assert transition(safe, "q", engine).terminated is True
    for key in ("s", "x", ":", ENTER, BACKSPACE):
        assert transition(safe, key, engine) == safe


@pytest.mark.parametrize("path", [":q", ":sq"])
def test_quit_from_command_or_safe_terminates(engine: QueryEngine, path: str) -> None:
    machine = SessionStateMachine(engine)

    _type(machine, path)

    assert machine.terminated is True


def test_q_in_insert_mode_is_text(engine: QueryEngine) -> None:
    machine = SessionStateMachine(engine)

    machine.handle("q")

    assert machine.terminated is False
    assert machine.state.query_buffer == "q"


def test_events_after_termination_are_ignored(engine: QueryEngine) -> None:
    machine = SessionStateMachine(engine)
    _type(machine, ":q")
    final = machine.state

    for key in ("i", "x", DOWN, UP, ENTER):
        machine.handle(key)

    assert machine.state == final


def test_non_printable_single_characters_are_ignored_in_insert(engine: QueryEngine) -> None:
    state = SessionState(query_buffer="ab")

    for key in ("\t", "\x00", "\x1b"):
        assert transition(state, key, engine) == state


def test_unicode_characters_are_appended(engine: QueryEngine) -> None:
    after = transition(SessionState(query_buffer="caf"), "é", engine)

    assert after.query_buffer == "café"
