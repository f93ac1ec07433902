"""Raw terminal input decoding into discrete key events."""

from __future__ import annotations

import os
import select
from typing import Final

ENTER: Final = "ENTER"
BACKSPACE: Final = "BACKSPACE"
UP: Final = "UP"
DOWN: Final = "DOWN"
LEFT: Final = "LEFT"
RIGHT: Final = "RIGHT"
ESC: Final = "ESC"
CTRL_C: Final = "CTRL_C"

_ESCAPE_SEQUENCE_TIMEOUT = 0.02
_MAX_ESCAPE_SEQUENCE = 12
_ARROWS = {"A": UP, "B": DOWN, "C": RIGHT, "D": LEFT}


def decode_key(raw: str) -> str:
    """Map a raw key sequence to a named key or a single character."""
    if raw in ("\r", "\n"):
        return ENTER
    if raw in ("\x7f", "\b"):
        return BACKSPACE
    if raw == "\x03":
        return CTRL_C
    if raw.startswith("\x1b[") or raw.startswith("\x1bO"):
        return _ARROWS.get(raw[-1], ESC)
    if raw.startswith("\x1b"):
        return ESC
    return raw


class KeyReader:
    """Polls a raw-mode file descriptor for at most one key per call."""

    def __init__(self, fd: int) -> None:
        self._fd = fd

    def poll(self, timeout: float) -> str | None:
        """Return the next decoded key, or None when nothing arrived in time."""
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return None
        first = self._read_char()
        if first is None:
            return None
        if first != "\x1b":
            return decode_key(first)
        sequence = first
        while len(sequence) < _MAX_ESCAPE_SEQUENCE:
            ready, _, _ = select.select([self._fd], [], [], _ESCAPE_SEQUENCE_TIMEOUT)
            if not ready:
                break
            nxt = self._read_char()
            if nxt is None:
                break
            sequence += nxt
            if nxt.isalpha() or nxt == "~":
                break
        return decode_key(sequence)

    def _read_char(self) -> str | None:
        data = os.read(self._fd, 1)
        if not data:
            return None
        needed = _utf8_length(data[0])
        while len(data) < needed:
            more = os.read(self._fd, 1)
            if not more:
                break
            data += more
        return data.decode("utf-8", errors="replace")


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1
