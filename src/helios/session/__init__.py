"""Interactive terminal session."""

from .keys import BACKSPACE, CTRL_C, DOWN, ENTER, ESC, LEFT, RIGHT, UP, KeyReader, decode_key
from .state import TRANSITIONS, Mode, SessionState, SessionStateMachine, transition

__all__ = [
    "BACKSPACE",
    "CTRL_C",
    "DOWN",
    "ENTER",
    "ESC",
    "KeyReader",
    "LEFT",
    "Mode",
    "RIGHT",
    "SessionState",
    "SessionStateMachine",
    "TRANSITIONS",
    "UP",
    "decode_key",
    "transition",
]
