"""Raw ANSI terminal host for the editor."""

from .controller import TerminalEditorAdapter
from .screen import RESERVED_ROWS, STATUS_MESSAGE_TIMEOUT, Screen, StatusMessage
from .terminal import RawTerminal, TerminalError, TerminalIO

__all__ = [
    "RESERVED_ROWS",
    "RawTerminal",
    "STATUS_MESSAGE_TIMEOUT",
    "Screen",
    "StatusMessage",
    "TerminalEditorAdapter",
    "TerminalError",
    "TerminalIO",
]
