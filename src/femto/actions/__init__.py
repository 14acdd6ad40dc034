"""High-level editing verbs bound to keys in the default keymap."""

from .core import delete_backward, delete_forward, insert_newline, noop_action
from .cursor import (
    move_down,
    move_end,
    move_home,
    move_left,
    move_right,
    move_up,
    page_down,
    page_up,
)
from .file import QUIT_TIMES, quit_editor, save, write_document
from .search import find, goto_line

__all__ = [
    "QUIT_TIMES",
    "delete_backward",
    "delete_forward",
    "find",
    "goto_line",
    "insert_newline",
    "move_down",
    "move_end",
    "move_home",
    "move_left",
    "move_right",
    "move_up",
    "noop_action",
    "page_down",
    "page_up",
    "quit_editor",
    "save",
    "write_document",
]
