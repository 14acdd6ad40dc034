"""Line store, rendering, viewport and the editing-session façade."""

from .buffer import Buffer, Transaction
from .document import BufferDocument, Line
from .fileio import FileIOError, load_file, save_file, split_lines
from .render import (
    TAB_STOP,
    buffer_to_rendered_column,
    render_line,
    rendered_to_buffer_column,
)
from .state import BufferState, Cursor
from .sync import BufferMirror, BufferSync
from .validation import clamp_cursor
from .viewport import Viewport, gutter_width

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "BufferSync",
    "Cursor",
    "FileIOError",
    "Line",
    "TAB_STOP",
    "Transaction",
    "Viewport",
    "buffer_to_rendered_column",
    "clamp_cursor",
    "gutter_width",
    "load_file",
    "render_line",
    "rendered_to_buffer_column",
    "save_file",
    "split_lines",
]
