"""Clamping helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor


def clamp_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    """Pull ``cursor`` back inside the document.

    Rows range over ``[0, line_count]``; columns over ``[0, len(line)]``
    where the virtual row past the end has length 0.
    """

    row, col = cursor
    row = max(0, min(row, document.line_count))
    col = max(0, min(col, document.line_length(row)))
    return (row, col)
