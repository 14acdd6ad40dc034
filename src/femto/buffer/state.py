"""Cursor state tracked by the editing session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, buffer column)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor position in buffer space.

    ``row`` may equal the document's line count: the cursor then sits past
    the last line and the next insertion appends a line. The rendered column
    is never stored here; it is derived from the line on demand.
    """

    row: int = 0
    col: int = 0

    @property
    def cursor(self) -> Cursor:
        return (self.row, self.col)

    def set_cursor(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
