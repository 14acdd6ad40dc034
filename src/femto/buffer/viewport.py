"""Scroll model mapping buffer rows and rendered columns onto screen cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


def gutter_width(line_count: int, enabled: bool = True) -> int:
    """Columns reserved for line numbers: the digits plus one space."""

    if not enabled:
        return 0
    return len(str(max(1, line_count))) + 1


@dataclass(slots=True)
class Viewport:
    """Visible window onto the document.

    ``rows``/``cols`` are the text area in screen cells, including any gutter
    reserved through ``margin``.
    """

    rows: int = 24
    cols: int = 80
    row_offset: int = 0
    col_offset: int = 0
    margin: int = 0

    @property
    def text_cols(self) -> int:
        return max(1, self.cols - self.margin)

    def resize(self, rows: int, cols: int) -> None:
        self.rows = max(1, rows)
        self.cols = max(1, cols)

    def scroll_to_show(self, row: int, rendered_col: int) -> None:
        """Adjust offsets so the cursor cell is on screen."""

        if row < self.row_offset:
            self.row_offset = row
        if row >= self.row_offset + self.rows:
            self.row_offset = row - self.rows + 1
        if rendered_col < self.col_offset:
            self.col_offset = rendered_col
        if rendered_col >= self.col_offset + self.text_cols:
            self.col_offset = rendered_col - self.text_cols + 1

    def screen_position(self, row: int, rendered_col: int) -> Tuple[int, int]:
        """Zero-based (screen row, screen column) for a buffer location."""

        return (
            row - self.row_offset,
            rendered_col - self.col_offset + self.margin,
        )

    def offsets(self) -> Tuple[int, int]:
        return (self.row_offset, self.col_offset)

    def restore(self, offsets: Tuple[int, int]) -> None:
        self.row_offset, self.col_offset = offsets


__all__ = ["Viewport", "gutter_width"]
