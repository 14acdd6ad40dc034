"""High-level buffer façade combining document, cursor, and viewport."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional

from femto.runtime import telemetry

from .document import BufferDocument
from .render import buffer_to_rendered_column, rendered_to_buffer_column
from .state import BufferState, Cursor
from .sync import BufferMirror
from .validation import clamp_cursor
from .viewport import Viewport, gutter_width


class Buffer:
    """The editing session: owns the document, cursor and viewport.

    Every movement and edit leaves the cursor clamped inside the document.
    Scrolling is applied by :meth:`scroll`, which hosts call once per frame.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        viewport: Optional[Viewport] = None,
        line_numbers: bool = False,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.viewport = viewport or Viewport()
        self.line_numbers = line_numbers

    @classmethod
    def from_lines(
        cls, lines: Iterable[bytes], *, filename: Optional[str] = None, **kwargs
    ) -> "Buffer":
        return cls(document=BufferDocument.from_lines(lines, filename=filename), **kwargs)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "Buffer":
        return cls(document=BufferDocument.from_text(text), **kwargs)

    # -- derived positions -------------------------------------------------

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    @property
    def rendered_col(self) -> int:
        row, col = self.state.cursor
        if row >= self.document.line_count:
            return 0
        return buffer_to_rendered_column(self.document.get_line(row).chars, col)

    def _current_length(self) -> int:
        return self.document.line_length(self.state.row)

    def _clamp(self) -> None:
        self.state.set_cursor(*clamp_cursor(self.document, self.state.cursor))

    def move_to(self, row: int, col: int) -> None:
        self.state.set_cursor(row, col)
        self._clamp()

    def jump_to_rendered(self, row: int, rendered_col: int) -> None:
        """Place the cursor on the character covering ``rendered_col``."""

        row = max(0, min(row, self.document.line_count))
        col = 0
        if row < self.document.line_count:
            col = rendered_to_buffer_column(
                self.document.get_line(row).chars, rendered_col
            )
        self.move_to(row, col)

    # -- movement ----------------------------------------------------------

    def move_left(self) -> bool:
        row, col = self.state.cursor
        if col > 0:
            self.state.set_cursor(row, col - 1)
        elif row > 0:
            self.state.set_cursor(row - 1, self.document.line_length(row - 1))
        else:
            return False
        self._clamp()
        return True

    def move_right(self) -> bool:
        row, col = self.state.cursor
        if col < self._current_length():
            self.state.set_cursor(row, col + 1)
        elif row < self.document.line_count - 1:
            self.state.set_cursor(row + 1, 0)
        else:
            return False
        self._clamp()
        return True

    def move_up(self) -> bool:
        row, col = self.state.cursor
        if row <= 0:
            return False
        self.state.set_cursor(row - 1, col)
        self._clamp()
        return True

    def move_down(self) -> bool:
        row, col = self.state.cursor
        if row >= self.document.line_count:
            return False
        self.state.set_cursor(row + 1, col)
        self._clamp()
        return True

    def move_home(self) -> None:
        self.state.set_cursor(self.state.row, 0)

    def move_end(self) -> None:
        self.state.set_cursor(self.state.row, self._current_length())

    def page_up(self) -> None:
        self.state.set_cursor(self.viewport.row_offset, self.state.col)
        self._clamp()
        for _ in range(self.viewport.rows):
            self.move_up()

    def page_down(self) -> None:
        target = self.viewport.row_offset + self.viewport.rows - 1
        self.state.set_cursor(min(target, self.document.line_count), self.state.col)
        self._clamp()
        for _ in range(self.viewport.rows):
            self.move_down()

    # -- edits ---------------------------------------------------------------

    def _edit(self, label: str) -> ContextManager["Transaction"]:
        return Transaction(self, label)

    def insert_char(self, byte: int) -> None:
        with self._edit("insert_char"):
            row, col = self.state.cursor
            if row == self.document.line_count:
                self.document.insert_line(row, b"")
            self.document.insert_char(row, col, byte)
            self.state.set_cursor(row, col + 1)
            self._clamp()

    def insert_newline(self) -> None:
        with self._edit("insert_newline"):
            row, col = self.state.cursor
            if self.document.line_count == 0:
                self.document.insert_line(0, b"")
                self.state.set_cursor(0, 0)
                return
            new_row = self.document.split_line(row, col)
            self.state.set_cursor(new_row + 1 if row >= new_row else new_row, 0)
            self._clamp()

    def delete_backward(self) -> bool:
        row, col = self.state.cursor
        if row >= self.document.line_count:
            return False
        if row == 0 and col == 0:
            return False
        with self._edit("delete_backward"):
            if col > 0:
                self.document.delete_char(row, col - 1)
                self.state.set_cursor(row, col - 1)
            else:
                previous_len = self.document.line_length(row - 1)
                content = bytes(self.document.get_line(row).chars)
                self.document.append_to_line(row - 1, content)
                self.document.delete_line(row)
                self.state.set_cursor(row - 1, previous_len)
            self._clamp()
        return True

    def delete_forward(self) -> bool:
        if not self.move_right():
            return False
        return self.delete_backward()

    # -- viewport ------------------------------------------------------------

    def scroll(self) -> None:
        """Bring the cursor into view; call once before every draw."""

        self._clamp()
        self.viewport.margin = gutter_width(
            self.document.line_count, self.line_numbers
        )
        self.viewport.scroll_to_show(self.state.row, self.rendered_col)

    def mirror(self) -> BufferMirror:
        viewport = self.viewport
        rows: list[Optional[bytes]] = []
        numbers: list[Optional[int]] = []
        for screen_row in range(viewport.rows):
            file_row = screen_row + viewport.row_offset
            if file_row >= self.document.line_count:
                rows.append(None)
                numbers.append(None)
                continue
            render = self.document.get_line(file_row).render
            rows.append(render[viewport.col_offset : viewport.col_offset + viewport.text_cols])
            numbers.append(file_row + 1)
        return BufferMirror(
            rows=tuple(rows),
            line_numbers=tuple(numbers),
            cursor=self.state.cursor,
            screen_cursor=viewport.screen_position(self.state.row, self.rendered_col),
            line_count=self.document.line_count,
            dirty=self.document.dirty,
            filename=self.document.filename,
            margin=viewport.margin,
            text_cols=viewport.text_cols,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one edit in a telemetry span tagged with the buffer name."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name, "cursor": self.buffer.cursor},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]
