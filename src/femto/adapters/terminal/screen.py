"""Composes one ANSI frame from a buffer snapshot and the status message."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from femto import __version__
from femto.buffer import BufferMirror

STATUS_MESSAGE_TIMEOUT = 5.0
RESERVED_ROWS = 2

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
ERASE_LINE = b"\x1b[K"
INVERT = b"\x1b[7m"
RESET = b"\x1b[m"
NEWLINE = b"\r\n"


@dataclass
class StatusMessage:
    """Most recent user notification and when it was set."""

    text: str = ""
    set_at: float = 0.0

    def visible(self, now: float, timeout: float = STATUS_MESSAGE_TIMEOUT) -> bool:
        return bool(self.text) and now - self.set_at < timeout


class Screen:
    """Builds frames of ``rows`` x ``cols`` cells, bars included."""

    def __init__(
        self,
        rows: int = 24,
        cols: int = 80,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.clock = clock
        self.message = StatusMessage()

    @property
    def text_rows(self) -> int:
        return max(1, self.rows - RESERVED_ROWS)

    def resize(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols

    def set_message(self, text: str) -> None:
        self.message = StatusMessage(text=text, set_at=self.clock())

    def compose(self, mirror: BufferMirror) -> bytes:
        out = bytearray()
        out += HIDE_CURSOR + CURSOR_HOME
        self._draw_rows(out, mirror)
        self._draw_status_bar(out, mirror)
        self._draw_message_bar(out)
        y, x = mirror.screen_cursor
        out += b"\x1b[%d;%dH" % (y + 1, x + 1)
        out += SHOW_CURSOR
        return bytes(out)

    def _draw_rows(self, out: bytearray, mirror: BufferMirror) -> None:
        for y, (row, number) in enumerate(zip(mirror.rows, mirror.line_numbers)):
            if row is None:
                if mirror.line_count == 0 and y == len(mirror.rows) // 3:
                    out += self._welcome()
                else:
                    out += b"~"
            else:
                if mirror.margin and number is not None:
                    out += str(number).rjust(mirror.margin - 1).encode("ascii") + b" "
                out += row
            out += ERASE_LINE + NEWLINE

    def _welcome(self) -> bytes:
        banner = f"Femto editor -- version {__version__}".encode("ascii")[: self.cols]
        padding = (self.cols - len(banner)) // 2
        line = bytearray()
        if padding:
            line += b"~"
            padding -= 1
        line += b" " * padding
        line += banner
        return bytes(line)

    def _draw_status_bar(self, out: bytearray, mirror: BufferMirror) -> None:
        name = (mirror.filename or "[No Name]")[:20]
        modified = "(modified)" if mirror.dirty else ""
        left = f"{name} - {mirror.line_count} lines {modified}".encode("utf-8", "replace")
        right = f"{mirror.cursor[0] + 1}/{mirror.line_count}".encode("ascii")

        left = left[: self.cols]
        out += INVERT + left
        length = len(left)
        while length < self.cols:
            if self.cols - length == len(right):
                out += right
                break
            out += b" "
            length += 1
        out += RESET + NEWLINE

    def _draw_message_bar(self, out: bytearray) -> None:
        out += ERASE_LINE
        if self.message.visible(self.clock()):
            out += self.message.text.encode("utf-8", "replace")[: self.cols]


__all__ = ["RESERVED_ROWS", "STATUS_MESSAGE_TIMEOUT", "Screen", "StatusMessage"]
