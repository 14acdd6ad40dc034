"""Line store: the ordered sequence of raw lines and their rendered forms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from .render import render_line


@dataclass(slots=True)
class Line:
    """One line of text without its trailing newline.

    ``render`` is recomputed on every write to ``chars`` so readers never
    observe a stale rendered form.
    """

    chars: bytearray = field(default_factory=bytearray)
    render: bytes = b""

    def __post_init__(self) -> None:
        self.chars = bytearray(self.chars)
        self.refresh()

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def refresh(self) -> None:
        self.render = render_line(self.chars)

    def insert(self, column: int, byte: int) -> None:
        if column < 0 or column > len(self.chars):
            column = len(self.chars)
        self.chars.insert(column, byte)
        self.refresh()

    def delete(self, column: int) -> bool:
        if column < 0 or column >= len(self.chars):
            return False
        del self.chars[column]
        self.refresh()
        return True

    def extend(self, content: bytes) -> None:
        self.chars.extend(content)
        self.refresh()

    def truncate(self, column: int) -> bytes:
        """Cut the line at ``column`` and return the removed tail."""

        column = max(0, min(column, len(self.chars)))
        tail = bytes(self.chars[column:])
        del self.chars[column:]
        self.refresh()
        return tail


@dataclass(slots=True)
class BufferDocument:
    """Ordered lines plus the dirty flag and optional file association.

    Every mutating operation bumps ``version`` and sets ``dirty``; only
    :meth:`mark_clean` (called after a successful save) clears it.
    """

    lines: List[Line] = field(default_factory=list)
    filename: Optional[str] = None
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_lines(
        cls, contents: Iterable[bytes], *, filename: Optional[str] = None
    ) -> "BufferDocument":
        return cls(
            lines=[Line(bytearray(content)) for content in contents],
            filename=filename,
        )

    @classmethod
    def from_text(cls, text: str, *, filename: Optional[str] = None) -> "BufferDocument":
        if not text:
            return cls(filename=filename)
        body = text[:-1] if text.endswith("\n") else text
        return cls.from_lines(
            (part.encode("latin-1") for part in body.split("\n")), filename=filename
        )

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def get_line(self, index: int) -> Line:
        return self.lines[index]

    def line_length(self, index: int) -> int:
        if 0 <= index < len(self.lines):
            return self.lines[index].size
        return 0

    def snapshot(self) -> tuple[bytes, ...]:
        """Return the raw line contents without exposing internal buffers."""

        return tuple(bytes(line.chars) for line in self.lines)

    def to_bytes(self) -> bytes:
        """Serialize with a single ``\\n`` after every line, the last included."""

        return b"".join(bytes(line.chars) + b"\n" for line in self.lines)

    def mark_clean(self) -> None:
        self.dirty = False

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True

    # -- line store operations -------------------------------------------------

    def insert_line(self, at: int, content: bytes = b"") -> int:
        if at < 0 or at > len(self.lines):
            at = len(self.lines)
        self.lines.insert(at, Line(bytearray(content)))
        self._touch()
        return at

    def delete_line(self, at: int) -> None:
        if at < 0 or at >= len(self.lines):
            return
        del self.lines[at]
        self._touch()

    def split_line(self, at: int, column: int) -> int:
        """Move everything after ``column`` onto a new line below ``at``.

        Returns the index of the new line. Splitting past the last line
        appends an empty one.
        """

        if at < 0 or at >= len(self.lines):
            return self.insert_line(len(self.lines), b"")
        tail = self.lines[at].truncate(column)
        self.lines.insert(at + 1, Line(bytearray(tail)))
        self._touch()
        return at + 1

    def append_to_line(self, at: int, content: bytes) -> None:
        if at < 0 or at >= len(self.lines):
            return
        self.lines[at].extend(content)
        self._touch()

    def insert_char(self, line_at: int, column: int, byte: int) -> bool:
        if line_at < 0 or line_at >= len(self.lines):
            return False
        self.lines[line_at].insert(column, byte)
        self._touch()
        return True

    def delete_char(self, line_at: int, column: int) -> bool:
        if line_at < 0 or line_at >= len(self.lines):
            return False
        if not self.lines[line_at].delete(column):
            return False
        self._touch()
        return True


__all__ = ["Line", "BufferDocument"]
