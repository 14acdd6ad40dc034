"""Draw-pass snapshot handed from the editing session to the screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .state import Cursor


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Everything the screen composer needs for one frame.

    ``rows`` holds one entry per visible screen row: the rendered slice that
    is on screen, or ``None`` when the row lies past the end of the document.
    ``line_numbers`` is parallel to ``rows``.
    """

    rows: tuple[Optional[bytes], ...]
    line_numbers: tuple[Optional[int], ...]
    cursor: Cursor
    screen_cursor: tuple[int, int]
    line_count: int
    dirty: bool
    filename: Optional[str]
    margin: int
    text_cols: int


class BufferSync(Protocol):
    """How hosts pull frames from the editing session."""

    def mirror(self) -> BufferMirror:
        """Return the latest snapshot the host should render."""
        ...
