"""Incremental substring search over rendered lines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from femto.buffer import BufferDocument


class SearchDirection(Enum):
    FORWARD = 1
    BACKWARD = -1


@dataclass(slots=True)
class SearchState:
    """Last matching row and scan direction for one search session."""

    last_match: Optional[int] = None
    direction: SearchDirection = SearchDirection.FORWARD

    def reset(self) -> None:
        self.last_match = None
        self.direction = SearchDirection.FORWARD

    def forget_match(self) -> None:
        self.last_match = None


@dataclass(frozen=True, slots=True)
class SearchMatch:
    row: int
    rendered_col: int


def find_next(
    document: BufferDocument, query: bytes, state: SearchState
) -> Optional[SearchMatch]:
    """Scan cyclically from just after ``state.last_match``.

    At most ``line_count`` lines are visited. A hit updates
    ``state.last_match``; a miss leaves the state untouched.
    """

    count = document.line_count
    if not query or count == 0:
        return None

    if state.last_match is None:
        state.direction = SearchDirection.FORWARD
        current = -1
    else:
        current = state.last_match

    step = state.direction.value
    for _ in range(count):
        current += step
        if current < 0:
            current = count - 1
        elif current >= count:
            current = 0

        offset = document.get_line(current).render.find(query)
        if offset != -1:
            state.last_match = current
            return SearchMatch(row=current, rendered_col=offset)
    return None


__all__ = ["SearchDirection", "SearchMatch", "SearchState", "find_next"]
