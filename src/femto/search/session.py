"""Search prompt observer driving the engine as the query is typed."""

from __future__ import annotations

from typing import Tuple

from femto.runtime import telemetry

from femto.buffer import Buffer, Cursor
from femto.input import Arrow, Direction, Enter, Escape, KeyEvent

from .engine import SearchDirection, SearchState, find_next


class SearchSession:
    """One find invocation: remembers where it started and the last hit."""

    def __init__(self, buffer: Buffer) -> None:
        self.buffer = buffer
        self.state = SearchState()
        self.saved_cursor: Cursor = buffer.cursor
        self.saved_offsets: Tuple[int, int] = buffer.viewport.offsets()
        self.logger = telemetry.get_logger("femto.search")

    def restore(self) -> None:
        self.buffer.move_to(*self.saved_cursor)
        self.buffer.viewport.restore(self.saved_offsets)

    def on_keystroke(self, text: str, key: KeyEvent) -> None:
        if isinstance(key, Escape):
            self.state.reset()
            self.restore()
            return
        if isinstance(key, Enter):
            self.state.reset()
            return

        if isinstance(key, Arrow):
            if key.direction in (Direction.RIGHT, Direction.DOWN):
                self.state.direction = SearchDirection.FORWARD
            else:
                self.state.direction = SearchDirection.BACKWARD
        else:
            self.state.forget_match()

        self.search(text)

    def search(self, text: str) -> bool:
        match = find_next(self.buffer.document, text.encode("latin-1"), self.state)
        if match is None:
            return False
        self.buffer.jump_to_rendered(match.row, match.rendered_col)
        # Past the end so the next scroll pass puts the match on the top row.
        self.buffer.viewport.row_offset = self.buffer.document.line_count
        telemetry.record_event(
            "search.match",
            level="debug",
            data={"row": match.row, "col": match.rendered_col},
        )
        return True


__all__ = ["SearchSession"]
