"""Cursor movement verbs bound in edit mode."""

from __future__ import annotations

from femto.keymaps import ResolutionMatch
from femto.modes.base_mode import ModeContext, ModeResult


def _moved(moved: bool = True) -> ModeResult:
    return ModeResult(consumed=True, status="move" if moved else "move_blocked")


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _moved(context.buffer.move_left())


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _moved(context.buffer.move_right())


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _moved(context.buffer.move_up())


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _moved(context.buffer.move_down())


def move_home(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move_home()
    return _moved()


def move_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move_end()
    return _moved()


def page_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.page_up()
    return _moved()


def page_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.page_down()
    return _moved()


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_home",
    "move_end",
    "page_up",
    "page_down",
]
