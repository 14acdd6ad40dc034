"""Text-editing verbs shared by the edit-mode keymap."""

from __future__ import annotations

from femto.keymaps import ResolutionMatch
from femto.modes.base_mode import ModeContext, ModeResult


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.insert_newline()
    return ModeResult(consumed=True, status="insert_newline")


def delete_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    changed = context.buffer.delete_backward()
    return ModeResult(consumed=True, status="delete" if changed else "noop")


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    changed = context.buffer.delete_forward()
    return ModeResult(consumed=True, status="delete" if changed else "noop")


def noop_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "insert_newline",
    "delete_backward",
    "delete_forward",
    "noop_action",
]
