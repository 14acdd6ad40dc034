"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from femto.keymaps import KeymapResolver

from .base_mode import ModeContext

LAST_ACTION_KEY = "last_action"


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def last_action(context: ModeContext) -> str | None:
    value = context.extras.get(LAST_ACTION_KEY)
    return value if isinstance(value, str) else None


def set_last_action(context: ModeContext, action_id: str | None) -> None:
    context.extras[LAST_ACTION_KEY] = action_id


__all__ = [
    "LAST_ACTION_KEY",
    "last_action",
    "require_keymap_resolver",
    "set_last_action",
]
