"""Built-in keymap that seeds edit mode with the editor's key bindings."""

from __future__ import annotations

from typing import Iterable, Sequence

from femto.actions import core as core_actions
from femto.actions import cursor as cursor_actions
from femto.actions import file as file_actions
from femto.actions import search as search_actions

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="cursor.left", handler=cursor_actions.move_left, description="Move left"),
    ActionRef(id="cursor.right", handler=cursor_actions.move_right, description="Move right"),
    ActionRef(id="cursor.up", handler=cursor_actions.move_up, description="Move up"),
    ActionRef(id="cursor.down", handler=cursor_actions.move_down, description="Move down"),
    ActionRef(id="cursor.home", handler=cursor_actions.move_home, description="Start of line"),
    ActionRef(id="cursor.end", handler=cursor_actions.move_end, description="End of line"),
    ActionRef(id="cursor.page_up", handler=cursor_actions.page_up, description="Page up"),
    ActionRef(
        id="cursor.page_down", handler=cursor_actions.page_down, description="Page down"
    ),
    ActionRef(
        id="edit.newline",
        handler=core_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.delete_backward",
        handler=core_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.delete_forward",
        handler=core_actions.delete_forward,
        description="Delete the character under the cursor",
    ),
    ActionRef(id="edit.noop", handler=core_actions.noop_action, description="Do nothing"),
    ActionRef(id="file.save", handler=file_actions.save, description="Save to disk"),
    ActionRef(
        id=file_actions.QUIT_ACTION_ID,
        handler=file_actions.quit_editor,
        description="Quit, confirming unsaved changes",
    ),
    ActionRef(id="search.find", handler=search_actions.find, description="Incremental find"),
    ActionRef(
        id="search.goto_line", handler=search_actions.goto_line, description="Go to line"
    ),
)


def _edit(binding_id: str, key: str, action_id: str, description: str = "") -> Binding:
    return Binding(
        id=f"edit.{binding_id}",
        mode="edit",
        key=key,
        action_id=action_id,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _edit("left", "<Left>", "cursor.left"),
    _edit("right", "<Right>", "cursor.right"),
    _edit("up", "<Up>", "cursor.up"),
    _edit("down", "<Down>", "cursor.down"),
    _edit("home", "<Home>", "cursor.home"),
    _edit("end", "<End>", "cursor.end"),
    _edit("page_up", "<PageUp>", "cursor.page_up"),
    _edit("page_down", "<PageDown>", "cursor.page_down"),
    _edit("enter", "<CR>", "edit.newline", "Insert a line break"),
    _edit("backspace", "<BS>", "edit.delete_backward"),
    _edit("delete", "<Del>", "edit.delete_forward"),
    _edit("save", "<C-s>", "file.save", "Ctrl-S saves"),
    _edit("quit", "<C-q>", file_actions.QUIT_ACTION_ID, "Ctrl-Q quits"),
    _edit("find", "<C-f>", "search.find", "Ctrl-F searches"),
    _edit("goto_line", "<C-g>", "search.goto_line", "Ctrl-G jumps to a line"),
    _edit("refresh", "<C-l>", "edit.noop", "Ctrl-L only redraws"),
    _edit("escape", "<Esc>", "edit.noop"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and edit-mode bindings."""

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
