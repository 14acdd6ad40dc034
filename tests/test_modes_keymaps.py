from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from femto.buffer import Buffer
from femto.input import DOWN, Backspace, Character, Control, Enter, Escape, ctrl_key
from femto.keymaps import ActionRef, Binding, KeymapRegistry, KeymapResolver
from femto.keymaps.defaults import load_default_keymaps
from femto.modes import (
    QUIT_EVENT,
    STATUS_EVENT,
    EditMode,
    ModeBus,
    ModeContext,
    ModeResult,
    PromptMode,
)
from femto.modes.mode_manager import ModeManager


def make_context(
    registry: KeymapRegistry,
    resolver: KeymapResolver,
    *,
    buffer: Optional[Buffer] = None,
) -> ModeContext:
    extras: Dict[str, Any] = {
        "keymap_registry": registry,
        "keymap_resolver": resolver,
    }
    return ModeContext(buffer=buffer or Buffer(), bus=ModeBus(), extras=extras)


def make_manager(buffer: Optional[Buffer] = None) -> ModeManager:
    context = ModeContext(buffer=buffer or Buffer(), bus=ModeBus(), extras={})
    manager = ModeManager(context)
    manager.register_mode(EditMode)
    manager.register_mode(PromptMode)
    return manager


def collect(manager: ModeManager, event: str) -> list[object]:
    seen: list[object] = []
    manager.context.bus.subscribe(event, seen.append)
    return seen


def ctrl(char: str) -> Control:
    return Control(ctrl_key(char))


def type_text(manager: ModeManager, text: str) -> None:
    for char in text:
        manager.handle_key(Character(ord(char)))


def test_edit_mode_inserts_unbound_characters() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    context = make_context(registry, resolver)
    mode = EditMode(context)

    result = mode.handle_key(Character(ord("a")))

    assert result.consumed is True
    assert result.status == "insert"
    assert context.buffer.document.snapshot() == (b"a",)


def test_edit_mode_ignores_unbound_control_keys() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    context = make_context(registry, KeymapResolver(registry), buffer=Buffer.from_text("x"))
    mode = EditMode(context)

    result = mode.handle_key(ctrl("b"))

    assert result.consumed is False
    assert result.status == "miss"
    assert context.buffer.document.snapshot() == (b"x",)
    assert context.buffer.dirty is False


def test_edit_mode_requires_resolver() -> None:
    context = ModeContext(buffer=Buffer())

    with pytest.raises(RuntimeError):
        EditMode(context)


def test_edit_mode_runs_custom_binding() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    calls: list[str] = []

    def shout(context: ModeContext, match: object) -> ModeResult:
        calls.append(match.binding.id)  # type: ignore[attr-defined]
        return ModeResult(consumed=True, status="shout")

    registry.register_action(ActionRef(id="test.shout", handler=shout))
    registry.register_binding(
        Binding(id="edit.shout", mode="edit", key="<C-b>", action_id="test.shout")
    )
    context = make_context(registry, KeymapResolver(registry))

    result = EditMode(context).handle_key(ctrl("b"))

    assert result.status == "shout"
    assert calls == ["edit.shout"]


def test_mode_manager_rejects_unknown_and_duplicate_modes() -> None:
    manager = make_manager()

    with pytest.raises(KeyError):
        manager.switch_mode("visual")
    with pytest.raises(ValueError):
        manager.register_mode(EditMode)


def test_mode_manager_starts_in_first_registered_mode() -> None:
    manager = make_manager()

    assert manager.active_mode is not None
    assert manager.active_mode.name == "edit"


def test_enter_and_backspace_dispatch_through_keymap() -> None:
    manager = make_manager(Buffer.from_text("abcd"))
    manager.context.buffer.move_to(0, 2)

    manager.handle_key(Enter())
    assert manager.context.buffer.document.snapshot() == (b"ab", b"cd")

    manager.handle_key(Backspace())
    assert manager.context.buffer.document.snapshot() == (b"abcd",)
    assert manager.context.buffer.cursor == (0, 2)


def test_quit_on_clean_buffer_is_immediate() -> None:
    manager = make_manager(Buffer.from_text("saved"))
    quits = collect(manager, QUIT_EVENT)

    result = manager.handle_key(ctrl("q"))

    assert result.status == "quit"
    assert quits == [{"dirty": False}]


def test_quit_on_dirty_buffer_needs_confirmation() -> None:
    manager = make_manager()
    type_text(manager, "x")
    quits = collect(manager, QUIT_EVENT)
    statuses = collect(manager, STATUS_EVENT)

    for _ in range(3):
        assert manager.handle_key(ctrl("q")).status == "quit_refused"
    assert quits == []
    assert statuses == [
        "WARNING!!! File has unsaved changes. Press Ctrl-Q 3 more times to quit.",
        "WARNING!!! File has unsaved changes. Press Ctrl-Q 2 more times to quit.",
        "WARNING!!! File has unsaved changes. Press Ctrl-Q 1 more times to quit.",
    ]

    manager.handle_key(ctrl("q"))
    assert quits == [{"dirty": True}]


def test_other_keys_reset_quit_confirmation() -> None:
    manager = make_manager()
    type_text(manager, "x")
    statuses = collect(manager, STATUS_EVENT)

    manager.handle_key(ctrl("q"))
    manager.handle_key(ctrl("q"))
    manager.handle_key(DOWN)
    manager.handle_key(ctrl("q"))

    assert statuses[-1].endswith("Press Ctrl-Q 3 more times to quit.")


def test_save_writes_file_and_clears_dirty(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    buffer = Buffer.from_lines([b"one", b"two"], filename=str(path))
    manager = make_manager(buffer)
    statuses = collect(manager, STATUS_EVENT)
    type_text(manager, "!")

    manager.handle_key(ctrl("s"))
    first = path.read_bytes()
    assert buffer.dirty is False
    manager.handle_key(ctrl("s"))

    assert first == b"!one\ntwo\n"
    assert path.read_bytes() == first
    assert buffer.dirty is False
    assert statuses[-1] == "9 bytes written to disk"


def test_save_failure_reports_reason_and_keeps_dirty(tmp_path: Path) -> None:
    buffer = Buffer.from_lines([b"data"], filename=str(tmp_path))
    manager = make_manager(buffer)
    statuses = collect(manager, STATUS_EVENT)
    type_text(manager, "x")

    result = manager.handle_key(ctrl("s"))

    assert result.status == "save_failed"
    assert buffer.dirty is True
    assert statuses[-1].startswith("Can't save! I/O error: ")


def test_save_as_prompt_names_the_file(tmp_path: Path) -> None:
    path = tmp_path / "named.txt"
    manager = make_manager()
    statuses = collect(manager, STATUS_EVENT)
    type_text(manager, "hi")

    manager.handle_key(ctrl("s"))
    assert manager.active_mode.name == "prompt"
    assert statuses[-1] == "Save as:  (ESC to cancel)"

    type_text(manager, str(path))
    result = manager.handle_key(Enter())

    assert result.status == "prompt_submit"
    assert manager.active_mode.name == "edit"
    assert manager.context.buffer.document.filename == str(path)
    assert path.read_bytes() == b"hi\n"
    assert statuses[-1] == "3 bytes written to disk"


def test_save_as_escape_aborts() -> None:
    manager = make_manager()
    statuses = collect(manager, STATUS_EVENT)
    type_text(manager, "hi")

    manager.handle_key(ctrl("s"))
    type_text(manager, "name")
    manager.handle_key(Escape())

    assert manager.active_mode.name == "edit"
    assert manager.context.buffer.document.filename is None
    assert manager.context.buffer.dirty is True
    assert statuses[-1] == "Save aborted"


def test_prompt_editing_keys() -> None:
    manager = make_manager()
    statuses = collect(manager, STATUS_EVENT)

    manager.handle_key(ctrl("g"))
    type_text(manager, "12")
    manager.handle_key(Backspace())
    assert statuses[-1] == "Go to line: 1"

    manager.handle_key(Backspace())
    result = manager.handle_key(Enter())

    assert result.status == "prompt_editing"
    assert manager.active_mode.name == "prompt"


def test_goto_line_moves_to_column_zero() -> None:
    buffer = Buffer.from_lines([f"row {i}".encode() for i in range(10)])
    buffer.move_to(0, 3)
    manager = make_manager(buffer)

    manager.handle_key(ctrl("g"))
    type_text(manager, "5")
    manager.handle_key(Enter())

    assert buffer.cursor == (4, 0)

    manager.handle_key(ctrl("g"))
    type_text(manager, "99")
    manager.handle_key(Enter())

    assert buffer.cursor == (9, 0)


def test_goto_line_rejects_non_numbers() -> None:
    buffer = Buffer.from_lines([b"a", b"b"])
    manager = make_manager(buffer)
    statuses = collect(manager, STATUS_EVENT)

    manager.handle_key(ctrl("g"))
    type_text(manager, "two")
    manager.handle_key(Enter())

    assert statuses[-1] == "Invalid line number: two"
    assert buffer.cursor == (0, 0)


def test_find_prompt_jumps_and_escape_restores() -> None:
    buffer = Buffer.from_lines([b"alpha", b"beta", b"gamma"])
    buffer.move_to(0, 2)
    manager = make_manager(buffer)
    statuses = collect(manager, STATUS_EVENT)

    manager.handle_key(ctrl("f"))
    assert statuses[-1] == "Search:  (Use ESC/Arrows/Enter)"
    type_text(manager, "gam")
    assert buffer.cursor == (2, 0)
    assert statuses[-1] == "Search: gam (Use ESC/Arrows/Enter)"

    manager.handle_key(Escape())

    assert manager.active_mode.name == "edit"
    assert buffer.cursor == (0, 2)


def test_find_prompt_enter_keeps_match() -> None:
    buffer = Buffer.from_lines([b"alpha", b"beta", b"gamma"])
    manager = make_manager(buffer)

    manager.handle_key(ctrl("f"))
    type_text(manager, "eta")
    manager.handle_key(Enter())

    assert manager.active_mode.name == "edit"
    assert buffer.cursor == (1, 1)
