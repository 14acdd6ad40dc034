"""Actions that persist the document and leave the editor."""

from __future__ import annotations

from typing import MutableMapping, cast

from femto.runtime import telemetry

from femto.buffer import FileIOError, save_file
from femto.keymaps import ResolutionMatch
from femto.modes.base_mode import QUIT_EVENT, ModeContext, ModeResult
from femto.modes.keymap_helpers import last_action
from femto.modes.prompt_mode import PromptRequest, open_prompt

QUIT_TIMES = 3
QUIT_ACTION_ID = "file.quit"

logger = telemetry.get_logger("femto.actions.file")


def _quit_state(context: ModeContext) -> MutableMapping[str, int]:
    state = cast(MutableMapping[str, int], context.extras.setdefault("quit_state", {}))
    state.setdefault("remaining", QUIT_TIMES)
    return state


def write_document(context: ModeContext) -> bool:
    """Save to the document's file name, reporting the outcome."""

    document = context.buffer.document
    if not document.filename:
        return False
    content = document.to_bytes()
    try:
        written = save_file(document.filename, content)
    except FileIOError as exc:
        logger.error("save failed for %s: %s", document.filename, exc.reason)
        context.report_status(f"Can't save! I/O error: {exc.reason}")
        return False
    document.mark_clean()
    telemetry.record_event(
        "file.save", data={"path": document.filename, "bytes": written}
    )
    context.report_status(f"{written} bytes written to disk")
    return True


def save(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    document = context.buffer.document
    if document.filename:
        saved = write_document(context)
        return ModeResult(consumed=True, status="saved" if saved else "save_failed")

    def submit(name: str) -> None:
        document.filename = name
        write_document(context)

    def cancel() -> None:
        context.report_status("Save aborted")

    return open_prompt(
        context,
        PromptRequest(
            template="Save as: {} (ESC to cancel)",
            on_submit=submit,
            on_cancel=cancel,
        ),
    )


def quit_editor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = _quit_state(context)
    if last_action(context) != QUIT_ACTION_ID:
        state["remaining"] = QUIT_TIMES

    if context.buffer.dirty and state["remaining"] > 0:
        context.report_status(
            "WARNING!!! File has unsaved changes. "
            f"Press Ctrl-Q {state['remaining']} more times to quit."
        )
        state["remaining"] -= 1
        return ModeResult(consumed=True, status="quit_refused")

    context.bus.emit(QUIT_EVENT, {"dirty": context.buffer.dirty})
    return ModeResult(consumed=True, status="quit")


__all__ = ["QUIT_ACTION_ID", "QUIT_TIMES", "quit_editor", "save", "write_document"]
