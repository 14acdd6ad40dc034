"""Actions that move the cursor by query: incremental find and go-to-line."""

from __future__ import annotations

from femto.keymaps import ResolutionMatch
from femto.modes.base_mode import ModeContext, ModeResult
from femto.modes.prompt_mode import PromptRequest, open_prompt
from femto.search import SearchSession


def find(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = SearchSession(context.buffer)

    def submit(query: str) -> None:
        del query

    return open_prompt(
        context,
        PromptRequest(
            template="Search: {} (Use ESC/Arrows/Enter)",
            on_submit=submit,
            observer=session,
        ),
    )


def goto_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer

    def submit(text: str) -> None:
        try:
            number = int(text.strip())
        except ValueError:
            context.report_status(f"Invalid line number: {text}")
            return
        last_row = max(0, buffer.document.line_count - 1)
        buffer.move_to(max(0, min(number - 1, last_row)), 0)

    return open_prompt(
        context, PromptRequest(template="Go to line: {}", on_submit=submit)
    )


__all__ = ["find", "goto_line"]
