"""Single-line prompt shown in the message bar (save as, find, go to line)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, cast

from femto.runtime import telemetry

from femto.input import Backspace, Character, Delete, Enter, Escape, KeyEvent

from .base_mode import Mode, ModeContext, ModeResult


class PromptObserver(Protocol):
    """Notified after every keystroke the prompt receives."""

    def on_keystroke(self, text: str, key: KeyEvent) -> None:
        ...


class NullPromptObserver:
    """Observer for plain prompts that only care about the final text."""

    def on_keystroke(self, text: str, key: KeyEvent) -> None:
        del text, key


@dataclass
class PromptRequest:
    """What to ask and what to do with the answer.

    ``template`` contains ``{}`` where the typed text is shown.
    """

    template: str
    on_submit: Callable[[str], None]
    on_cancel: Optional[Callable[[], None]] = None
    observer: PromptObserver = field(default_factory=NullPromptObserver)

    def render(self, text: str) -> str:
        return self.template.format(text)


class PromptMode(Mode):
    """Accumulates typed text until Enter (non-empty) or Escape."""

    name = "prompt"

    def __init__(self, context: ModeContext, *, return_to: str = "edit") -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("femto.modes.prompt")
        self.return_to = return_to
        self._request: Optional[PromptRequest] = None
        self._text: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self._text)

    @property
    def request(self) -> Optional[PromptRequest]:
        return self._request

    def begin(self, request: PromptRequest) -> None:
        self._request = request
        self._text.clear()

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._show()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._request = None
        self._text.clear()

    def handle_key(self, key: KeyEvent) -> ModeResult:
        request = self._request
        if request is None:
            return ModeResult(consumed=False, switch_to=self.return_to, status="no_prompt")

        if isinstance(key, (Backspace, Delete)):
            if self._text:
                self._text.pop()
        elif isinstance(key, Escape):
            request.observer.on_keystroke(self.text, key)
            self.context.report_status("")
            if request.on_cancel is not None:
                request.on_cancel()
            return ModeResult(consumed=True, switch_to=self.return_to, status="prompt_cancel")
        elif isinstance(key, Enter):
            if self._text:
                text = self.text
                request.observer.on_keystroke(text, key)
                self.context.report_status("")
                request.on_submit(text)
                return ModeResult(
                    consumed=True,
                    switch_to=self.return_to,
                    status="prompt_submit",
                    message=text,
                )
        elif isinstance(key, Character) and key.printable:
            self._text.append(chr(key.byte))

        request.observer.on_keystroke(self.text, key)
        self._show()
        return ModeResult(consumed=True, status="prompt_editing")

    def _show(self) -> None:
        if self._request is not None:
            self.context.report_status(self._request.render(self.text))


def open_prompt(context: ModeContext, request: PromptRequest) -> ModeResult:
    """Arm the registered prompt mode and ask the manager to switch to it."""

    manager = context.extras.get("mode_manager")
    mode = getattr(manager, "mode", None)
    if mode is None:
        raise RuntimeError("ModeContext.extras missing 'mode_manager'")
    prompt = cast(PromptMode, mode(PromptMode.name))
    prompt.begin(request)
    return ModeResult(consumed=True, switch_to=PromptMode.name, status="prompt_open")


__all__ = [
    "NullPromptObserver",
    "PromptMode",
    "PromptObserver",
    "PromptRequest",
    "open_prompt",
]
