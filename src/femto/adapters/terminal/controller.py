"""Event loop wiring the terminal, the decoder, and the ModeManager together."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from femto.runtime import telemetry

from femto.input import InputDecoder, KeyEvent
from femto.modes import QUIT_EVENT, STATUS_EVENT, ModeResult
from femto.modes.mode_manager import ModeManager

from .screen import Screen
from .terminal import CLEAR_SCREEN, CURSOR_HOME, TerminalIO


class TerminalEditorAdapter:
    """Bridges ModeManager + bus events to a raw ANSI terminal."""

    def __init__(
        self,
        manager: ModeManager,
        terminal: TerminalIO,
        *,
        screen: Optional[Screen] = None,
    ) -> None:
        self.manager = manager
        self.terminal = terminal
        self.screen = screen or Screen()
        self.decoder = InputDecoder(terminal.read_byte)
        self.running = False
        self.logger = telemetry.get_logger("femto.adapters.terminal")
        self._subscribe_events()
        self.resize()

    @property
    def buffer(self):
        return self.manager.context.buffer

    def set_status(self, message: str) -> None:
        self.screen.set_message(message)

    def resize(self) -> None:
        rows, cols = self.terminal.window_size()
        self.screen.resize(rows, cols)
        self.buffer.viewport.resize(self.screen.text_rows, cols)
        self.logger.debug("window size rows=%d cols=%d", rows, cols)

    def refresh(self) -> bytes:
        """Scroll the cursor into view and draw one frame."""

        self.buffer.scroll()
        frame = self.screen.compose(self.buffer.mirror())
        self.terminal.write(frame)
        return frame

    def process_key(self, key: KeyEvent) -> ModeResult:
        result = self.manager.handle_key(key)
        self._log_state("key", key=key.token, status=result.status)
        return result

    def step(self) -> Optional[ModeResult]:
        """Read at most one key and dispatch it."""

        key = self.decoder.read_key()
        if key is None:
            return None
        return self.process_key(key)

    def run(self) -> None:
        self.running = True
        telemetry.record_event("editor.start", data={"file": self.buffer.document.filename})
        try:
            while self.running:
                self.refresh()
                self.step()
        finally:
            self.terminal.write(CLEAR_SCREEN + CURSOR_HOME)
        telemetry.record_event("editor.stop", data={"dirty": self.buffer.dirty})

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        bus.subscribe(STATUS_EVENT, self._handle_status)
        bus.subscribe(QUIT_EVENT, self._handle_quit)

    def _handle_status(self, payload: object | None) -> None:
        self.set_status("" if payload is None else str(payload))

    def _handle_quit(self, payload: object | None) -> None:
        self._log_state("quit", payload=payload)
        self.running = False

    def _log_state(self, prefix: str, **fields: object) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.logger.debug(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        active_mode = self.manager.active_mode
        return {
            "mode": active_mode.name if active_mode else "?",
            "cursor": self.buffer.cursor,
            "lines": self.buffer.document.line_count,
            "version": self.buffer.document.version,
        }


__all__ = ["TerminalEditorAdapter"]
