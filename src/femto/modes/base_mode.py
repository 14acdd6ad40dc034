"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from femto.buffer import Buffer
from femto.input import KeyEvent

STATUS_EVENT = "status.message"
QUIT_EVENT = "editor.quit"


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can access."""

    buffer: Buffer
    bus: ModeBus = field(default_factory=ModeBus)
    extras: Dict[str, object] = field(default_factory=dict)

    def report_status(self, message: str) -> None:
        """Fire-and-forget notification for the host's message bar."""

        self.bus.emit(STATUS_EVENT, message)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyEvent
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
