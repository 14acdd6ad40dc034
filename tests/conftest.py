from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Tuple

import pytest

from femto.runtime import telemetry


class VirtualTerminal:
    """In-memory terminal: scripted input bytes, captured output."""

    def __init__(self, data: bytes = b"", *, size: Tuple[int, int] = (10, 40)) -> None:
        self.pending = bytearray(data)
        self.output = bytearray()
        self.size = size
        self.raw = False
        self.reads_after_eof = 0

    def feed(self, data: bytes) -> None:
        self.pending.extend(data)

    def read_byte(self) -> Optional[int]:
        if not self.pending:
            self.reads_after_eof += 1
            if self.reads_after_eof > 100:
                raise RuntimeError("virtual terminal ran out of scripted input")
            return None
        return self.pending.pop(0)

    def write(self, data: bytes) -> None:
        self.output.extend(data)

    def window_size(self) -> Tuple[int, int]:
        return self.size

    def clear(self) -> None:
        self.write(b"\x1b[2J\x1b[H")

    @contextmanager
    def raw_mode(self) -> Iterator["VirtualTerminal"]:
        self.raw = True
        try:
            yield self
        finally:
            self.raw = False


@pytest.fixture
def virtual_terminal() -> Callable[..., VirtualTerminal]:
    return VirtualTerminal


@pytest.fixture(autouse=True)
def quiet_telemetry() -> Iterator[None]:
    telemetry.configure(
        config=telemetry.TelemetryConfig(level="WARNING", console=False, colored=False)
    )
    yield
    telemetry.configure(
        config=telemetry.TelemetryConfig(level="WARNING", console=False, colored=False)
    )
