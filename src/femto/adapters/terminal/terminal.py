"""Raw-mode terminal I/O backed by the process's stdin/stdout.

The editor only needs four things from the terminal: one byte at a time with
a short timeout, unbuffered writes, the window size, and raw mode that is
restored on exit. ``TerminalIO`` describes that surface so tests can swap in
an in-memory fake.
"""

from __future__ import annotations

import os
import re
import select
import sys
import termios
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, Tuple

from femto.runtime import telemetry

READ_TIMEOUT = 0.1

_CURSOR_REPORT_RE = re.compile(rb"^\x1b\[(\d+);(\d+)R?$")

CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"


class TerminalError(RuntimeError):
    """Unrecoverable failure talking to the terminal device."""


class TerminalIO(Protocol):
    """The terminal collaborator the editor loop depends on."""

    def read_byte(self) -> Optional[int]:
        ...

    def write(self, data: bytes) -> None:
        ...

    def window_size(self) -> Tuple[int, int]:
        ...


class RawTerminal:
    """Concrete terminal using :mod:`termios` on file descriptors."""

    def __init__(
        self,
        *,
        in_fd: Optional[int] = None,
        out_fd: Optional[int] = None,
        timeout: float = READ_TIMEOUT,
    ) -> None:
        self.in_fd = sys.stdin.fileno() if in_fd is None else in_fd
        self.out_fd = sys.stdout.fileno() if out_fd is None else out_fd
        self.timeout = timeout
        self._saved_attrs: Optional[list] = None
        self.logger = telemetry.get_logger("femto.terminal")

    # -- raw mode ---------------------------------------------------------

    def enable_raw_mode(self) -> None:
        try:
            self._saved_attrs = termios.tcgetattr(self.in_fd)
        except termios.error as exc:
            raise TerminalError(f"tcgetattr: {exc}") from exc

        raw = termios.tcgetattr(self.in_fd)
        raw[0] &= ~(
            termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
        )
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        try:
            termios.tcsetattr(self.in_fd, termios.TCSAFLUSH, raw)
        except termios.error as exc:
            raise TerminalError(f"tcsetattr: {exc}") from exc

    def restore(self) -> None:
        if self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self.in_fd, termios.TCSAFLUSH, self._saved_attrs)
        except termios.error as exc:
            raise TerminalError(f"tcsetattr: {exc}") from exc
        finally:
            self._saved_attrs = None

    @contextmanager
    def raw_mode(self) -> Iterator["RawTerminal"]:
        self.enable_raw_mode()
        try:
            yield self
        finally:
            self.restore()

    # -- I/O --------------------------------------------------------------

    def read_byte(self) -> Optional[int]:
        """Return one byte, or ``None`` if nothing arrived within the timeout."""

        try:
            ready, _, _ = select.select([self.in_fd], [], [], self.timeout)
            if not ready:
                return None
            data = os.read(self.in_fd, 1)
        except InterruptedError:
            return None
        except OSError as exc:
            raise TerminalError(f"read: {exc}") from exc
        if not data:
            return None
        return data[0]

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            try:
                written = os.write(self.out_fd, view)
            except InterruptedError:
                continue
            except OSError as exc:
                raise TerminalError(f"write: {exc}") from exc
            view = view[written:]

    def clear(self) -> None:
        self.write(CLEAR_SCREEN + CURSOR_HOME)

    def window_size(self) -> Tuple[int, int]:
        try:
            size = os.get_terminal_size(self.out_fd)
            if size.columns > 0:
                return (size.lines, size.columns)
        except OSError:
            pass
        return self._window_size_from_cursor()

    def _window_size_from_cursor(self) -> Tuple[int, int]:
        # Push the cursor to the bottom-right corner and ask where it ended up.
        self.write(b"\x1b[999C\x1b[999B")
        self.write(b"\x1b[6n")
        response = bytearray()
        while len(response) < 32:
            byte = self.read_byte()
            if byte is None:
                break
            response.append(byte)
            if byte == ord("R"):
                break
        match = _CURSOR_REPORT_RE.match(bytes(response))
        if not match:
            raise TerminalError("unable to determine window size")
        return (int(match.group(1)), int(match.group(2)))


__all__ = [
    "CLEAR_SCREEN",
    "CURSOR_HOME",
    "READ_TIMEOUT",
    "RawTerminal",
    "TerminalError",
    "TerminalIO",
]
