"""Turns a raw terminal byte stream into logical key events."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from femto.runtime import telemetry

from .keys import (
    DOWN,
    LEFT,
    RIGHT,
    UP,
    Backspace,
    Character,
    Control,
    Delete,
    End,
    Enter,
    Escape,
    Home,
    KeyEvent,
    PageDown,
    PageUp,
)

ESC = 0x1B
CR = 0x0D
TAB = 0x09
BACKSPACE = 0x7F
CTRL_H = 0x08

# Returns a byte, or None when the read timed out with no data.
ReadByte = Callable[[], Optional[int]]

_CSI_FINALS: Dict[int, KeyEvent] = {
    ord("A"): UP,
    ord("B"): DOWN,
    ord("C"): RIGHT,
    ord("D"): LEFT,
    ord("H"): Home(),
    ord("F"): End(),
}

_SS3_FINALS: Dict[int, KeyEvent] = {
    ord("H"): Home(),
    ord("F"): End(),
}

_TILDE_CODES: Dict[int, KeyEvent] = {
    ord("1"): Home(),
    ord("3"): Delete(),
    ord("4"): End(),
    ord("5"): PageUp(),
    ord("6"): PageDown(),
    ord("7"): Home(),
    ord("8"): End(),
}


def classify_byte(byte: int) -> KeyEvent:
    """Map a single non-escape byte to its logical key."""

    if byte == CR:
        return Enter()
    if byte in (BACKSPACE, CTRL_H):
        return Backspace()
    if byte == ESC:
        return Escape()
    if byte == TAB or byte >= 0x20:
        return Character(byte)
    return Control(byte)


class InputDecoder:
    """Reads one logical key at a time from ``read_byte``.

    Every read is independent and may time out; a timeout in the middle of an
    escape sequence resolves to a bare Escape rather than an error.
    """

    def __init__(self, read_byte: ReadByte) -> None:
        self._read_byte = read_byte
        self.logger = telemetry.get_logger("femto.input")

    def read_key(self) -> Optional[KeyEvent]:
        """Return the next key, or ``None`` if no byte arrived in time."""

        byte = self._read_byte()
        if byte is None:
            return None
        if byte != ESC:
            return classify_byte(byte)
        return self._read_escape()

    def _read_escape(self) -> KeyEvent:
        first = self._read_byte()
        if first is None:
            return Escape()
        second = self._read_byte()
        if second is None:
            return Escape()

        if first == ord("["):
            if ord("0") <= second <= ord("9"):
                third = self._read_byte()
                if third is None or third != ord("~"):
                    return self._unrecognized(first, second, third)
                key = _TILDE_CODES.get(second)
                return key if key is not None else self._unrecognized(first, second, third)
            key = _CSI_FINALS.get(second)
            if key is not None:
                return key
        elif first == ord("O"):
            key = _SS3_FINALS.get(second)
            if key is not None:
                return key

        return self._unrecognized(first, second)

    def _unrecognized(self, *sequence: Optional[int]) -> KeyEvent:
        self.logger.debug(
            "unrecognized escape sequence %r",
            bytes(b for b in sequence if b is not None),
        )
        return Escape()


__all__ = ["InputDecoder", "ReadByte", "classify_byte"]
