"""Logical key events produced by the input decoder.

The set of variants is closed: every decoded key is one of the classes in
``KeyEvent``. Each exposes a ``token`` used for keymap lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


def ctrl_key(char: str) -> int:
    """Byte produced by Ctrl+``char`` (``ctrl_key("q") == 0x11``)."""

    return ord(char) & 0x1F


class Direction(Enum):
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"


@dataclass(frozen=True, slots=True)
class Character:
    """A byte that is inserted as text (printable, tab, or high byte)."""

    byte: int

    @property
    def token(self) -> str:
        if 0x20 < self.byte < 0x7F:
            return chr(self.byte)
        if self.byte == 0x20:
            return "<Space>"
        if self.byte == 0x09:
            return "<Tab>"
        return f"<0x{self.byte:02x}>"

    @property
    def printable(self) -> bool:
        return 0x20 <= self.byte < 0x7F


@dataclass(frozen=True, slots=True)
class Control:
    """A control byte with no dedicated variant, e.g. Ctrl-Q."""

    byte: int

    @property
    def token(self) -> str:
        if 1 <= self.byte <= 26:
            return f"<C-{chr(self.byte + 0x60)}>"
        return f"<C-0x{self.byte:02x}>"


@dataclass(frozen=True, slots=True)
class Arrow:
    direction: Direction

    @property
    def token(self) -> str:
        return f"<{self.direction.value}>"


@dataclass(frozen=True, slots=True)
class Home:
    token: ClassVar[str] = "<Home>"


@dataclass(frozen=True, slots=True)
class End:
    token: ClassVar[str] = "<End>"


@dataclass(frozen=True, slots=True)
class PageUp:
    token: ClassVar[str] = "<PageUp>"


@dataclass(frozen=True, slots=True)
class PageDown:
    token: ClassVar[str] = "<PageDown>"


@dataclass(frozen=True, slots=True)
class Delete:
    token: ClassVar[str] = "<Del>"


@dataclass(frozen=True, slots=True)
class Backspace:
    token: ClassVar[str] = "<BS>"


@dataclass(frozen=True, slots=True)
class Escape:
    token: ClassVar[str] = "<Esc>"


@dataclass(frozen=True, slots=True)
class Enter:
    token: ClassVar[str] = "<CR>"


KeyEvent = Union[
    Character,
    Control,
    Arrow,
    Home,
    End,
    PageUp,
    PageDown,
    Delete,
    Backspace,
    Escape,
    Enter,
]

UP = Arrow(Direction.UP)
DOWN = Arrow(Direction.DOWN)
LEFT = Arrow(Direction.LEFT)
RIGHT = Arrow(Direction.RIGHT)

__all__ = [
    "Arrow",
    "Backspace",
    "Character",
    "Control",
    "Delete",
    "Direction",
    "DOWN",
    "End",
    "Enter",
    "Escape",
    "Home",
    "KeyEvent",
    "LEFT",
    "PageDown",
    "PageUp",
    "RIGHT",
    "UP",
    "ctrl_key",
]
