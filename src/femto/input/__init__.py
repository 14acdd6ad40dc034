"""Logical key events and the raw byte decoder."""

from .decoder import InputDecoder, ReadByte, classify_byte
from .keys import (
    DOWN,
    LEFT,
    RIGHT,
    UP,
    Arrow,
    Backspace,
    Character,
    Control,
    Delete,
    Direction,
    End,
    Enter,
    Escape,
    Home,
    KeyEvent,
    PageDown,
    PageUp,
    ctrl_key,
)

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
    "InputDecoder",
    "KeyEvent",
    "LEFT",
    "PageDown",
    "PageUp",
    "RIGHT",
    "ReadByte",
    "UP",
    "classify_byte",
    "ctrl_key",
]
