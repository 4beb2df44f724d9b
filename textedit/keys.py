"""Keyboard encoding for the editing state machine.

A key is a single integer. Printable input is the character's code point.
Editing commands are integers at or above ``char_limit``. Shift is a
separate bit that is OR-ed into a command key.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields

_COMMAND_BASE = 0x200000


@dataclass(frozen=True)
class KeyMap:
    """Integer codes for the editing commands and the shift modifier.

    The ``*2`` fields are optional secondary bindings, for example the
    Home/End variants found on some keyboards. ``insert``, ``word_left`` and
    ``word_right`` may be None to leave those commands unbound.
    """

    left: int = _COMMAND_BASE + 0
    right: int = _COMMAND_BASE + 1
    up: int = _COMMAND_BASE + 2
    down: int = _COMMAND_BASE + 3
    page_up: int = _COMMAND_BASE + 4
    page_down: int = _COMMAND_BASE + 5
    line_start: int = _COMMAND_BASE + 6
    line_end: int = _COMMAND_BASE + 7
    text_start: int = _COMMAND_BASE + 8
    text_end: int = _COMMAND_BASE + 9
    delete: int = _COMMAND_BASE + 10
    backspace: int = _COMMAND_BASE + 11
    undo: int = _COMMAND_BASE + 12
    redo: int = _COMMAND_BASE + 13
    word_left: int | None = _COMMAND_BASE + 14
    word_right: int | None = _COMMAND_BASE + 15
    insert: int | None = _COMMAND_BASE + 16
    line_start2: int | None = None
    line_end2: int | None = None
    text_start2: int | None = None
    text_end2: int | None = None
    shift: int = 0x400000
    char_limit: int = _COMMAND_BASE

    def __post_init__(self) -> None:
        if self.shift <= 0 or self.shift & (self.shift - 1):
            raise ValueError("shift must be a single bit")
        if self.char_limit <= 0:
            raise ValueError("char_limit must be positive")
        seen: dict[int, str] = {}
        for name, code in self._bindings():
            if code <= 0:
                raise ValueError(f"key code for {name} must be positive")
            if code & self.shift:
                raise ValueError(f"key code for {name} overlaps the shift bit")
            if code in seen:
                raise ValueError(f"{name} and {seen[code]} share key code {code}")
            seen[code] = name

    def _bindings(self):
        for field in fields(self):
            if field.name in ("shift", "char_limit"):
                continue
            code = getattr(self, field.name)
            if code is not None:
                yield field.name, code

    def base(self, key: int) -> int:
        """Return ``key`` with the shift bit cleared."""
        return key & ~self.shift

    def is_shifted(self, key: int) -> bool:
        """Return True if the shift bit is set in ``key``."""
        return bool(key & self.shift)

    def key_to_char(self, key: int) -> str | None:
        """Return the character ``key`` inserts, or None if it inserts nothing."""
        if key <= 0 or key >= self.char_limit or key > sys.maxunicode:
            return None
        if key & self.shift:
            return None
        if any(code == key for _, code in self._bindings()):
            return None
        return chr(key)