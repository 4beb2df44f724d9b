"""Text storage and layout used by the editing state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Union, runtime_checkable

NEWLINE = "\n"

WidthSpec = Union[float, Callable[[str], float]]


@dataclass
class TextRow:
    """Layout of one displayed row of text.

    ``x0``/``x1`` are the start and end x positions, ``baseline_y_delta`` the
    distance from the previous row's baseline, ``ymin``/``ymax`` the extent of
    the row above and below its baseline, and ``num_chars`` the number of
    characters the row consumes (including a trailing newline).
    """

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


@runtime_checkable
class TextBuffer(Protocol):
    """What the editor needs from the text it edits."""

    def __len__(self) -> int:
        """Number of characters in the buffer."""

    def layout_row(self, start: int) -> TextRow:
        """Lay out the row of characters beginning at ``start``."""

    def char_width(self, line_start: int, index: int) -> float:
        """Width of character ``index`` of the row starting at ``line_start``."""

    def char_at(self, index: int) -> str:
        """Character at ``index``."""

    def delete(self, index: int, count: int) -> None:
        """Remove ``count`` characters starting at ``index``."""

    def insert(self, index: int, text: str) -> bool:
        """Insert ``text`` at ``index``; return False if it does not fit."""


def is_space(ch: str) -> bool:
    """Return True if ``ch`` is a whitespace character."""
    return bool(ch) and ch.isspace()


class LineBuffer:
    """A plain string laid out as rows split at newlines.

    Every character has the same width unless ``char_width`` is a callable
    taking the character; newlines take no horizontal space. ``max_length``
    bounds the number of characters the buffer accepts (None for no bound).
    """

    def __init__(
        self,
        text: str = "",
        char_width: WidthSpec = 1.0,
        line_height: float = 1.0,
        max_length: int | None = None,
    ) -> None:
        if max_length is not None and max_length < 0:
            raise ValueError("max_length must not be negative")
        if max_length is not None and len(text) > max_length:
            raise ValueError("initial text is longer than max_length")
        if line_height <= 0:
            raise ValueError("line_height must be positive")
        self._chars: list[str] = list(text)
        self._width = char_width
        self.line_height = float(line_height)
        self.max_length = max_length

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return "".join(self._chars)

    def __repr__(self) -> str:
        return f"LineBuffer({str(self)!r})"

    def _width_of(self, ch: str) -> float:
        if ch == NEWLINE:
            return 0.0
        if callable(self._width):
            return float(self._width(ch))
        return float(self._width)

    def layout_row(self, start: int) -> TextRow:
        if start < 0:
            raise IndexError("row start out of range")
        end = start
        width = 0.0
        for ch in self._chars[start:]:
            end += 1
            if ch == NEWLINE:
                break
            width += self._width_of(ch)
        return TextRow(
            x0=0.0,
            x1=width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=end - start,
        )

    def char_width(self, line_start: int, index: int) -> float:
        return self._width_of(self.char_at(line_start + index))

    def char_at(self, index: int) -> str:
        if not 0 <= index < len(self._chars):
            raise IndexError("character index out of range")
        return self._chars[index]

    def delete(self, index: int, count: int) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        if index < 0 or index + count > len(self._chars):
            raise IndexError("deletion range out of bounds")
        del self._chars[index : index + count]

    def insert(self, index: int, text: str) -> bool:
        if not 0 <= index <= len(self._chars):
            raise IndexError("insertion index out of range")
        if self.max_length is not None and len(self._chars) + len(text) > self.max_length:
            return False
        self._chars[index:index] = list(text)
        return True