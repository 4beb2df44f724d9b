"""Cursor placement from coordinates, row lookup and word movement."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import NEWLINE, TextBuffer, TextRow, is_space


@dataclass
class FindState:
    """Where a character sits in the layout.

    ``x``/``y`` give the position of the character, ``height`` the height of
    its row, ``first_char``/``length`` the span of that row, and
    ``prev_first`` the first character of the row before it.
    """

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


def locate_coord(buffer: TextBuffer, x: float, y: float) -> int:
    """Return the character index nearest to the display position ``(x, y)``."""
    n = len(buffer)
    base_y = 0.0
    i = 0
    row = TextRow()

    # Find the row that straddles y.
    while i < n:
        row = buffer.layout_row(i)
        if row.num_chars <= 0:
            return n
        if i == 0 and y < base_y + row.ymin:
            return 0
        if y < base_y + row.ymax:
            break
        i += row.num_chars
        base_y += row.baseline_y_delta

    if i >= n:
        return n

    if x < row.x0:
        return i

    if x < row.x1:
        prev_x = row.x0
        for k in range(row.num_chars):
            w = buffer.char_width(i, k)
            if x < prev_x + w:
                return i + k if x < prev_x + w / 2 else i + k + 1
            prev_x += w

    last = i + row.num_chars - 1
    if buffer.char_at(last) == NEWLINE:
        return last
    return i + row.num_chars


def find_charpos(buffer: TextBuffer, n: int, single_line: bool) -> FindState:
    """Locate character ``n`` in the layout, remembering the previous row."""
    z = len(buffer)

    if n == z and single_line:
        row = buffer.layout_row(0)
        return FindState(
            x=row.x1,
            y=0.0,
            height=row.ymax - row.ymin,
            first_char=0,
            length=z,
            prev_first=0,
        )

    find = FindState()
    prev_start = 0
    i = 0
    while True:
        row = buffer.layout_row(i)
        if n < i + row.num_chars:
            break
        if i + row.num_chars == z and z > 0 and buffer.char_at(z - 1) != NEWLINE:
            break
        if row.num_chars <= 0:
            break
        prev_start = i
        i += row.num_chars
        find.y += row.baseline_y_delta
        if i == z:
            break

    first = i
    find.first_char = first
    find.length = row.num_chars
    find.height = row.ymax - row.ymin
    find.prev_first = prev_start

    find.x = row.x0
    offset = 0
    while first + offset < n:
        find.x += buffer.char_width(first, offset)
        offset += 1
    return find


def is_word_boundary(buffer: TextBuffer, index: int) -> bool:
    """Return True if a word starts at ``index`` (or ``index`` is the start)."""
    if index <= 0:
        return True
    return is_space(buffer.char_at(index - 1)) and not is_space(buffer.char_at(index))


def move_word_left(buffer: TextBuffer, cursor: int) -> int:
    """Return the start of the word before ``cursor``."""
    c = cursor - 1
    while c >= 0 and not is_word_boundary(buffer, c):
        c -= 1
    return max(c, 0)


def move_word_right(buffer: TextBuffer, cursor: int) -> int:
    """Return the start of the word after ``cursor``, or the end of the text."""
    length = len(buffer)
    c = cursor + 1
    while c < length and not is_word_boundary(buffer, c):
        c += 1
    return min(c, length)