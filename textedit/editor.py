"""The editing state machine: cursor, selection, keyboard and mouse input."""

from __future__ import annotations

from .buffer import NEWLINE, TextBuffer
from .keys import KeyMap
from .navigation import find_charpos, locate_coord, move_word_left, move_word_right
from .undo import UndoState


def _is_one_of(code: int, *candidates: int | None) -> bool:
    return any(candidate is not None and code == candidate for candidate in candidates)


class TextEditState:
    """Cursor, selection, insert mode and undo history of one text field.

    ``select_start`` may be greater than ``select_end``; the selection is
    empty when they are equal. ``row_count_per_page`` must be set above zero
    for page up/down to move in multi-line text.
    """

    def __init__(self, single_line: bool = False, keymap: KeyMap | None = None) -> None:
        self.keymap = keymap if keymap is not None else KeyMap()
        self.undostate = UndoState()
        self.reset(single_line)

    def reset(self, single_line: bool = False) -> None:
        """Return to the initial state, forgetting all history."""
        self.undostate.reset()
        self.cursor = 0
        self.select_start = 0
        self.select_end = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.cursor_at_end_of_line = False
        self.initialized = True
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    @property
    def selection(self) -> tuple[int, int]:
        """The selection as an ordered ``(start, end)`` pair."""
        return min(self.select_start, self.select_end), max(self.select_start, self.select_end)

    def has_selection(self) -> bool:
        """Return True if some text is selected."""
        return self.select_start != self.select_end

    def clamp(self, buffer: TextBuffer) -> None:
        """Bring cursor and selection back inside ``buffer`` after outside edits."""
        n = len(buffer)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    def sort_selection(self) -> None:
        """Order the selection so that start <= end."""
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        self.undostate.make_delete(buffer, where, length)
        buffer.delete(where, length)
        self.has_preferred_x = False

    def delete_selection(self, buffer: TextBuffer) -> None:
        """Delete the selected text, leaving the cursor where it was."""
        self.clamp(buffer)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(buffer, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(buffer, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def _move_to_first(self) -> None:
        if self.has_selection():
            self.sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self.sort_selection()
            self.clamp(buffer)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    def _row_y(self, buffer: TextBuffer, y: float) -> float:
        # A single-line field pins y to its only row so dragging keeps working
        # when the mouse leaves the text vertically.
        if self.single_line:
            return buffer.layout_row(0).ymin
        return y

    def click(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Place the cursor at a mouse-down position and clear the selection."""
        y = self._row_y(buffer, y)
        self.cursor = locate_coord(buffer, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Extend the selection to a mouse-drag position."""
        y = self._row_y(buffer, y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        position = locate_coord(buffer, x, y)
        self.cursor = self.select_end = position

    def cut(self, buffer: TextBuffer) -> bool:
        """Delete the selection; return True if there was one."""
        if self.has_selection():
            self.delete_selection(buffer)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, buffer: TextBuffer, text: str) -> bool:
        """Insert ``text`` at the cursor, replacing any selection.

        Returns False if the buffer refused the text; the selection is then
        already deleted and an undo brings it back.
        """
        self.clamp(buffer)
        self.delete_selection(buffer)
        if buffer.insert(self.cursor, text):
            self.undostate.make_insert(self.cursor, len(text))
            self.cursor += len(text)
            self.has_preferred_x = False
            return True
        return False

    def undo(self, buffer: TextBuffer) -> None:
        """Undo the latest edit."""
        position = self.undostate.undo(buffer)
        if position is not None:
            self.cursor = position
        self.has_preferred_x = False

    def redo(self, buffer: TextBuffer) -> None:
        """Redo the latest undone edit."""
        position = self.undostate.redo(buffer)
        if position is not None:
            self.cursor = position
        self.has_preferred_x = False

    def _type_char(self, buffer: TextBuffer, ch: str) -> None:
        if ch == NEWLINE and self.single_line:
            return
        if self.insert_mode and not self.has_selection() and self.cursor < len(buffer):
            self.undostate.make_replace(buffer, self.cursor, 1, 1)
            buffer.delete(self.cursor, 1)
            if buffer.insert(self.cursor, ch):
                self.cursor += 1
                self.has_preferred_x = False
        else:
            self.delete_selection(buffer)
            if buffer.insert(self.cursor, ch):
                self.undostate.make_insert(self.cursor, 1)
                self.cursor += 1
                self.has_preferred_x = False

    def _scan_row(self, buffer: TextBuffer, start: int, goal_x: float) -> None:
        row = buffer.layout_row(start)
        x = row.x0
        for offset in range(row.num_chars):
            if buffer.char_at(start + offset) == NEWLINE:
                break
            x += buffer.char_width(start, offset)
            if x > goal_x:
                break
            self.cursor += 1
        self.clamp(buffer)
        return row

    def _move_down(self, buffer: TextBuffer, shifted: bool, row_count: int) -> None:
        if shifted:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(buffer)

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            # Moving down from the last line must not jump to its end.
            if buffer.char_at(find.first_char + find.length - 1) != NEWLINE:
                break
            self.cursor = start
            row = self._scan_row(buffer, start, goal_x)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if shifted:
                self.select_end = self.cursor
            find.first_char = find.first_char + find.length
            find.length = row.num_chars

    def _move_up(self, buffer: TextBuffer, shifted: bool, row_count: int) -> None:
        if shifted:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self.cursor = find.prev_first
            self._scan_row(buffer, find.prev_first, goal_x)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if shifted:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and buffer.char_at(prev_scan - 1) != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan

    def _line_start(self, buffer: TextBuffer) -> None:
        if self.single_line:
            self.cursor = 0
            return
        while self.cursor > 0 and buffer.char_at(self.cursor - 1) != NEWLINE:
            self.cursor -= 1

    def _line_end(self, buffer: TextBuffer) -> None:
        n = len(buffer)
        if self.single_line:
            self.cursor = n
            return
        while self.cursor < n and buffer.char_at(self.cursor) != NEWLINE:
            self.cursor += 1

    def key(self, buffer: TextBuffer, key: int) -> None:
        """Apply one keyboard input, encoded as described by the key map."""
        km = self.keymap
        base = km.base(key)
        shifted = km.is_shifted(key)
        shift_bit = key & km.shift

        if km.insert is not None and key == km.insert:
            self.insert_mode = not self.insert_mode
        elif key == km.undo:
            self.undo(buffer)
        elif key == km.redo:
            self.redo(buffer)
        elif base == km.left:
            if shifted:
                self.clamp(buffer)
                self._prep_selection_at_cursor()
                if self.select_end > 0:
                    self.select_end -= 1
                self.cursor = self.select_end
            elif self.has_selection():
                self._move_to_first()
            elif self.cursor > 0:
                self.cursor -= 1
            self.has_preferred_x = False
        elif base == km.right:
            if shifted:
                self._prep_selection_at_cursor()
                self.select_end += 1
                self.clamp(buffer)
                self.cursor = self.select_end
            else:
                if self.has_selection():
                    self._move_to_last(buffer)
                else:
                    self.cursor += 1
                self.clamp(buffer)
            self.has_preferred_x = False
        elif _is_one_of(base, km.word_left):
            if shifted:
                if not self.has_selection():
                    self._prep_selection_at_cursor()
                self.cursor = move_word_left(buffer, self.cursor)
                self.select_end = self.cursor
                self.clamp(buffer)
            elif self.has_selection():
                self._move_to_first()
            else:
                self.cursor = move_word_left(buffer, self.cursor)
                self.clamp(buffer)
        elif _is_one_of(base, km.word_right):
            if shifted:
                if not self.has_selection():
                    self._prep_selection_at_cursor()
                self.cursor = move_word_right(buffer, self.cursor)
                self.select_end = self.cursor
                self.clamp(buffer)
            elif self.has_selection():
                self._move_to_last(buffer)
            else:
                self.cursor = move_word_right(buffer, self.cursor)
                self.clamp(buffer)
        elif base in (km.down, km.page_down):
            is_page = base == km.page_down
            if not is_page and self.single_line:
                # Single-line fields treat down like right.
                self.key(buffer, km.right | shift_bit)
                return
            row_count = self.row_count_per_page if is_page else 1
            self._move_down(buffer, shifted, row_count)
        elif base in (km.up, km.page_up):
            is_page = base == km.page_up
            if not is_page and self.single_line:
                self.key(buffer, km.left | shift_bit)
                return
            row_count = self.row_count_per_page if is_page else 1
            self._move_up(buffer, shifted, row_count)
        elif base == km.delete:
            if self.has_selection():
                self.delete_selection(buffer)
            elif self.cursor < len(buffer):
                self._delete(buffer, self.cursor, 1)
            self.has_preferred_x = False
        elif base == km.backspace:
            if self.has_selection():
                self.delete_selection(buffer)
            else:
                self.clamp(buffer)
                if self.cursor > 0:
                    self._delete(buffer, self.cursor - 1, 1)
                    self.cursor -= 1
            self.has_preferred_x = False
        elif _is_one_of(base, km.text_start, km.text_start2):
            if shifted:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = 0
            else:
                self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif _is_one_of(base, km.text_end, km.text_end2):
            if shifted:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = len(buffer)
            else:
                self.cursor = len(buffer)
                self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif _is_one_of(base, km.line_start, km.line_start2):
            self.clamp(buffer)
            if shifted:
                self._prep_selection_at_cursor()
                self._line_start(buffer)
                self.select_end = self.cursor
            else:
                self._move_to_first()
                self._line_start(buffer)
            self.has_preferred_x = False
        elif _is_one_of(base, km.line_end, km.line_end2):
            self.clamp(buffer)
            if shifted:
                self._prep_selection_at_cursor()
                self._line_end(buffer)
                self.select_end = self.cursor
            else:
                self._move_to_first()
                self._line_end(buffer)
            self.has_preferred_x = False
        else:
            ch = km.key_to_char(key)
            if ch is not None:
                self._type_char(buffer, ch)