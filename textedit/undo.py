"""Bounded undo/redo history for the editing state machine.

Undo records grow upward from the start of a fixed table and redo records
grow downward from its end. The characters each record needs are kept in a
fixed-size character store that is shared the same way. When space runs out
the oldest entries are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .buffer import TextBuffer

DEFAULT_STATE_COUNT = 99
DEFAULT_CHAR_COUNT = 999


@dataclass(frozen=True)
class UndoRecord:
    """One step of history.

    Applying the record deletes ``delete_length`` characters at ``where`` and
    then inserts ``insert_length`` characters taken from the character store
    at ``char_storage`` (-1 when no characters are stored).
    """

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


def _shift_storage(record: UndoRecord, amount: int) -> UndoRecord:
    if record.char_storage >= 0:
        return replace(record, char_storage=record.char_storage + amount)
    return record


class UndoState:
    """Undo and redo history with fixed record and character capacity."""

    def __init__(
        self,
        state_count: int = DEFAULT_STATE_COUNT,
        char_count: int = DEFAULT_CHAR_COUNT,
    ) -> None:
        if state_count <= 0:
            raise ValueError("state_count must be positive")
        if char_count <= 0:
            raise ValueError("char_count must be positive")
        self.state_count = state_count
        self.char_count = char_count
        self.records: list[UndoRecord] = [UndoRecord()] * state_count
        self.chars: list[str] = [""] * char_count
        self.reset()

    def reset(self) -> None:
        """Forget all undo and redo history."""
        self.undo_point = 0
        self.undo_char_point = 0
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def can_undo(self) -> bool:
        """Return True if there is a step to undo."""
        return self.undo_point > 0

    def can_redo(self) -> bool:
        """Return True if there is a step to redo."""
        return self.redo_point < self.state_count

    def flush_redo(self) -> None:
        """Drop all redo history."""
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def discard_undo(self) -> None:
        """Drop the oldest undo record and the characters it holds."""
        if self.undo_point <= 0:
            return
        first = self.records[0]
        if first.char_storage >= 0:
            n = first.insert_length
            self.undo_char_point -= n
            self.chars[: self.undo_char_point] = self.chars[n : n + self.undo_char_point]
            self.records[: self.undo_point] = [
                _shift_storage(record, -n) for record in self.records[: self.undo_point]
            ]
        self.undo_point -= 1
        self.records[: self.undo_point] = self.records[1 : 1 + self.undo_point]

    def discard_redo(self) -> None:
        """Drop the redo record at the end of the table to free space."""
        k = self.state_count - 1
        if self.redo_point > k:
            return
        last = self.records[k]
        if last.char_storage >= 0:
            n = last.insert_length
            self.redo_char_point += n
            start = self.redo_char_point
            count = self.char_count - start
            self.chars[start : start + count] = self.chars[start - n : start - n + count]
            self.records[self.redo_point : k] = [
                _shift_storage(record, n) for record in self.records[self.redo_point : k]
            ]
        move = self.state_count - self.redo_point - 1
        begin = self.redo_point
        self.records[begin + 1 : begin + 1 + move] = self.records[begin : begin + move]
        self.redo_point += 1

    def _create_record(self, numchars: int) -> int | None:
        self.flush_redo()
        if self.undo_point == self.state_count:
            self.discard_undo()
        if numchars > self.char_count:
            self.undo_point = 0
            self.undo_char_point = 0
            return None
        while self.undo_char_point + numchars > self.char_count:
            self.discard_undo()
        slot = self.undo_point
        self.undo_point += 1
        return slot

    def create_undo(self, pos: int, insert_len: int, delete_len: int) -> int | None:
        """Record a step and reserve room for ``insert_len`` characters.

        Returns the offset in :attr:`chars` where the characters to restore
        must be written, or None if there are none to write (or no room).
        Any redo history is dropped.
        """
        slot = self._create_record(insert_len)
        if slot is None:
            return None
        if insert_len == 0:
            self.records[slot] = UndoRecord(pos, 0, delete_len, -1)
            return None
        storage = self.undo_char_point
        self.records[slot] = UndoRecord(pos, insert_len, delete_len, storage)
        self.undo_char_point += insert_len
        return storage

    def _save(self, buffer: TextBuffer, storage: int | None, where: int, length: int) -> None:
        if storage is not None:
            self.chars[storage : storage + length] = [
                buffer.char_at(where + offset) for offset in range(length)
            ]

    def make_insert(self, where: int, length: int) -> None:
        """Record that ``length`` characters were inserted at ``where``."""
        self.create_undo(where, 0, length)

    def make_delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        """Record that ``length`` characters at ``where`` are about to be deleted."""
        storage = self.create_undo(where, length, 0)
        self._save(buffer, storage, where, length)

    def make_replace(
        self, buffer: TextBuffer, where: int, old_length: int, new_length: int
    ) -> None:
        """Record that ``old_length`` characters at ``where`` are about to be
        replaced by ``new_length`` new ones."""
        storage = self.create_undo(where, old_length, new_length)
        self._save(buffer, storage, where, old_length)

    def _stored_text(self, record: UndoRecord) -> str:
        start = record.char_storage
        return "".join(self.chars[start : start + record.insert_length])

    def undo(self, buffer: TextBuffer) -> int | None:
        """Undo the latest step in ``buffer``.

        Returns the cursor position after the step, or None if nothing was undone.
        """
        if self.undo_point == 0:
            return None
        u = self.records[self.undo_point - 1]
        self.records[self.redo_point - 1] = UndoRecord(
            where=u.where,
            insert_length=u.delete_length,
            delete_length=u.insert_length,
            char_storage=-1,
        )

        if u.delete_length:
            if self.undo_char_point + u.delete_length >= self.char_count:
                slot = self.redo_point - 1
                self.records[slot] = replace(self.records[slot], insert_length=0)
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self.discard_redo()
                storage = self.redo_char_point - u.delete_length
                self.redo_char_point = storage
                slot = self.redo_point - 1
                self.records[slot] = replace(self.records[slot], char_storage=storage)
                self._save(buffer, storage, u.where, u.delete_length)
            buffer.delete(u.where, u.delete_length)

        if u.insert_length:
            buffer.insert(u.where, self._stored_text(u))
            self.undo_char_point -= u.insert_length

        self.undo_point -= 1
        self.redo_point -= 1
        return u.where + u.insert_length

    def redo(self, buffer: TextBuffer) -> int | None:
        """Redo the latest undone step in ``buffer``.

        Returns the cursor position after the step, or None if nothing was redone.
        """
        if self.redo_point == self.state_count:
            return None
        r = self.records[self.redo_point]
        u = UndoRecord(
            where=r.where,
            insert_length=r.delete_length,
            delete_length=r.insert_length,
            char_storage=-1,
        )

        if r.delete_length:
            if self.undo_char_point + u.insert_length > self.redo_char_point:
                u = replace(u, insert_length=0, delete_length=0)
            else:
                storage = self.undo_char_point
                u = replace(u, char_storage=storage)
                self.undo_char_point += u.insert_length
                self._save(buffer, storage, u.where, u.insert_length)
            self.records[self.undo_point] = u
            buffer.delete(r.where, r.delete_length)
        else:
            self.records[self.undo_point] = u

        if r.insert_length:
            buffer.insert(r.where, self._stored_text(r))
            self.redo_char_point += r.insert_length

        self.undo_point += 1
        self.redo_point += 1
        return r.where + r.insert_length