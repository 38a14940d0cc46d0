"""Single-line text buffer with emacs-style editing.

Cursor positions count characters (code points), never encoded bytes, so
multi-byte input keeps the cursor aligned with edit points. The kill-ring has
one slot: every non-empty kill overwrites it and plain deletes leave it alone.
"""

from __future__ import annotations


class EditBuffer:
    """Editable text plus cursor and a one-slot kill-ring."""

    def __init__(self, text: str = "") -> None:
        self._chars: list[str] = list(text)
        self._cursor = len(self._chars)
        self.kill_ring = ""

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def cursor(self) -> int:
        return self._cursor

    @cursor.setter
    def cursor(self, value: int) -> None:
        self._cursor = max(0, min(value, len(self._chars)))

    def __len__(self) -> int:
        return len(self._chars)

    def set_text(self, text: str) -> None:
        """Replace buffer contents and place the cursor at the end."""
        self._chars = list(text)
        self._cursor = len(self._chars)

    def clear(self, kill_ring: bool = False) -> None:
        self._chars = []
        self._cursor = 0
        if kill_ring:
            self.kill_ring = ""

    def insert(self, char: str) -> None:
        self._chars.insert(self._cursor, char)
        self._cursor += 1

    def insert_text(self, text: str) -> None:
        if not text:
            return
        self._chars[self._cursor:self._cursor] = list(text)
        self._cursor += len(text)

    def delete_before(self) -> None:
        if self._cursor == 0:
            return
        del self._chars[self._cursor - 1]
        self._cursor -= 1

    def delete_after(self) -> None:
        if self._cursor >= len(self._chars):
            return
        del self._chars[self._cursor]

    def move_left(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def move_right(self) -> None:
        if self._cursor < len(self._chars):
            self._cursor += 1

    def move_to_start(self) -> None:
        self._cursor = 0

    def move_to_end(self) -> None:
        self._cursor = len(self._chars)

    def word_left_index(self) -> int:
        """Index of the start of the word at or before the cursor.

        Whitespace directly left of the cursor is skipped first.
        """
        idx = self._cursor
        while idx > 0 and self._chars[idx - 1].isspace():
            idx -= 1
        while idx > 0 and not self._chars[idx - 1].isspace():
            idx -= 1
        return idx

    def word_right_index(self) -> int:
        """Index just past the word at or after the cursor."""
        idx = self._cursor
        end = len(self._chars)
        while idx < end and self._chars[idx].isspace():
            idx += 1
        while idx < end and not self._chars[idx].isspace():
            idx += 1
        return idx

    def move_word_left(self) -> None:
        self._cursor = self.word_left_index()

    def move_word_right(self) -> None:
        self._cursor = self.word_right_index()

    def kill_range(self, start: int, end: int) -> str:
        """Remove ``[start, end)`` and store it in the kill-ring.

        Returns the removed text; an empty range changes nothing. A cursor
        inside the range lands on ``start``; one after it shifts left.
        """
        start = max(0, start)
        end = min(end, len(self._chars))
        if start >= end:
            return ""
        removed = "".join(self._chars[start:end])
        del self._chars[start:end]
        self.kill_ring = removed
        if self._cursor >= end:
            self._cursor -= end - start
        elif self._cursor > start:
            self._cursor = start
        return removed

    def kill_to_start(self) -> None:
        self.kill_range(0, self._cursor)

    def kill_to_end(self) -> None:
        self.kill_range(self._cursor, len(self._chars))

    def kill_word_backward(self) -> None:
        self.kill_range(self.word_left_index(), self._cursor)

    def kill_word_forward(self) -> None:
        self.kill_range(self._cursor, self.word_right_index())

    def yank(self) -> None:
        self.insert_text(self.kill_ring)
