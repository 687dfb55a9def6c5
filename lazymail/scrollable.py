"""Generic scrollable list with an optional cursor.

Owns the viewport ``top`` offset, cursor placement, and predicate searches.
Drawing is delegated to a per-line callback so any line type can be listed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")


class ScrollableError(RuntimeError):
    """Raised when a cursor-only operation is attempted without a cursor."""


class RowPanel(Protocol):
    """Minimal row surface needed by ``Scrollable.draw``."""

    def erase(self) -> None: ...


def _clamp(low: int, value: int, high: int) -> int:
    if value < low:
        return low
    if value > high:
        return high
    return value


class Scrollable(Generic[T]):
    """Ordered lines plus viewport top and optional cursor index."""

    def __init__(self, lines: Iterable[T], cursor: int | None = None) -> None:
        self._lines: list[T] = list(lines)
        self.top = 0
        if cursor is not None and not 0 <= cursor < len(self._lines):
            cursor = None
        self._cursor = cursor

    @classmethod
    def with_cursor(cls, lines: Iterable[T], cursor: int = 0) -> Scrollable[T]:
        """Build a list with the cursor on ``cursor`` (dropped for empty lists)."""
        return cls(lines, cursor=cursor)

    @property
    def lines(self) -> Sequence[T]:
        return tuple(self._lines)

    @property
    def num_lines(self) -> int:
        return len(self._lines)

    @property
    def cursor(self) -> int | None:
        return self._cursor

    def get_line(self, index: int) -> T | None:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def get_cursor_line(self) -> tuple[int, T] | None:
        """Return ``(cursor, line)`` or ``None`` when no cursor is set."""
        if self._cursor is None:
            return None
        line = self.get_line(self._cursor)
        if line is None:
            return None
        return self._cursor, line

    def set_cursor_centred(self, cursor: int, num_rows: int) -> None:
        """Place cursor and centre it; ``top`` is not clamped against the list end."""
        self.top = max(0, cursor - num_rows // 2)
        self._cursor = cursor

    def set_line(self, index: int, line: T) -> None:
        if not 0 <= index < len(self._lines):
            raise ScrollableError(f"line index out of range: {index}")
        self._lines[index] = line

    def set_cursor_line(self, line: T) -> None:
        """Replace the line under the cursor."""
        if self._cursor is None or not 0 <= self._cursor < len(self._lines):
            raise ScrollableError("set_cursor_line called without a cursor")
        self._lines[self._cursor] = line

    def map_lines(self, fn: Callable[[T], T]) -> None:
        self._lines = [fn(line) for line in self._lines]

    def scroll(self, num_rows: int, delta: int) -> bool:
        """Move the viewport by ``delta`` rows and return whether a limit was hit.

        The upper bound never drops below the current ``top`` so a smaller
        ``num_rows`` does not snap an already-scrolled view back up.
        """
        top0 = self.top
        top_limit = max(max(0, len(self._lines) - num_rows), top0)
        self.top = _clamp(0, top0 + delta, top_limit)
        return self.top == top0 and delta != 0

    def move_cursor(self, num_rows: int, delta: int) -> bool:
        """Step the cursor, scrolling only as far as needed to keep it visible."""
        if self._cursor is None:
            return False
        cursor0 = self._cursor
        cursor = _clamp(0, cursor0 + delta, len(self._lines) - 1)
        if cursor == cursor0:
            return True
        if cursor < self.top:
            self.top = max(cursor - num_rows + 1, 0)
        elif self.top + num_rows - 1 < cursor:
            self.top = cursor
        self._cursor = cursor
        return False

    def search_forward(self, pred: Callable[[T], bool], start: int) -> tuple[int, T] | None:
        """Return the first ``(index, line)`` at or after ``start`` matching ``pred``."""
        for index in range(max(0, start), len(self._lines)):
            line = self._lines[index]
            if pred(line):
                return index, line
        return None

    def search_reverse(self, pred: Callable[[T], bool], start: int) -> int | None:
        """Return the nearest index before ``start`` whose line matches ``pred``."""
        for index in range(min(start, len(self._lines)) - 1, -1, -1):
            if pred(self._lines[index]):
                return index
        return None

    def draw(
        self,
        panels: Sequence[RowPanel],
        draw_line: Callable[[RowPanel, T, bool], None],
    ) -> None:
        """Draw one line per panel starting at ``top``; extra panels stay blank."""
        cursor_row = -1 if self._cursor is None else self._cursor - self.top
        for row, panel in enumerate(panels):
            panel.erase()
            index = self.top + row
            if 0 <= index < len(self._lines):
                draw_line(panel, self._lines[index], row == cursor_row)
