"""Row allocation between the thread region and the pager region."""

from __future__ import annotations

MAX_THREAD_LINES = 8
SEPARATOR_ROWS = 1
EXTRA_ROWS = SEPARATOR_ROWS + 2


def compute_num_rows(rows: int, num_thread_lines: int) -> tuple[int, int]:
    """Return ``(thread_rows, pager_rows)`` for ``rows`` usable screen rows.

    The thread region takes a third of the space after the separator and
    chrome rows, at least one row, never more rows than lines and never more
    than ``MAX_THREAD_LINES``. The pager gets what is left after the separator.
    """
    thread_rows = max(1, (rows - EXTRA_ROWS) // 3)
    thread_rows = min(thread_rows, num_thread_lines)
    thread_rows = min(thread_rows, MAX_THREAD_LINES)
    pager_rows = max(0, rows - thread_rows - SEPARATOR_ROWS)
    return thread_rows, pager_rows
