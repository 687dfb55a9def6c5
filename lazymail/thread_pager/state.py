from __future__ import annotations

from dataclasses import dataclass, field

from ..pager import MessagePager
from ..scrollable import Scrollable
from ..thread_model.types import ThreadLine

HISTORY_LIMIT = 100


@dataclass
class History:
    """Prompt history, most recent entry first."""

    entries: list[str] = field(default_factory=list)

    def add_nodup(self, entry: str) -> None:
        if entry in self.entries:
            self.entries.remove(entry)
        self.entries.insert(0, entry)
        del self.entries[HISTORY_LIMIT:]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class ThreadPagerInfo:
    thread_id: str
    scrollable: Scrollable[ThreadLine]
    num_thread_rows: int
    pager: MessagePager
    num_pager_rows: int
    search: str | None = None
    search_history: History = field(default_factory=History)
    tag_history: History = field(default_factory=History)
    need_refresh_index: bool = False
    cols: int = 80

    @property
    def num_lines(self) -> int:
        return self.scrollable.num_lines

    def cursor_line(self) -> ThreadLine | None:
        found = self.scrollable.get_cursor_line()
        return None if found is None else found[1]
