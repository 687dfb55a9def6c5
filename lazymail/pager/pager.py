"""Message pager over the bodies of a thread.

Owns a ``Scrollable`` of pager lines (no cursor; only ``top`` matters) and an
optional highlight on a message start, a part heading, or a URL. Movement
methods return a ``MessageUpdate`` for the status line.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..message_update import MessageUpdate
from ..scrollable import Scrollable
from ..thread_model.types import Message, Part
from ..ui_theme import UITheme
from .lines import LineKind, PagerLine, build_pager_lines


class SearchKind(Enum):
    NEW = "new"
    CONTINUE = "continue"


@dataclass(frozen=True)
class _Highlight:
    line: int
    url: int | None = None


class MessagePager:
    """Flat view of every message in a thread."""

    def __init__(self, messages: Sequence[Message], cols: int, *, colour: bool = True) -> None:
        self._scrollable: Scrollable[PagerLine] = Scrollable(build_pager_lines(messages, cols, colour=colour))
        self._starts: list[int] = [
            index for index, line in enumerate(self._scrollable.lines) if line.starts_message
        ]
        self._highlight: _Highlight | None = None

    @property
    def top(self) -> int:
        return self._scrollable.top

    @property
    def num_lines(self) -> int:
        return self._scrollable.num_lines

    @property
    def lines(self) -> Sequence[PagerLine]:
        return self._scrollable.lines

    def _set_top(self, top: int) -> None:
        self._scrollable.top = max(0, top)

    def _message_start(self, index: int) -> int | None:
        for start in reversed(self._starts):
            if start <= index:
                return start
        return None

    # Queries

    def get_top_message(self) -> Message | None:
        line = self._scrollable.get_line(self.top)
        return None if line is None else line.message

    def get_top_offset(self) -> int | None:
        """Rows between the start of the top message and the top of the view."""
        start = self._message_start(self.top)
        if start is None or self._scrollable.get_line(self.top) is None:
            return None
        return self.top - start

    def get_highlighted_part(self) -> Part | None:
        if self._highlight is None or self._highlight.url is not None:
            return None
        line = self._scrollable.get_line(self._highlight.line)
        if line is None:
            return None
        if line.part is not None:
            return line.part
        if line.starts_message:
            return Part(message_id=line.message_id, part_id=0, content_type="message/rfc822")
        return None

    def get_highlighted_url(self) -> str | None:
        if self._highlight is None or self._highlight.url is None:
            return None
        line = self._scrollable.get_line(self._highlight.line)
        if line is None:
            return None
        return line.url_text(self._highlight.url)

    # Movement

    def next_message(self) -> MessageUpdate:
        for start in self._starts:
            if start > self.top:
                self._set_top(start)
                return MessageUpdate.clear()
        return MessageUpdate.warning("No next message.")

    def prev_message(self) -> MessageUpdate:
        for start in reversed(self._starts):
            if start < self.top:
                self._set_top(start)
                return MessageUpdate.clear()
        return MessageUpdate.warning("No previous message.")

    def scroll(self, num_rows: int, delta: int) -> MessageUpdate:
        if self._scrollable.scroll(num_rows, delta):
            return MessageUpdate.warning("Top of thread." if delta < 0 else "Bottom of thread.")
        return MessageUpdate.clear()

    def scroll_but_stop_at_message(self, num_rows: int, delta: int) -> MessageUpdate:
        """Scroll by ``delta`` but never past the start of another message."""
        top0 = self.top
        if delta > 0:
            for start in self._starts:
                if top0 < start <= top0 + delta:
                    self._set_top(start)
                    return MessageUpdate.clear()
        elif delta < 0:
            for start in reversed(self._starts):
                if top0 + delta <= start < top0:
                    self._set_top(start)
                    return MessageUpdate.clear()
        return self.scroll(num_rows, delta)

    def skip_to_message(self, message_id: str) -> None:
        for start in self._starts:
            if self._scrollable.lines[start].message_id == message_id:
                self._set_top(start)
                return

    def skip_to_search(self, num_rows: int, kind: SearchKind, search: str) -> MessageUpdate:
        """Move the view to the next line containing ``search`` (case-insensitive)."""
        needle = search.lower()
        start = self.top if kind is SearchKind.NEW else self.top + 1
        found = self._scrollable.search_forward(lambda line: needle in line.search_text().lower(), start)
        if found is None:
            return MessageUpdate.warning("Not found.")
        index, _line = found
        self._set_top(index)
        return MessageUpdate.clear()

    def skip_quoted_text(self) -> MessageUpdate:
        """Jump past the next block of quoted lines at or below the top."""
        found = self._scrollable.search_forward(lambda line: line.is_quoted, self.top)
        if found is not None:
            after = self._scrollable.search_forward(lambda line: not line.is_quoted, found[0])
            if after is not None:
                self._set_top(after[0])
                return MessageUpdate.clear()
        return MessageUpdate.warning("No quoted text.")

    def goto_first_message(self) -> None:
        self._set_top(0)

    def goto_end(self, num_rows: int) -> None:
        self._set_top(self.num_lines - num_rows)

    # Highlighting

    def _reveal(self, num_rows: int, index: int) -> None:
        if index < self.top or index >= self.top + max(1, num_rows):
            self._set_top(index)

    def _highlight_start(self, num_rows: int) -> int:
        current = self._highlight
        if current is not None and self.top <= current.line < self.top + num_rows:
            return current.line
        return self.top

    def highlight_part(self, num_rows: int) -> MessageUpdate:
        """Highlight the next message start or part heading."""
        start = self._highlight_start(num_rows)
        if self._highlight is not None and self._highlight.line == start and self._highlight.url is None:
            start += 1
        found = self._scrollable.search_forward(
            lambda line: line.starts_message or line.kind is LineKind.PART, start
        )
        if found is None:
            self._highlight = None
            return MessageUpdate.warning("No more attachments.")
        index, line = found
        self._highlight = _Highlight(index)
        self._reveal(num_rows, index)
        if line.part is None:
            return MessageUpdate.info("Message highlighted.")
        return MessageUpdate.clear()

    def highlight_url(self, num_rows: int) -> MessageUpdate:
        """Highlight the next URL after the current one."""
        start = self._highlight_start(num_rows)
        current = self._highlight
        first_url = 0
        if current is not None and current.line == start and current.url is not None:
            first_url = current.url + 1
        for index in range(start, self.num_lines):
            line = self._scrollable.lines[index]
            begin = first_url if index == start else 0
            if begin < len(line.urls):
                self._highlight = _Highlight(index, begin)
                self._reveal(num_rows, index)
                return MessageUpdate.clear()
        self._highlight = None
        return MessageUpdate.warning("No more URLs.")

    # Drawing

    def draw(self, panels, theme: UITheme) -> None:
        highlight = self._highlight
        rows = {id(panel): row for row, panel in enumerate(panels)}

        def draw_line(panel, line: PagerLine, _is_cursor: bool) -> None:
            index = self.top + rows[id(panel)]
            is_highlight = highlight is not None and highlight.line == index
            _draw_pager_line(panel, line, theme, highlight if is_highlight else None)

        self._scrollable.draw(panels, draw_line)


def _draw_pager_line(panel, line: PagerLine, theme: UITheme, highlight: _Highlight | None) -> None:
    whole = highlight is not None and highlight.url is None
    if line.kind is LineKind.HEADER:
        panel.attr_set(theme.pager_highlight if whole else theme.pager_header)
        panel.addstr(f"{line.header_name}: ")
        if not whole:
            panel.attr_set(theme.reset)
        panel.addstr(line.text)
        return
    if line.kind is LineKind.PART:
        panel.attr_set(theme.pager_highlight if whole else theme.pager_part)
        panel.addstr(line.text)
        return
    if line.kind is LineKind.BLANK:
        return

    base_attr = theme.pager_quote if line.is_quoted else theme.reset
    if highlight is not None and highlight.url is not None:
        start, end = line.urls[highlight.url]
        panel.attr_set(base_attr)
        panel.addstr(line.text[:start])
        panel.attr_set(theme.pager_highlight)
        panel.addstr(line.text[start:end])
        panel.attr_set(base_attr)
        panel.addstr(line.text[end:])
        return
    if line.styled is not None and theme.reset:
        panel.addstr_ansi(line.styled)
        return
    panel.attr_set(base_attr)
    panel.addstr(line.text)
