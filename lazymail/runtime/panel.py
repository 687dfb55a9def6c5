"""Single-row drawing surfaces.

A ``Panel`` is one screen row of fixed width. Text written past the right
edge is dropped, attributes are raw SGR strings from the active theme, and
``render`` yields the ANSI text for the frame writer.
"""

from __future__ import annotations

from ..ansi import clip_ansi_line, display_width, pad_to_width, sanitize_terminal_text


class Panel:
    """Fixed-width row buffer with a current attribute."""

    def __init__(self, width: int) -> None:
        self.width = max(0, width)
        self._parts: list[str] = []
        self._col = 0
        self._attr = ""

    @property
    def col(self) -> int:
        return self._col

    def erase(self) -> None:
        self._parts = []
        self._col = 0
        self._attr = ""

    def attr_set(self, attr: str) -> None:
        """Switch the attribute for subsequent text (replaces, does not combine)."""
        if attr == self._attr:
            return
        self._attr = attr
        self._parts.append("\033[0m" + attr if attr or self._parts else attr)

    def addstr(self, text: str) -> None:
        remaining = self.width - self._col
        if remaining <= 0 or not text:
            return
        clipped = clip_ansi_line(sanitize_terminal_text(text), remaining)
        self._parts.append(clipped)
        self._col += display_width(clipped)

    def addstr_fixed(self, width: int, text: str, pad: str = " ") -> None:
        """Write ``text`` clipped or padded to exactly ``width`` columns."""
        self.addstr(pad_to_width(sanitize_terminal_text(text), width, pad))

    def addstr_ansi(self, text: str) -> None:
        """Write text that already carries its own SGR sequences."""
        remaining = self.width - self._col
        if remaining <= 0 or not text:
            return
        clipped = clip_ansi_line(text, remaining)
        self._parts.append(clipped)
        self._col += display_width(clipped)
        if "\033" in clipped:
            self._parts.append("\033[0m" + self._attr)

    def hline(self, ch: str, count: int) -> None:
        self.addstr(ch * max(0, count))

    def fill(self) -> None:
        """Pad the rest of the row with spaces in the current attribute."""
        self.addstr(" " * (self.width - self._col))

    def text(self) -> str:
        """Return the row without escape sequences (for tests and --render)."""
        from ..ansi import ANSI_ESCAPE_RE

        return ANSI_ESCAPE_RE.sub("", "".join(self._parts))

    def render(self) -> str:
        out = "".join(self._parts)
        if "\033" in out:
            out += "\033[0m"
        return out
