"""Thread-line drawing for the thread region."""

from __future__ import annotations

from typing import Protocol

from ..ui_theme import UITheme
from .reldate import RELDATE_WIDTH
from .types import Graphic, ThreadLine

STANDARD_TAGS = frozenset(
    {
        "attachment",
        "deleted",
        "draft",
        "encrypted",
        "flagged",
        "new",
        "replied",
        "sent",
        "signed",
        "unread",
    }
)

BOX_GRAPHICS = {
    Graphic.BLANK: " ",
    Graphic.VERT: "│",
    Graphic.TEE: "├",
    Graphic.ELL: "└",
}

ASCII_GRAPHICS = {
    Graphic.BLANK: " ",
    Graphic.VERT: "|",
    Graphic.TEE: "+",
    Graphic.ELL: "`",
}


class LinePanel(Protocol):
    def erase(self) -> None: ...

    def attr_set(self, attr: str) -> None: ...

    def addstr(self, text: str) -> None: ...

    def addstr_fixed(self, width: int, text: str, pad: str = " ") -> None: ...

    def hline(self, ch: str, count: int) -> None: ...


def graphic_to_char(graphic: Graphic, *, ascii_graphics: bool = False) -> str:
    table = ASCII_GRAPHICS if ascii_graphics else BOX_GRAPHICS
    return table[graphic]


def nonstandard_tags(tags) -> list[str]:
    """Return tags worth showing next to the subject, sorted."""
    return sorted(tag for tag in tags if tag not in STANDARD_TAGS)


def draw_thread_line(
    panel: LinePanel,
    line: ThreadLine,
    is_cursor: bool,
    theme: UITheme,
    *,
    ascii_graphics: bool = False,
) -> None:
    """Draw one thread line.

    Layout: relative date, ``n``/``r``/``d`` flag columns, ``!`` for flagged,
    tree graphics, ``>``, sender, then ``. subject`` when not suppressed and
    any non-standard tags. The cursor row keeps the cursor attribute for
    everything up to the tags.
    """

    def cond_attr_set(attr: str) -> None:
        if not is_cursor:
            panel.attr_set(attr)

    panel.attr_set(theme.cursor if is_cursor else theme.reldate)
    panel.addstr_fixed(RELDATE_WIDTH, line.reldate, " ")
    cond_attr_set(theme.reset)
    panel.addstr("n" if line.unread else " ")
    panel.addstr("r" if line.replied else " ")
    panel.addstr("d" if line.deleted else " ")
    if line.flagged:
        cond_attr_set(theme.flag_flagged)
        panel.addstr("! ")
    else:
        panel.addstr("  ")

    cond_attr_set(theme.tree_graphics)
    panel.addstr("".join(graphic_to_char(g, ascii_graphics=ascii_graphics) for g in line.graphics))
    panel.addstr("> ")

    cond_attr_set(theme.sender_unread if line.unread else theme.reset)
    panel.addstr(line.clean_from)
    if line.subject is not None:
        panel.addstr(". ")
        cond_attr_set(theme.subject)
        panel.addstr(line.subject)

    panel.attr_set(theme.nonstandard_tag)
    for tag in nonstandard_tags(line.curr_tags):
        panel.addstr(" ")
        panel.addstr(tag)


def draw_separator(panel: LinePanel, cols: int, theme: UITheme) -> None:
    panel.erase()
    panel.attr_set(theme.separator)
    panel.hline("-", cols)
