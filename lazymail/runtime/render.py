"""Composes the thread pager into the screen's main panels."""

from __future__ import annotations

from collections.abc import Sequence

from ..thread_model.rendering import draw_separator, draw_thread_line
from ..thread_pager.state import ThreadPagerInfo
from ..ui_theme import UITheme
from .panel import Panel


def split_panels(
    panels: Sequence[Panel],
    num_thread_rows: int,
) -> tuple[list[Panel], Panel | None, list[Panel]]:
    """Return ``(thread_panels, separator_panel, pager_panels)``."""
    thread_panels = list(panels[:num_thread_rows])
    rest = list(panels[num_thread_rows:])
    if not rest:
        return thread_panels, None, []
    return thread_panels, rest[0], rest[1:]


def thread_bar_text(info: ThreadPagerInfo) -> str:
    first = info.scrollable.get_line(0)
    subject = first.message.headers.subject if first is not None else ""
    return f" {subject} ({info.num_lines} messages)" if subject else f" ({info.num_lines} messages)"


def draw_thread_pager(
    panels: Sequence[Panel],
    info: ThreadPagerInfo,
    theme: UITheme,
    *,
    cols: int,
    ascii_graphics: bool = False,
) -> None:
    thread_panels, separator, pager_panels = split_panels(panels, info.num_thread_rows)
    info.scrollable.draw(
        thread_panels,
        lambda panel, line, is_cursor: draw_thread_line(
            panel, line, is_cursor, theme, ascii_graphics=ascii_graphics
        ),
    )
    if separator is not None:
        draw_separator(separator, cols, theme)
    info.pager.draw(pager_panels, theme)
