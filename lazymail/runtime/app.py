"""Top-level wiring for an interactive thread pager session."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from ..thread_pager.lifecycle import create_thread_pager, showing_message
from ..thread_pager.state import History
from ..ui_theme import UITheme
from .loop import LoopContext, LoopSettings, run_thread_pager_loop
from .screen import Screen
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOptions:
    theme: UITheme
    ascii_graphics: bool = False
    open_command: str = "xdg-open"
    part_filters: dict[str, str] = field(default_factory=dict)
    colour: bool = True


def open_thread_pager(
    store,
    thread_id: str,
    options: SessionOptions,
    search_history: History | None = None,
) -> tuple[bool, History]:
    """Show ``thread_id`` until the user leaves.

    The thread is fetched before the terminal switches to raw mode so a
    ``NotmuchError`` reaches the caller with the terminal untouched. Returns
    ``(need_refresh_index, search_history)``.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    screen = Screen(options.theme, stdin_fd=stdin_fd, stdout_fd=stdout_fd)
    info, count = create_thread_pager(
        store,
        thread_id,
        screen.main_rows,
        screen.cols,
        part_filters=options.part_filters,
        colour=options.colour,
    )
    if search_history is not None:
        info.search_history = search_history
    screen.update_message(showing_message(count))

    terminal = TerminalController(stdin_fd, stdout_fd)
    context = LoopContext(
        store=store,
        suspended=terminal.suspended,
        settings=LoopSettings(
            ascii_graphics=options.ascii_graphics,
            open_command=options.open_command,
            part_filters=options.part_filters,
            colour=options.colour,
        ),
    )
    with terminal.raw_mode():
        need_refresh, history, screen = run_thread_pager_loop(screen, info, context)

    final = screen.message
    if final.is_warning:
        print(final.text, file=sys.stderr)
    logger.info("left thread %s (refresh index: %s)", thread_id, need_refresh)
    return need_refresh, history
