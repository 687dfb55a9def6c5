"""Full-screen frame: main panels, a status bar, and the message line.

The main area is ``rows - 2`` single-row panels. Frames are composed as one
string and written with ``os.write``; the terminal size is polled while
waiting for keys so a size change surfaces as a ``RESIZE`` token.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable

from ..input.reader import read_key
from ..message_update import MessageUpdate, UpdateKind
from ..ui_theme import UITheme
from .panel import Panel

RESIZE_POLL_MS = 250
CHROME_ROWS = 2


def terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return size.lines, size.columns


class Screen:
    def __init__(
        self,
        theme: UITheme,
        *,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
        size: tuple[int, int] | None = None,
        size_probe: Callable[[], tuple[int, int]] = terminal_size,
    ) -> None:
        self.theme = theme
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._size_probe = size_probe
        self.rows, self.cols = size if size is not None else size_probe()
        self.main_panels = [Panel(self.cols) for _ in range(max(0, self.rows - CHROME_ROWS))]
        self.bar_panel = Panel(self.cols)
        self.message_panel = Panel(self.cols)
        self.bar_text = ""
        self._message = MessageUpdate.clear()
        self._pending_keys: list[str] = []

    @property
    def main_rows(self) -> int:
        return len(self.main_panels)

    def resized(self) -> Screen:
        """Return a screen matching the current terminal size.

        Queued keys, the message line and the bar text carry over.
        """
        screen = Screen(
            self.theme,
            stdin_fd=self.stdin_fd,
            stdout_fd=self.stdout_fd,
            size_probe=self._size_probe,
        )
        screen.bar_text = self.bar_text
        screen._message = self._message
        screen._pending_keys = self._pending_keys
        return screen

    # Message line

    def update_message(self, update: MessageUpdate) -> None:
        if update.kind is UpdateKind.NO_CHANGE:
            return
        self._message = update

    @property
    def message(self) -> MessageUpdate:
        return self._message

    def _draw_message_line(self) -> None:
        panel = self.message_panel
        panel.erase()
        update = self._message
        if update.kind is UpdateKind.WARNING:
            panel.attr_set(self.theme.warning)
        elif update.kind is UpdateKind.INFO:
            panel.attr_set(self.theme.info)
        panel.addstr(update.text)

    def draw_prompt(self, prompt: str, text: str, cursor: int) -> None:
        """Draw an input prompt on the message line and flush."""
        panel = self.message_panel
        panel.erase()
        panel.attr_set(self.theme.prompt)
        panel.addstr(prompt)
        panel.attr_set(self.theme.reset)
        panel.addstr(text[:cursor])
        panel.attr_set(self.theme.bar or "\033[7m")
        panel.addstr(text[cursor : cursor + 1] or " ")
        panel.attr_set(self.theme.reset)
        panel.addstr(text[cursor + 1 :])
        self.flush(draw_message=False)

    def _draw_bar(self) -> None:
        panel = self.bar_panel
        panel.erase()
        panel.attr_set(self.theme.bar)
        panel.addstr(self.bar_text)
        panel.fill()

    # Output

    def compose(self, *, draw_message: bool = True) -> str:
        self._draw_bar()
        if draw_message:
            self._draw_message_line()
        rows = [panel.render() for panel in (*self.main_panels, self.bar_panel, self.message_panel)]
        return "\033[H\033[J" + "\r\n".join(rows)

    def flush(self, *, draw_message: bool = True) -> None:
        frame = self.compose(draw_message=draw_message)
        if self.stdout_fd is not None:
            os.write(self.stdout_fd, frame.encode("utf-8", errors="replace"))

    def update_message_immed(self, update: MessageUpdate) -> None:
        self.update_message(update)
        self.flush()

    # Input

    def push_key(self, key: str, *, front: bool = False) -> None:
        """Queue a key for ``get_keycode``; ``front`` makes it the very next one."""
        if front:
            self._pending_keys.insert(0, key)
        else:
            self._pending_keys.append(key)

    def get_keycode(self) -> str:
        if self._pending_keys:
            return self._pending_keys.pop(0)
        if self.stdin_fd is None:
            return ""
        while True:
            if self._size_probe() != (self.rows, self.cols):
                return "RESIZE"
            key = read_key(self.stdin_fd, timeout_ms=RESIZE_POLL_MS)
            if key:
                return key
