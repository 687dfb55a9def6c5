"""One-line text entry on the message line."""

from __future__ import annotations

from ..thread_pager.state import History
from .screen import Screen

ACCEPT_KEYS = frozenset({"ENTER_CR", "ENTER_LF"})
CANCEL_KEYS = frozenset({"ESC", "CTRL_G"})


def text_entry(
    screen: Screen,
    prompt: str,
    history: History | None = None,
    initial: str = "",
) -> str | None:
    """Edit a line of text; returns the text on Enter or ``None`` when cancelled.

    Up/Down walk ``history`` (most recent first); the line being typed is
    restored when walking back past the newest entry.
    """
    entries = history.entries if history is not None else []
    text = initial
    cursor = len(text)
    history_pos = -1
    draft = text

    while True:
        screen.draw_prompt(prompt, text, cursor)
        key = screen.get_keycode()
        if key in ACCEPT_KEYS:
            return text
        if key in CANCEL_KEYS:
            return None
        if key == "BACKSPACE":
            if cursor > 0:
                text = text[: cursor - 1] + text[cursor:]
                cursor -= 1
        elif key in {"DELETE", "CTRL_D"}:
            text = text[:cursor] + text[cursor + 1 :]
        elif key == "LEFT":
            cursor = max(0, cursor - 1)
        elif key == "RIGHT":
            cursor = min(len(text), cursor + 1)
        elif key in {"HOME", "CTRL_A"}:
            cursor = 0
        elif key in {"END", "CTRL_E"}:
            cursor = len(text)
        elif key == "CTRL_U":
            text = text[cursor:]
            cursor = 0
        elif key == "CTRL_K":
            text = text[:cursor]
        elif key == "UP":
            if history_pos + 1 < len(entries):
                if history_pos == -1:
                    draft = text
                history_pos += 1
                text = entries[history_pos]
                cursor = len(text)
        elif key == "DOWN":
            if history_pos >= 0:
                history_pos -= 1
                text = draft if history_pos == -1 else entries[history_pos]
                cursor = len(text)
        elif key == "TAB":
            continue
        elif len(key) == 1 and key.isprintable():
            text = text[:cursor] + key + text[cursor:]
            cursor += 1
