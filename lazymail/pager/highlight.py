"""Pygments colouring for patch attachments."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer

DIFF_CONTENT_TYPES = frozenset({"text/x-diff", "text/x-patch", "text/x-patch-unified"})
DIFF_SUFFIXES = (".diff", ".patch")

_FORMATTER = TerminalFormatter()
_LEXER = DiffLexer()


def is_diff_part(content_type: str, filename: str | None = None) -> bool:
    if content_type.lower() in DIFF_CONTENT_TYPES:
        return True
    return bool(filename) and filename.lower().endswith(DIFF_SUFFIXES)


def colorize_diff(text: str) -> list[str] | None:
    """Return ANSI-coloured lines for a diff, or ``None`` when highlighting fails."""
    try:
        rendered = highlight(text, _LEXER, _FORMATTER)
    except Exception:
        return None
    lines = rendered.splitlines()
    # Pygments appends a newline; drop a trailing empty line it may introduce.
    expected = len(text.splitlines())
    if len(lines) > expected:
        lines = lines[:expected]
    return lines
