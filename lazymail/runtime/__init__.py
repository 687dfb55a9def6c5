"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (`open_thread_pager`)
and the event loop used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import LoopContext, LoopSettings


def open_thread_pager(*args, **kwargs):
    """Lazily import session entrypoint so importing the package stays free of termios."""
    from .app import open_thread_pager as _open_thread_pager

    return _open_thread_pager(*args, **kwargs)


def run_thread_pager_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_thread_pager_loop as _run_thread_pager_loop

    return _run_thread_pager_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"LoopContext", "LoopSettings"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "open_thread_pager",
    "LoopContext",
    "LoopSettings",
    "run_thread_pager_loop",
]
