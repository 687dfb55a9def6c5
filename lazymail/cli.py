"""Command-line front door for lazymail.

Parses CLI options, configures logging, and builds the notmuch client.
Then either prints the thread lines (``--render``) or opens the interactive
thread pager.
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import shutil
import sys

from . import config
from .notmuch import NotmuchClient, NotmuchError
from .runtime import open_thread_pager
from .runtime.app import SessionOptions
from .runtime.panel import Panel
from .thread_model import build_thread_lines, draw_thread_line, filter_unwanted_messages, local_nowish
from .ui_theme import UITheme, available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # The TUI owns the terminal; stay silent unless asked.
        logging.disable(logging.CRITICAL)
        return

    log_dir = config.CONFIG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / "debug.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def render_thread_lines(store, thread_id: str, *, theme: UITheme, ascii_graphics: bool, max_cols: int) -> str:
    """Render every thread line of ``thread_id`` the way the thread region draws them."""
    messages = filter_unwanted_messages(store.show_thread(thread_id))
    out: list[str] = []
    panel = Panel(max_cols)
    for line in build_thread_lines(messages, local_nowish()):
        panel.erase()
        draw_thread_line(panel, line, False, theme, ascii_graphics=ascii_graphics)
        out.append(panel.render())
        out.append("\n")
    return "".join(out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read a notmuch thread in a terminal thread pager.")
    parser.add_argument("thread", help="Thread id (with or without the thread: prefix).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--ascii", action="store_true", help="Draw the thread tree with ASCII characters.")
    parser.add_argument("--notmuch", metavar="CMD", default=None, help="notmuch command to run.")
    parser.add_argument("--render", action="store_true", help="Print the thread lines and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument("--debug", action="store_true", help="Write a debug log to the config directory.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and show one thread."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.debug)

    store = NotmuchClient(args.notmuch or config.load_notmuch_command())
    ascii_graphics = args.ascii or config.load_ascii_graphics()
    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=args.no_color)

    if args.render:
        max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
        try:
            text = render_thread_lines(
                store,
                args.thread,
                theme=theme,
                ascii_graphics=ascii_graphics,
                max_cols=max_cols,
            )
        except NotmuchError as exc:
            raise SystemExit(f"lazymail: {exc}") from exc
        sys.stdout.write(text)
        return

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise SystemExit("lazymail: an interactive terminal is required (use --render to print).")

    options = SessionOptions(
        theme=theme,
        ascii_graphics=ascii_graphics,
        open_command=config.load_open_command(),
        part_filters=config.load_part_filters(),
        colour=not args.no_color,
    )
    try:
        open_thread_pager(store, args.thread, options)
    except NotmuchError as exc:
        logger.error("cannot open thread %s: %s", args.thread, exc)
        raise SystemExit(f"lazymail: {exc}") from exc


if __name__ == "__main__":
    main()
