"""Interactive event loop for the thread pager.

Draws, reads one key, lets the controller interpret it, then carries out the
returned action: prompts, external commands, refetches, and the tag commit
on leave. Feature logic stays in ``thread_pager``; this module is wiring.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shlex
import subprocess
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..message_update import MessageUpdate
from ..notmuch.errors import NotmuchError
from ..thread_model.types import Part
from ..thread_pager.actions import (
    Leave,
    PromptOpenPart,
    PromptOpenUrl,
    PromptSavePart,
    PromptSearch,
    PromptTag,
    RefreshResults,
    Resize,
    StartReply,
)
from ..thread_pager.controller import thread_pager_input
from ..thread_pager.lifecycle import (
    apply_search,
    apply_tag_edit,
    leave_thread_pager,
    part_save_name,
    reopen_thread_pager,
    resize_thread_pager,
    showing_message,
)
from ..thread_pager.state import History, ThreadPagerInfo
from .compose import start_reply
from .prompt import text_entry
from .render import draw_thread_pager, thread_bar_text
from .screen import Screen

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoopSettings:
    ascii_graphics: bool = False
    open_command: str = "xdg-open"
    part_filters: dict[str, str] = field(default_factory=dict)
    colour: bool = True


@dataclass(frozen=True)
class LoopContext:
    """Collaborators the loop needs besides the screen and pager state."""

    store: object
    suspended: Callable[[], contextlib.AbstractContextManager]
    settings: LoopSettings = field(default_factory=LoopSettings)


def draw(screen: Screen, info: ThreadPagerInfo, settings: LoopSettings) -> None:
    draw_thread_pager(
        screen.main_panels,
        info,
        screen.theme,
        cols=screen.cols,
        ascii_graphics=settings.ascii_graphics,
    )
    screen.bar_text = thread_bar_text(info)
    screen.flush()


def _run_command(
    argv: list[str],
    suspended: Callable[[], contextlib.AbstractContextManager],
) -> MessageUpdate | None:
    """Run an external command with the TUI suspended; ``None`` on success."""
    with suspended():
        try:
            proc = subprocess.run(argv, check=False)
        except OSError as exc:
            return MessageUpdate.warning(f"Error: {exc}")
    if proc.returncode != 0:
        return MessageUpdate.warning(f"{argv[0]} returned with exit status {proc.returncode}")
    return None


def prompt_save_part(screen: Screen, context: LoopContext, part: Part) -> MessageUpdate:
    name = text_entry(screen, "Save to file: ", History(), part_save_name(part))
    if not name:
        return MessageUpdate.clear()
    path = Path(name).expanduser()
    if path.exists() or path.is_symlink():
        return MessageUpdate.warning(f"{name} already exists.")
    try:
        context.store.save_part(part.message_id, part.part_id, path)
    except NotmuchError as exc:
        return MessageUpdate.warning(str(exc))
    return MessageUpdate.info("Message saved." if part.part_id == 0 else "Attachment saved.")


def prompt_open_part(screen: Screen, context: LoopContext, part: Part) -> tuple[MessageUpdate, str | None]:
    """Open a part with a user-chosen command; returns the key that dismissed the pause."""
    command = text_entry(screen, "Open with command: ", History(), context.settings.open_command)
    if not command or not shlex.split(command):
        return MessageUpdate.clear(), None

    suffix = Path(part.filename).suffix if part.filename else ""
    fd, name = tempfile.mkstemp(prefix="lazymail-", suffix=suffix)
    os.close(fd)
    path = Path(name)
    try:
        try:
            context.store.save_part(part.message_id, part.part_id, path)
        except NotmuchError as exc:
            return MessageUpdate.warning(f"Error saving to {path}: {exc}"), None
        argv = [*shlex.split(command), str(path)]
        screen.update_message_immed(MessageUpdate.info(f"Calling {argv[0]}..."))
        failure = _run_command(argv, context.suspended)
        if failure is not None:
            return failure, None
        screen.update_message_immed(MessageUpdate.info("Press any key to continue (deletes temporary file)"))
        key = screen.get_keycode()
        return MessageUpdate.clear(), key
    finally:
        with contextlib.suppress(OSError):
            path.unlink()


def prompt_open_url(screen: Screen, context: LoopContext, url: str) -> MessageUpdate:
    command = text_entry(screen, "Open URL with command: ", History(), context.settings.open_command)
    if not command or not shlex.split(command):
        return MessageUpdate.clear()
    argv = [*shlex.split(command), url]
    screen.update_message_immed(MessageUpdate.info(f"Calling {argv[0]}..."))
    failure = _run_command(argv, context.suspended)
    return failure if failure is not None else MessageUpdate.clear()


def _reopen(screen: Screen, context: LoopContext, info: ThreadPagerInfo) -> ThreadPagerInfo:
    settings = context.settings
    try:
        info, count = reopen_thread_pager(
            info,
            context.store,
            screen.main_rows,
            screen.cols,
            part_filters=settings.part_filters,
            colour=settings.colour,
        )
    except NotmuchError as exc:
        logger.error("refreshing thread %s failed: %s", info.thread_id, exc)
        screen.update_message(MessageUpdate.warning(str(exc)))
        return info
    screen.update_message(showing_message(count))
    return info


def run_thread_pager_loop(
    screen: Screen,
    info: ThreadPagerInfo,
    context: LoopContext,
) -> tuple[bool, History, Screen]:
    """Run until the user leaves; returns ``(need_refresh_index, search_history, screen)``."""
    settings = context.settings
    while True:
        draw(screen, info, settings)
        key = screen.get_keycode()
        action, update = thread_pager_input(key, info)
        screen.update_message(update)

        if isinstance(action, Resize):
            screen = screen.resized()
            resize_thread_pager(info, screen.main_rows, screen.cols)
        elif isinstance(action, StartReply):
            reply_update = start_reply(context.store, action.message, action.kind, context.suspended)
            info.need_refresh_index = True
            info = _reopen(screen, context, info)
            screen.update_message(reply_update)
        elif isinstance(action, PromptTag):
            if info.cursor_line() is not None:
                text = text_entry(screen, "Change tags: ", info.tag_history, action.initial)
                if text is not None:
                    screen.update_message(apply_tag_edit(info, text))
        elif isinstance(action, PromptSavePart):
            screen.update_message(prompt_save_part(screen, context, action.part))
        elif isinstance(action, PromptOpenPart):
            open_update, next_key = prompt_open_part(screen, context, action.part)
            screen.update_message(open_update)
            if next_key:
                screen.push_key(next_key, front=True)
        elif isinstance(action, PromptOpenUrl):
            screen.update_message(prompt_open_url(screen, context, action.url))
        elif isinstance(action, PromptSearch):
            text = text_entry(screen, "Search for: ", info.search_history)
            if text is not None:
                screen.update_message(apply_search(info, text))
        elif isinstance(action, RefreshResults):
            info = _reopen(screen, context, info)
        elif isinstance(action, Leave):
            screen.update_message(leave_thread_pager(info, context.store, action.tag_groups))
            return info.need_refresh_index, info.search_history, screen
