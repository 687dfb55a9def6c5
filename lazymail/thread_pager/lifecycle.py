"""Creating, resizing, reopening and leaving a thread pager.

These functions own the transitions that touch the notmuch store: the initial
fetch, the refetch on refresh (replaying unsaved tag edits onto the fresh
tags), and the batched tag commit when the user leaves.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Protocol

from ..message_update import MessageUpdate
from ..notmuch.errors import NotmuchError
from ..pager import MessagePager, SearchKind
from ..scrollable import Scrollable
from ..thread_model.build import build_thread_lines, filter_unwanted_messages
from ..thread_model.layout import compute_num_rows
from ..thread_model.reldate import local_nowish
from ..thread_model.tags import (
    TagGroups,
    apply_tag_changes,
    create_tag_delta_map,
    divide_tag_deltas,
    restore_tag_deltas,
    with_tags,
)
from ..thread_model.types import Message, Part
from .controller import skip_to_search, skip_to_unread, sync_thread_to_pager
from .state import History, ThreadPagerInfo

logger = logging.getLogger(__name__)

TAG_FORMAT_WARNING = "Tags must be of the form +tag or -tag."
COMMIT_FAILED_WARNING = "Encountered problems while applying tags."


class ThreadStore(Protocol):
    def show_thread(self, thread_id: str) -> list[Message]: ...

    def tag_messages(self, tokens, message_ids) -> None: ...

    def expand_part(self, message_id: str, part_id: int, filter_command: str | None = None) -> str: ...


def showing_message(count: int) -> MessageUpdate:
    return MessageUpdate.info(f"Showing {count} messages.")


# Fetching


def expand_copious_output(
    store: ThreadStore,
    message: Message,
    part_filters: dict[str, str],
) -> Message:
    """Fill in parts notmuch did not inline when a filter is configured for their type."""
    body = []
    for part in message.body:
        command = part_filters.get(part.content_type)
        if part.content is None and command:
            try:
                content = store.expand_part(part.message_id, part.part_id, command)
            except NotmuchError as exc:
                logger.warning("cannot expand part %d of %s: %s", part.part_id, part.message_id, exc)
                content = f"({exc})"
            part = replace(part, content=content)
        body.append(part)
    replies = tuple(expand_copious_output(store, reply, part_filters) for reply in message.replies)
    return replace(message, body=tuple(body), replies=replies)


def fetch_thread(
    store: ThreadStore,
    thread_id: str,
    part_filters: dict[str, str] | None = None,
) -> list[Message]:
    """Fetch a thread without drafts; raises ``NotmuchError`` on failure."""
    messages = filter_unwanted_messages(store.show_thread(thread_id))
    if part_filters:
        messages = [expand_copious_output(store, message, part_filters) for message in messages]
    return messages


# Setup


def _build_info(
    thread_id: str,
    nowish: datetime,
    rows: int,
    cols: int,
    messages: list[Message],
    *,
    colour: bool,
) -> ThreadPagerInfo:
    lines = build_thread_lines(messages, nowish)
    scrollable = Scrollable.with_cursor(lines)
    num_thread_rows, num_pager_rows = compute_num_rows(rows, scrollable.num_lines)
    return ThreadPagerInfo(
        thread_id=thread_id,
        scrollable=scrollable,
        num_thread_rows=num_thread_rows,
        pager=MessagePager(messages, cols, colour=colour),
        num_pager_rows=num_pager_rows,
        cols=cols,
    )


def position_at_first_unread(info: ThreadPagerInfo) -> None:
    """Leave the cursor on the first line if it is unread, else jump to the first unread line."""
    first = info.cursor_line()
    if first is not None and first.unread:
        return
    skip_to_unread(info)


def setup_thread_pager(
    thread_id: str,
    nowish: datetime,
    rows: int,
    cols: int,
    messages: list[Message],
    *,
    search_history: History | None = None,
    tag_history: History | None = None,
    colour: bool = True,
) -> tuple[ThreadPagerInfo, int]:
    """Build pager state for already-fetched messages.

    ``rows`` is the number of screen rows available to the thread region,
    separator and pager together.
    """
    info = _build_info(thread_id, nowish, rows, cols, messages, colour=colour)
    if search_history is not None:
        info.search_history = search_history
    if tag_history is not None:
        info.tag_history = tag_history
    position_at_first_unread(info)
    return info, info.num_lines


def create_thread_pager(
    store: ThreadStore,
    thread_id: str,
    rows: int,
    cols: int,
    *,
    nowish: datetime | None = None,
    part_filters: dict[str, str] | None = None,
    colour: bool = True,
) -> tuple[ThreadPagerInfo, int]:
    messages = fetch_thread(store, thread_id, part_filters)
    logger.info("opened thread %s", thread_id)
    return setup_thread_pager(
        thread_id,
        nowish or local_nowish(),
        rows,
        cols,
        messages,
        colour=colour,
    )


def resize_thread_pager(info: ThreadPagerInfo, rows: int, cols: int | None = None) -> None:
    """Recompute row allocation for a new screen height and re-centre the cursor."""
    info.num_thread_rows, info.num_pager_rows = compute_num_rows(rows, info.num_lines)
    cursor = info.scrollable.cursor
    if cursor is not None:
        info.scrollable.set_cursor_centred(cursor, info.num_thread_rows)
    if cols is not None:
        info.cols = cols


def reopen_thread_pager(
    info: ThreadPagerInfo,
    store: ThreadStore,
    rows: int,
    cols: int,
    *,
    nowish: datetime | None = None,
    part_filters: dict[str, str] | None = None,
    colour: bool = True,
) -> tuple[ThreadPagerInfo, int]:
    """Refetch the thread, keeping unsaved tag edits and the reading position.

    Edits recorded against the old lines are replayed (removals first) onto
    the freshly fetched tags. If the old cursor message still exists the
    pager returns to it at the same offset; otherwise the new view starts at
    the first unread message.
    """
    messages = fetch_thread(store, info.thread_id, part_filters)
    new_info = _build_info(info.thread_id, nowish or local_nowish(), rows, cols, messages, colour=colour)

    delta_map = create_tag_delta_map(info.scrollable.lines)
    if delta_map:
        new_info.scrollable.map_lines(lambda line: restore_tag_deltas(delta_map, line))

    old_line = info.cursor_line()
    still_present = old_line is not None and (
        new_info.scrollable.search_forward(lambda line: line.message_id == old_line.message_id, 0)
        is not None
    )
    if still_present:
        new_info.pager.skip_to_message(old_line.message_id)
        offset = info.pager.get_top_offset()
        if offset:
            new_info.pager.scroll_but_stop_at_message(new_info.num_pager_rows, offset)
        sync_thread_to_pager(new_info)
    else:
        position_at_first_unread(new_info)

    new_info.search = info.search
    new_info.search_history = info.search_history
    new_info.tag_history = info.tag_history
    new_info.need_refresh_index = info.need_refresh_index
    logger.info("reopened thread %s with %d edited messages", info.thread_id, len(delta_map))
    return new_info, new_info.num_lines


# Prompt results


def apply_tag_edit(info: ThreadPagerInfo, text: str) -> MessageUpdate:
    """Apply ``+tag``/``-tag`` words typed at the tag prompt to the cursor line."""
    words = text.split()
    if not words:
        return MessageUpdate.no_change()
    info.tag_history.add_nodup(text)
    deltas = divide_tag_deltas(words)
    if deltas is None:
        return MessageUpdate.warning(TAG_FORMAT_WARNING)
    line = info.cursor_line()
    if line is None:
        return MessageUpdate.no_change()
    add, remove = deltas
    info.scrollable.set_cursor_line(with_tags(line, apply_tag_changes(line.curr_tags, add, remove)))
    return MessageUpdate.no_change()


def apply_search(info: ThreadPagerInfo, text: str) -> MessageUpdate:
    """Start a new search; empty input clears the current search."""
    if text == "":
        info.search = None
        return MessageUpdate.no_change()
    info.search_history.add_nodup(text)
    info.search = text
    return skip_to_search(info, SearchKind.NEW)


# Leaving


def commit_tag_groups(store: ThreadStore, groups: TagGroups) -> bool:
    """Run one tag command per delta group; ``False`` if any of them failed."""
    ok = True
    for delta_set, message_ids in groups.items():
        try:
            store.tag_messages(sorted(delta_set), message_ids)
        except NotmuchError as exc:
            logger.error("tagging %s with %s failed: %s", message_ids, sorted(delta_set), exc)
            ok = False
    return ok


def leave_thread_pager(info: ThreadPagerInfo, store: ThreadStore, groups: TagGroups) -> MessageUpdate:
    """Commit pending tag edits; the index view needs a refresh whenever there were any."""
    if not groups:
        return MessageUpdate.no_change()
    ok = commit_tag_groups(store, groups)
    info.need_refresh_index = True
    if ok:
        return MessageUpdate.clear()
    return MessageUpdate.warning(COMMIT_FAILED_WARNING)


def part_save_name(part: Part) -> str:
    """Default file name offered when saving a part."""
    if part.filename:
        return part.filename
    return f"{part.message_id}.part_{part.part_id}"
