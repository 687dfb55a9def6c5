"""Key interpretation for the thread pager.

``thread_pager_input`` maps one key token onto the thread list and the
message pager, keeps the two views in sync, and tells the event loop what to
do next. Every handler returns ``(action, message_update)``.
"""

from __future__ import annotations

from ..input.key_registry import KeyComboBinding, KeyComboRegistry
from ..message_update import MessageUpdate
from ..pager import SearchKind
from ..thread_model.tags import get_tag_delta_groups, set_line_read, set_line_unread, with_tags
from ..thread_model.types import DELETED_TAG, FLAGGED_TAG, ThreadLine
from .actions import (
    Continue,
    Leave,
    PromptOpenPart,
    PromptOpenUrl,
    PromptSavePart,
    PromptSearch,
    PromptTag,
    RefreshResults,
    ReplyKind,
    Resize,
    StartReply,
    ThreadPagerAction,
)
from .state import ThreadPagerInfo

RESIZE_KEY = "RESIZE"
MAX_BRACKET_SCROLL = 15

InputResult = tuple[ThreadPagerAction, MessageUpdate]


def _is_message(message_id: str):
    return lambda line: line.message_id == message_id


def _is_unread_line(line: ThreadLine) -> bool:
    return line.unread


# View synchronisation


def sync_thread_to_pager(info: ThreadPagerInfo) -> None:
    """Centre the thread cursor on the message at the top of the pager."""
    message = info.pager.get_top_message()
    if message is None:
        return
    found = info.scrollable.search_forward(_is_message(message.message_id), 0)
    if found is None:
        return
    info.scrollable.set_cursor_centred(found[0], info.num_thread_rows)


def _after_pager_move(info: ThreadPagerInfo, update: MessageUpdate) -> MessageUpdate:
    sync_thread_to_pager(info)
    return update


# Pager movement


def next_message(info: ThreadPagerInfo) -> MessageUpdate:
    return _after_pager_move(info, info.pager.next_message())


def prev_message(info: ThreadPagerInfo) -> MessageUpdate:
    return _after_pager_move(info, info.pager.prev_message())


def scroll(info: ThreadPagerInfo, delta: int) -> MessageUpdate:
    return _after_pager_move(info, info.pager.scroll(info.num_pager_rows, delta))


def scroll_but_stop_at_message(info: ThreadPagerInfo, delta: int) -> MessageUpdate:
    return _after_pager_move(info, info.pager.scroll_but_stop_at_message(info.num_pager_rows, delta))


def goto_first_message(info: ThreadPagerInfo) -> None:
    info.pager.goto_first_message()
    sync_thread_to_pager(info)


def goto_end(info: ThreadPagerInfo) -> None:
    info.pager.goto_end(info.num_pager_rows)
    sync_thread_to_pager(info)


def skip_quoted_text(info: ThreadPagerInfo) -> MessageUpdate:
    return _after_pager_move(info, info.pager.skip_quoted_text())


# Thread list jumps


def goto_parent_message(info: ThreadPagerInfo) -> MessageUpdate:
    found = info.scrollable.get_cursor_line()
    if found is None:
        return MessageUpdate.clear()
    cursor, line = found
    parent_id = line.parent_id
    index = None if parent_id is None else info.scrollable.search_reverse(_is_message(parent_id), cursor)
    if index is None:
        return MessageUpdate.warning("Message has no parent.")
    info.scrollable.set_cursor_centred(index, info.num_thread_rows)
    info.pager.skip_to_message(parent_id)
    return MessageUpdate.clear()


def skip_to_unread(info: ThreadPagerInfo) -> MessageUpdate:
    """Move both views to the next unread line after the cursor."""
    cursor = info.scrollable.cursor
    found = None if cursor is None else info.scrollable.search_forward(_is_unread_line, cursor + 1)
    if found is None:
        return MessageUpdate.warning("No more unread messages.")
    index, line = found
    info.scrollable.set_cursor_centred(index, info.num_thread_rows)
    info.pager.skip_to_message(line.message_id)
    return MessageUpdate.clear()


def skip_to_search(info: ThreadPagerInfo, kind: SearchKind) -> MessageUpdate:
    if info.search is None:
        return MessageUpdate.warning("No search string.")
    update = info.pager.skip_to_search(info.num_pager_rows, kind, info.search)
    return _after_pager_move(info, update)


# Tag edits on the thread list


def _update_cursor_line(info: ThreadPagerInfo, edit) -> None:
    line = info.cursor_line()
    if line is not None:
        info.scrollable.set_cursor_line(edit(line))


def set_current_line_read(info: ThreadPagerInfo) -> None:
    _update_cursor_line(info, set_line_read)


def toggle_unread(info: ThreadPagerInfo) -> None:
    _update_cursor_line(info, lambda line: set_line_read(line) if line.unread else set_line_unread(line))


def toggle_flagged(info: ThreadPagerInfo) -> None:
    def edit(line: ThreadLine) -> ThreadLine:
        if line.flagged:
            return with_tags(line, line.curr_tags - {FLAGGED_TAG})
        return with_tags(line, line.curr_tags | {FLAGGED_TAG})

    _update_cursor_line(info, edit)


def set_deleted(info: ThreadPagerInfo, deleted: bool) -> None:
    def edit(line: ThreadLine) -> ThreadLine:
        if deleted:
            return with_tags(line, line.curr_tags | {DELETED_TAG})
        return with_tags(line, line.curr_tags - {DELETED_TAG})

    _update_cursor_line(info, edit)


def mark_preceding_read(info: ThreadPagerInfo) -> None:
    """Mark the cursor line and the unbroken run of unread lines above it as read."""
    index = info.scrollable.cursor
    if index is None:
        return
    while True:
        line = info.scrollable.get_line(index)
        if line is None or not line.unread:
            return
        info.scrollable.set_line(index, set_line_read(line))
        index -= 1


def mark_all_read(info: ThreadPagerInfo) -> None:
    info.scrollable.map_lines(set_line_read)


# Action-producing handlers


def _continue(update: MessageUpdate) -> InputResult:
    return Continue(), update


def _leave(info: ThreadPagerInfo) -> InputResult:
    return Leave(get_tag_delta_groups(info.scrollable.lines)), MessageUpdate.clear()


def _mark_all_and_leave(info: ThreadPagerInfo) -> InputResult:
    mark_all_read(info)
    return _leave(info)


def save_part(info: ThreadPagerInfo) -> InputResult:
    part = info.pager.get_highlighted_part()
    if part is not None:
        return PromptSavePart(part), MessageUpdate.clear()
    return Continue(), MessageUpdate.warning("No message or attachment selected.")


def open_part(info: ThreadPagerInfo) -> InputResult:
    part = info.pager.get_highlighted_part()
    if part is not None:
        return PromptOpenPart(part), MessageUpdate.clear()
    url = info.pager.get_highlighted_url()
    if url is not None:
        return PromptOpenUrl(url), MessageUpdate.clear()
    return Continue(), MessageUpdate.warning("No message or attachment selected.")


def reply(info: ThreadPagerInfo, kind: ReplyKind) -> InputResult:
    message = info.pager.get_top_message()
    if message is None:
        return Continue(), MessageUpdate.warning("Nothing to reply to.")
    return StartReply(message, kind), MessageUpdate.clear()


def _bracket_delta(info: ThreadPagerInfo) -> int:
    return min(MAX_BRACKET_SCROLL, info.num_pager_rows - 1)


def _page_delta(info: ThreadPagerInfo) -> int:
    return max(0, info.num_pager_rows - 1)


def _then_next(edit):
    def handler(info: ThreadPagerInfo) -> InputResult:
        edit(info)
        return _continue(next_message(info))

    return handler


def _then_prev(edit):
    def handler(info: ThreadPagerInfo) -> InputResult:
        edit(info)
        return _continue(prev_message(info))

    return handler


def _cleared(effect):
    def handler(info: ThreadPagerInfo) -> InputResult:
        effect(info)
        return _continue(MessageUpdate.clear())

    return handler


def _build_registry() -> KeyComboRegistry[ThreadPagerInfo, InputResult]:
    def bind(combos: tuple[str, ...], handler) -> KeyComboBinding[ThreadPagerInfo, InputResult]:
        return KeyComboBinding(combos, handler)

    return KeyComboRegistry().register_bindings(
        bind(("j", "DOWN"), lambda info: _continue(next_message(info))),
        bind(("J",), _then_next(set_current_line_read)),
        bind(("k", "UP"), lambda info: _continue(prev_message(info))),
        bind(("K",), _then_prev(set_current_line_read)),
        bind(("ENTER_CR",), lambda info: _continue(scroll(info, 1))),
        bind(("\\",), lambda info: _continue(scroll(info, -1))),
        bind(("]",), lambda info: _continue(scroll_but_stop_at_message(info, _bracket_delta(info)))),
        bind(("[",), lambda info: _continue(scroll_but_stop_at_message(info, -_bracket_delta(info)))),
        bind((" ", "PAGE_DOWN"), lambda info: _continue(scroll_but_stop_at_message(info, _page_delta(info)))),
        bind(("b", "PAGE_UP"), lambda info: _continue(scroll_but_stop_at_message(info, -_page_delta(info)))),
        bind(("HOME",), _cleared(goto_first_message)),
        bind(("END",), _cleared(goto_end)),
        bind(("p",), lambda info: _continue(goto_parent_message(info))),
        bind(("S",), lambda info: _continue(skip_quoted_text(info))),
        bind(("TAB",), lambda info: _continue(skip_to_unread(info))),
        bind(("CTRL_R",), _then_next(mark_preceding_read)),
        bind(("N",), _then_next(toggle_unread)),
        bind(("d",), _then_next(lambda info: set_deleted(info, True))),
        bind(("u",), _cleared(lambda info: set_deleted(info, False))),
        bind(("F",), _cleared(toggle_flagged)),
        bind(("+",), lambda info: (PromptTag("+"), MessageUpdate.clear())),
        bind(("-",), lambda info: (PromptTag("-"), MessageUpdate.clear())),
        bind(("v",), lambda info: _continue(info.pager.highlight_part(info.num_pager_rows))),
        bind(("V",), lambda info: _continue(info.pager.highlight_url(info.num_pager_rows))),
        bind(("s",), save_part),
        bind(("o",), open_part),
        bind(("/",), lambda info: (PromptSearch(), MessageUpdate.clear())),
        bind(("n",), lambda info: _continue(skip_to_search(info, SearchKind.CONTINUE))),
        bind(("=",), lambda info: (RefreshResults(), MessageUpdate.clear())),
        bind(("i", "q"), _leave),
        bind(("I",), _mark_all_and_leave),
        bind(("r",), lambda info: reply(info, ReplyKind.DIRECT)),
        bind(("g",), lambda info: reply(info, ReplyKind.GROUP)),
        bind(("L",), lambda info: reply(info, ReplyKind.LIST)),
        bind((RESIZE_KEY,), lambda info: (Resize(), MessageUpdate.no_change())),
    )


_REGISTRY = _build_registry()


def thread_pager_input(key: str, info: ThreadPagerInfo) -> InputResult:
    """Apply one key to ``info`` and return the follow-up action and status update."""
    result = _REGISTRY.dispatch(key, info)
    if result is None:
        return Continue(), MessageUpdate.no_change()
    return result
