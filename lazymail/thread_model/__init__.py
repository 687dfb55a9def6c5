"""Thread model: message types, tree flattening, tag deltas, and line drawing."""

from .build import (
    REPLY_MARKERS,
    build_thread_lines,
    canonicalise_subject,
    clean_email_address,
    filter_unwanted_messages,
)
from .layout import MAX_THREAD_LINES, compute_num_rows
from .reldate import RELDATE_WIDTH, local_nowish, make_reldate
from .rendering import draw_separator, draw_thread_line, graphic_to_char
from .tags import (
    TagDeltas,
    TagGroups,
    apply_tag_changes,
    create_tag_delta_map,
    divide_tag_deltas,
    get_cached_flags,
    get_tag_delta_groups,
    restore_tag_deltas,
    set_line_read,
    set_line_unread,
    tag_delta_set,
    with_tags,
)
from .types import (
    DELETED_TAG,
    DRAFT_TAG,
    FLAGGED_TAG,
    REPLIED_TAG,
    UNREAD_TAG,
    Graphic,
    Headers,
    Message,
    Part,
    ThreadLine,
)

__all__ = [
    "DELETED_TAG",
    "DRAFT_TAG",
    "FLAGGED_TAG",
    "Graphic",
    "Headers",
    "MAX_THREAD_LINES",
    "Message",
    "Part",
    "RELDATE_WIDTH",
    "REPLIED_TAG",
    "REPLY_MARKERS",
    "TagDeltas",
    "TagGroups",
    "ThreadLine",
    "UNREAD_TAG",
    "apply_tag_changes",
    "build_thread_lines",
    "canonicalise_subject",
    "clean_email_address",
    "compute_num_rows",
    "create_tag_delta_map",
    "divide_tag_deltas",
    "draw_separator",
    "draw_thread_line",
    "filter_unwanted_messages",
    "get_cached_flags",
    "get_tag_delta_groups",
    "graphic_to_char",
    "local_nowish",
    "make_reldate",
    "restore_tag_deltas",
    "set_line_read",
    "set_line_unread",
    "tag_delta_set",
    "with_tags",
]
