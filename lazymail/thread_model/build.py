"""Thread-tree flattening.

Turns a forest of reply trees into ``ThreadLine`` rows in depth-first
pre-order, computing the tree-drawing cells, the cleaned sender, and whether
the subject repeats the previous line's.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from .reldate import make_reldate
from .types import DRAFT_TAG, Graphic, Message, ThreadLine

REPLY_MARKERS = frozenset({"Re:", "RE:", "R:", "Aw:", "AW:", "Vs:", "VS:", "Sv:", "SV:"})


def canonicalise_subject(subject: str) -> list[str]:
    """Return subject words with reply markers removed, order preserved."""
    return [word for word in subject.split() if word not in REPLY_MARKERS]


def clean_email_address(orig: str) -> str:
    """Drop a trailing `` <addr>`` from a From header, keeping the display name."""
    index = orig.rfind("<")
    if index > 0 and orig[index - 1] == " ":
        return orig[: index - 1]
    return orig


def filter_unwanted_messages(messages: Sequence[Message]) -> list[Message]:
    """Drop draft messages from the forest.

    Replies below a dropped draft are filtered on their own and take the
    draft's place among its siblings.
    """
    kept: list[Message] = []
    for message in messages:
        replies = tuple(filter_unwanted_messages(message.replies))
        if DRAFT_TAG in message.tags:
            kept.extend(replies)
        else:
            kept.append(replace(message, replies=replies))
    return kept


def last_subject(message: Message) -> str:
    """Subject of the last message drawn under ``message`` (itself if no replies)."""
    while message.replies:
        message = message.replies[-1]
    return message.headers.subject


def make_thread_line(
    nowish: datetime,
    message: Message,
    parent_id: str | None,
    graphics: Sequence[Graphic],
    prev_subject: str,
) -> ThreadLine:
    tags = frozenset(message.tags)
    subject = message.headers.subject
    if canonicalise_subject(subject) == canonicalise_subject(prev_subject):
        shown_subject = None
    else:
        shown_subject = subject
    return ThreadLine(
        message=message,
        parent_id=parent_id,
        clean_from=clean_email_address(message.headers.from_),
        prev_tags=tags,
        curr_tags=tags,
        graphics=tuple(graphics),
        reldate=make_reldate(nowish, message.timestamp),
        subject=shown_subject,
    )


def _not_blank_at_column(graphics: Sequence[Graphic], column: int) -> bool:
    return 0 <= column < len(graphics) and graphics[column] is not Graphic.BLANK


def _append_messages(
    nowish: datetime,
    above: list[Graphic],
    below: Sequence[Graphic],
    parent_id: str | None,
    messages: Sequence[Message],
    prev_subject: str,
    out: list[ThreadLine],
) -> None:
    if not messages:
        return
    message, following = messages[0], messages[1:]

    following_lines: list[ThreadLine] = []
    if not following:
        out.append(make_thread_line(nowish, message, parent_id, above + [Graphic.ELL], prev_subject))
        below_here = below
    else:
        out.append(make_thread_line(nowish, message, parent_id, above + [Graphic.TEE], prev_subject))
        _append_messages(
            nowish,
            above,
            below,
            parent_id,
            following,
            last_subject(message),
            following_lines,
        )
        below_here = following_lines[0].graphics

    # The column under this node continues only if the next sibling draws something there.
    if _not_blank_at_column(below_here, len(above)):
        child_above = above + [Graphic.VERT]
    else:
        child_above = above + [Graphic.BLANK]

    _append_messages(
        nowish,
        child_above,
        below_here,
        message.message_id,
        message.replies,
        message.headers.subject,
        out,
    )
    out.extend(following_lines)


def build_thread_lines(messages: Sequence[Message], nowish: datetime) -> list[ThreadLine]:
    """Flatten ``messages`` into thread lines in depth-first pre-order."""
    lines: list[ThreadLine] = []
    _append_messages(nowish, [], [], None, messages, "", lines)
    return lines
