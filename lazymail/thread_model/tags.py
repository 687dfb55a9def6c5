"""Tag-delta tracking for thread lines.

A line's delta is the difference between the tags it was loaded with and its
current tags. Deltas group lines into commit batches and replay onto freshly
fetched tags after a reopen. Removals are always applied before additions,
matching ``notmuch tag`` semantics.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from .types import FLAGGED_TAG, UNREAD_TAG, DELETED_TAG, REPLIED_TAG, ThreadLine

TagDeltaSet = frozenset[str]
TagGroups = dict[TagDeltaSet, list[str]]


@dataclass(frozen=True)
class TagDeltas:
    add: frozenset[str]
    remove: frozenset[str]


def get_cached_flags(tags: Iterable[str]) -> tuple[bool, bool, bool, bool]:
    """Return ``(unread, replied, deleted, flagged)`` for a tag collection."""
    tag_set = frozenset(tags)
    return (
        UNREAD_TAG in tag_set,
        REPLIED_TAG in tag_set,
        DELETED_TAG in tag_set,
        FLAGGED_TAG in tag_set,
    )


def apply_tag_changes(
    tags: Iterable[str],
    add: Iterable[str],
    remove: Iterable[str],
) -> frozenset[str]:
    """Remove ``remove`` then add ``add``."""
    return (frozenset(tags) - frozenset(remove)) | frozenset(add)


def with_tags(line: ThreadLine, tags: Iterable[str]) -> ThreadLine:
    return replace(line, curr_tags=frozenset(tags))


def set_line_read(line: ThreadLine) -> ThreadLine:
    return with_tags(line, line.curr_tags - {UNREAD_TAG})


def set_line_unread(line: ThreadLine) -> ThreadLine:
    return with_tags(line, line.curr_tags | {UNREAD_TAG})


def line_tag_deltas(line: ThreadLine) -> TagDeltas | None:
    """Return the add/remove sets for ``line`` or ``None`` when unchanged."""
    add = line.curr_tags - line.prev_tags
    remove = line.prev_tags - line.curr_tags
    if not add and not remove:
        return None
    return TagDeltas(add=add, remove=remove)


def tag_delta_set(line: ThreadLine) -> TagDeltaSet:
    """Return signed ``+tag``/``-tag`` tokens describing the line's edits."""
    add = line.curr_tags - line.prev_tags
    remove = line.prev_tags - line.curr_tags
    return frozenset({f"+{tag}" for tag in add} | {f"-{tag}" for tag in remove})


def get_tag_delta_groups(lines: Iterable[ThreadLine]) -> TagGroups:
    """Group message ids by their exact delta set, skipping unchanged lines."""
    groups: TagGroups = {}
    for line in lines:
        delta_set = tag_delta_set(line)
        if not delta_set:
            continue
        groups.setdefault(delta_set, []).append(line.message_id)
    return groups


def create_tag_delta_map(lines: Iterable[ThreadLine]) -> dict[str, TagDeltas]:
    """Map message id to deltas for every edited line."""
    delta_map: dict[str, TagDeltas] = {}
    for line in lines:
        deltas = line_tag_deltas(line)
        if deltas is not None:
            delta_map[line.message_id] = deltas
    return delta_map


def restore_tag_deltas(delta_map: dict[str, TagDeltas], line: ThreadLine) -> ThreadLine:
    """Replay a recorded delta onto ``line``'s current (freshly fetched) tags."""
    deltas = delta_map.get(line.message_id)
    if deltas is None:
        return line
    return with_tags(line, apply_tag_changes(line.curr_tags, deltas.add, deltas.remove))


def divide_tag_deltas(words: Sequence[str]) -> tuple[frozenset[str], frozenset[str]] | None:
    """Split ``+tag``/``-tag`` words into add and remove sets.

    Returns ``None`` when any word lacks a sign or names an empty tag.
    """
    add: set[str] = set()
    remove: set[str] = set()
    for word in words:
        sign, tag = word[:1], word[1:]
        if not tag:
            return None
        if sign == "+":
            add.add(tag)
        elif sign == "-":
            remove.add(tag)
        else:
            return None
    return frozenset(add), frozenset(remove)
