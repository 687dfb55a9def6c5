from __future__ import annotations

import unittest

from lazymail.thread_model import (
    apply_tag_changes,
    build_thread_lines,
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
from lazymail.thread_model.tags import TagDeltas, line_tag_deltas
from thread_fixtures import NOWISH, make_message


def _line(message_id: str, tags=()):
    (line,) = build_thread_lines([make_message(message_id, tags=tuple(tags))], NOWISH)
    return line


class TagChangeTests(unittest.TestCase):
    def test_removal_happens_before_addition(self) -> None:
        self.assertEqual(apply_tag_changes({"a", "b"}, add={"a"}, remove={"a", "b"}), frozenset({"a"}))

    def test_cached_flags(self) -> None:
        self.assertEqual(get_cached_flags(["unread", "flagged"]), (True, False, False, True))
        self.assertEqual(get_cached_flags([]), (False, False, False, False))

    def test_flags_follow_current_tags(self) -> None:
        line = _line("a", ["unread"])
        read = set_line_read(line)
        self.assertFalse(read.unread)
        self.assertEqual(read.prev_tags, frozenset({"unread"}))
        self.assertTrue(set_line_unread(read).unread)
        flagged = with_tags(line, {"flagged", "deleted", "replied"})
        self.assertEqual(
            (flagged.unread, flagged.replied, flagged.deleted, flagged.flagged),
            (False, True, True, True),
        )


class TagDeltaTests(unittest.TestCase):
    def test_unchanged_line_has_empty_delta(self) -> None:
        line = _line("a", ["unread", "inbox"])
        self.assertEqual(tag_delta_set(line), frozenset())
        self.assertIsNone(line_tag_deltas(line))
        self.assertEqual(get_tag_delta_groups([line]), {})

    def test_delta_set_is_signed(self) -> None:
        line = with_tags(_line("a", ["unread", "inbox"]), {"inbox", "flagged"})
        self.assertEqual(tag_delta_set(line), frozenset({"+flagged", "-unread"}))
        self.assertEqual(
            line_tag_deltas(line),
            TagDeltas(add=frozenset({"flagged"}), remove=frozenset({"unread"})),
        )

    def test_groups_partition_edited_lines_in_line_order(self) -> None:
        lines = [_line(message_id, ["unread"]) for message_id in "abcdef"]
        edited = [
            with_tags(lines[0], {"unread", "flagged"}),
            set_line_read(lines[1]),
            with_tags(lines[2], {"unread", "flagged"}),
            lines[3],
            with_tags(lines[4], {"unread", "flagged"}),
            set_line_read(lines[5]),
        ]

        groups = get_tag_delta_groups(edited)

        self.assertEqual(
            groups,
            {
                frozenset({"+flagged"}): ["a", "c", "e"],
                frozenset({"-unread"}): ["b", "f"],
            },
        )

    def test_restore_replays_delta_onto_fresh_tags(self) -> None:
        old = with_tags(_line("a", ["unread"]), {"unread", "flagged"})
        delta_map = create_tag_delta_map([old, _line("b")])
        self.assertEqual(list(delta_map), ["a"])

        fresh = _line("a")
        restored = restore_tag_deltas(delta_map, fresh)

        self.assertEqual(restored.curr_tags, frozenset({"flagged"}))
        self.assertEqual(restored.prev_tags, frozenset())
        self.assertTrue(restored.flagged)
        self.assertFalse(restored.unread)

    def test_restore_leaves_untracked_lines_alone(self) -> None:
        line = _line("z", ["inbox"])
        self.assertIs(restore_tag_deltas({}, line), line)


class DivideTagDeltasTests(unittest.TestCase):
    def test_signed_words(self) -> None:
        self.assertEqual(
            divide_tag_deltas(["+flagged", "-unread", "+todo"]),
            (frozenset({"flagged", "todo"}), frozenset({"unread"})),
        )
        self.assertEqual(divide_tag_deltas([]), (frozenset(), frozenset()))

    def test_rejects_unsigned_or_empty_tags(self) -> None:
        self.assertIsNone(divide_tag_deltas(["flagged"]))
        self.assertIsNone(divide_tag_deltas(["+ok", "-"]))
        self.assertIsNone(divide_tag_deltas(["+"]))


if __name__ == "__main__":
    unittest.main()
