from __future__ import annotations

import unittest
from datetime import datetime, timezone

from lazymail.thread_model import (
    Graphic,
    build_thread_lines,
    canonicalise_subject,
    clean_email_address,
    compute_num_rows,
    filter_unwanted_messages,
    make_reldate,
)
from thread_fixtures import NOWISH, make_message

B, V, T, L = Graphic.BLANK, Graphic.VERT, Graphic.TEE, Graphic.ELL


def _utc(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


class BuildThreadLinesTests(unittest.TestCase):
    def test_reply_chain_graphics_and_subject_suppression(self) -> None:
        c = make_message("c", "Re: Meeting")
        b = make_message("b", "Re: Meeting", tags=("unread",), replies=(c,))
        a = make_message("a", "Meeting", replies=(b,))

        lines = build_thread_lines([a], NOWISH)

        self.assertEqual([line.message_id for line in lines], ["a", "b", "c"])
        self.assertEqual(lines[0].graphics, (L,))
        self.assertEqual(lines[1].graphics, (B, L))
        self.assertEqual(lines[2].graphics, (B, B, L))
        self.assertEqual([line.subject for line in lines], ["Meeting", None, None])
        self.assertEqual([line.unread for line in lines], [False, True, False])
        self.assertEqual([line.parent_id for line in lines], [None, "a", "b"])

    def test_sibling_subtree_draws_vertical_continuation(self) -> None:
        d = make_message("d", "x")
        b = make_message("b", "x", replies=(d,))
        c = make_message("c", "x")
        a = make_message("a", "x", replies=(b, c))

        lines = build_thread_lines([a], NOWISH)

        self.assertEqual([line.message_id for line in lines], ["a", "b", "d", "c"])
        self.assertEqual(
            [line.graphics for line in lines],
            [(L,), (B, T), (B, V, L), (B, L)],
        )

    def test_multiple_roots_use_tee_until_last(self) -> None:
        lines = build_thread_lines([make_message("a", "one"), make_message("b", "two")], NOWISH)
        self.assertEqual([line.graphics for line in lines], [(T,), (L,)])
        self.assertEqual([line.parent_id for line in lines], [None, None])

    def test_next_sibling_compares_against_deepest_last_reply(self) -> None:
        d = make_message("d", "Other")
        b = make_message("b", "Re: Start", replies=(d,))
        c = make_message("c", "Other")
        a = make_message("a", "Start", replies=(b, c))

        lines = build_thread_lines([a], NOWISH)

        subjects = {line.message_id: line.subject for line in lines}
        self.assertEqual(subjects, {"a": "Start", "b": None, "d": "Other", "c": None})

    def test_line_fields(self) -> None:
        message = make_message("a", "Hi", from_="Alice Example <alice@example.com>", tags=("flagged", "replied"))
        (line,) = build_thread_lines([message], NOWISH)
        self.assertEqual(line.clean_from, "Alice Example")
        self.assertEqual(line.reldate, "Yest 22:13")
        self.assertEqual(line.prev_tags, frozenset({"flagged", "replied"}))
        self.assertEqual(line.curr_tags, line.prev_tags)
        self.assertTrue(line.flagged)
        self.assertTrue(line.replied)
        self.assertFalse(line.deleted)

    def test_empty_forest(self) -> None:
        self.assertEqual(build_thread_lines([], NOWISH), [])


class SubjectAndAddressTests(unittest.TestCase):
    def test_canonicalise_subject_drops_reply_markers(self) -> None:
        self.assertEqual(canonicalise_subject("Re: AW: Hello  world"), ["Hello", "world"])
        self.assertEqual(canonicalise_subject("SV: Vs: R: RE: x"), ["x"])

    def test_canonicalise_subject_is_case_and_order_sensitive(self) -> None:
        self.assertEqual(canonicalise_subject("re: Hello"), ["re:", "Hello"])
        self.assertNotEqual(canonicalise_subject("world Hello"), canonicalise_subject("Hello world"))

    def test_clean_email_address(self) -> None:
        self.assertEqual(clean_email_address("Alice <alice@example.com>"), "Alice")
        self.assertEqual(clean_email_address("<alice@example.com>"), "<alice@example.com>")
        self.assertEqual(clean_email_address("Alice<alice@example.com>"), "Alice<alice@example.com>")
        self.assertEqual(clean_email_address("alice@example.com"), "alice@example.com")


class FilterUnwantedMessagesTests(unittest.TestCase):
    def test_draft_replies_take_the_drafts_place(self) -> None:
        e = make_message("e")
        draft = make_message("d", tags=("draft",), replies=(e,))
        f = make_message("f")
        a = make_message("a", replies=(draft, f))

        (root,) = filter_unwanted_messages([a])

        self.assertEqual([reply.message_id for reply in root.replies], ["e", "f"])

    def test_top_level_draft_is_dropped(self) -> None:
        b = make_message("b")
        draft = make_message("d", tags=("draft", "unread"), replies=(b,))
        kept = filter_unwanted_messages([draft, make_message("c")])
        self.assertEqual([message.message_id for message in kept], ["b", "c"])

    def test_non_drafts_are_untouched(self) -> None:
        a = make_message("a", replies=(make_message("b"),))
        self.assertEqual(filter_unwanted_messages([a]), [a])


class ComputeNumRowsTests(unittest.TestCase):
    def test_thread_region_takes_a_third(self) -> None:
        self.assertEqual(compute_num_rows(24, 20), (7, 16))

    def test_thread_region_is_capped(self) -> None:
        self.assertEqual(compute_num_rows(40, 20), (8, 31))
        self.assertEqual(compute_num_rows(24, 2), (2, 21))

    def test_tiny_terminals(self) -> None:
        self.assertEqual(compute_num_rows(4, 5), (1, 2))
        self.assertEqual(compute_num_rows(0, 3), (1, 0))


class RelativeDateTests(unittest.TestCase):
    def test_recent_dates(self) -> None:
        self.assertEqual(make_reldate(NOWISH, _utc(2023, 11, 15, 9, 30)), "Today 09:30")
        self.assertEqual(make_reldate(NOWISH, _utc(2023, 11, 14, 23, 59)), "Yest 23:59")
        self.assertEqual(make_reldate(NOWISH, _utc(2023, 11, 12, 8, 0)), "Sun 08:00")

    def test_older_dates(self) -> None:
        self.assertEqual(make_reldate(NOWISH, _utc(2023, 3, 5, 10, 0)), "Mar 05 10:00")
        self.assertEqual(make_reldate(NOWISH, _utc(2022, 12, 31, 10, 0)), "Dec 31 2022")


if __name__ == "__main__":
    unittest.main()
